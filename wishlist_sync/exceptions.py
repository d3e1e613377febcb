#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Wishlist Sync - Consolidated Exception Classes

All project-specific exceptions live here. The comparison core itself never
raises; these are used by the configuration, storage and source-file layers.
"""

from datetime import datetime
from typing import Dict, Any, Optional


class BaseError(Exception):
    """Base class for all project-specific errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code or "ERROR"
        self.details = details or {}
        self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """Converts the exception to a dictionary for structured logging."""
        return {
            'error_code': self.error_code,
            'message': str(self),
            'details': self.details,
            'timestamp': self.timestamp.isoformat()
        }


# =====================================================================================================
# Configuration-related errors
# =====================================================================================================

class ConfigurationError(BaseError):
    """Base class for configuration errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 file_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        config_details = details or {}
        if file_path:
            config_details['file_path'] = str(file_path)
        super().__init__(message, error_code or "CONFIG_ERROR", config_details)


class ValidationError(ConfigurationError):
    """Raised when a value fails validation (config fields, exclusion entries)."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 expected_type: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        validation_details = details or {}
        if field_name:
            validation_details['field_name'] = field_name
        if expected_type:
            validation_details['expected_type'] = expected_type
        super().__init__(message, "VALIDATION_ERROR", None, validation_details)


# =====================================================================================================
# IO and data-related errors
# =====================================================================================================

class DataError(BaseError):
    """Base class for data-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code or "DATA_ERROR", details)


class FileOperationError(DataError):
    """Raised when reading or writing a data file fails."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 operation: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        file_details = details or {}
        if file_path:
            file_details['file_path'] = str(file_path)
        if operation:
            file_details['operation'] = operation
        super().__init__(message, "FILE_OP_ERROR", file_details)


class SourceFormatError(DataError):
    """Raised when a source title list does not have the expected shape."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 row_index: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None):
        source_details = details or {}
        if file_path:
            source_details['file_path'] = str(file_path)
        if row_index is not None:
            source_details['row_index'] = row_index
        super().__init__(message, "SOURCE_FORMAT_ERROR", source_details)


class ExclusionStoreError(DataError):
    """Raised when the exclusion registry cannot be loaded or saved."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 operation: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        store_details = details or {}
        if file_path:
            store_details['file_path'] = str(file_path)
        if operation:
            store_details['operation'] = operation
        super().__init__(message, "EXCLUSION_STORE_ERROR", store_details)
