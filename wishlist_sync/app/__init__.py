"""Application layer: compare use case and config-driven controller."""

from .compare_service import CompareWishlistsOutput, CompareWishlistsUseCase
from .controller import configure_logging, load_exclusions, run_comparison

__all__ = [
    "CompareWishlistsOutput",
    "CompareWishlistsUseCase",
    "configure_logging",
    "load_exclusions",
    "run_comparison",
]
