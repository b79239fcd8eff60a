"""Normalizers turning raw inventories into canonical tokens and records."""

from .adapters import (
    AdaptedComponent,
    RawStyleValue,
    from_design_component,
    from_implementation_component,
    iter_raw_components,
)
from .token_normalizer import NormalizedInventory, TokenNormalizer

__all__ = [
    "AdaptedComponent",
    "RawStyleValue",
    "from_design_component",
    "from_implementation_component",
    "iter_raw_components",
    "NormalizedInventory",
    "TokenNormalizer",
]
