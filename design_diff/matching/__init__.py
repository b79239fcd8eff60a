"""Token and structural matching across design and implementation."""

from .color import color_confidence, color_distance, delta_e_matrix, rgb_to_lab
from .structural import StructuralMatcher
from .text import family_similarity, generic_font_class, levenshtein, similarity_ratio
from .token_matcher import TokenMatcher

__all__ = [
    "color_confidence",
    "color_distance",
    "delta_e_matrix",
    "rgb_to_lab",
    "StructuralMatcher",
    "family_similarity",
    "generic_font_class",
    "levenshtein",
    "similarity_ratio",
    "TokenMatcher",
]
