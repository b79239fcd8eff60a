"""Design/implementation comparison engine.

This package compares a design-source inventory (a design tool's node
graph) with an implementation-source inventory (computed styles of a
rendered page) and produces a severity-ranked diff.

Main components:
- tokens: Canonical token values and raw value parsers
- models: Component records, match results, discrepancies, results
- normalizers: Source adapters and the token normalizer
- matching: Token matcher (color, typography, spacing, shadow, radius)
  and structural component matcher
- classification: Rule-based atoms/molecules/organisms/layout classifier
- discrepancies: Severity and priority tagged discrepancy builder
- confidence: Confidence aggregation
- engine: The end-to-end comparison pipeline
- config: Configuration loading and validation
"""

from .classification import ClassificationError, ComponentClassifier
from .confidence import ConfidenceAggregator, confidence_level
from .config import ComparisonConfig, ConfigLoader, load_config
from .discrepancies import DiscrepancyBuilder
from .engine import ComparisonEngine, compare_inventories
from .matching import StructuralMatcher, TokenMatcher
from .models import (
    Classification,
    ComparisonResult,
    ComparisonSummary,
    ComponentFamily,
    ComponentMatch,
    ComponentRecord,
    ConfidenceReport,
    Discrepancy,
    Geometry,
    MatchResult,
    MatchStatus,
    Priority,
    Severity,
)
from .normalizers import TokenNormalizer
from .tokens import (
    ColorValue,
    Origin,
    ShadowValue,
    Token,
    TokenCategory,
    TokenSource,
    TypographyValue,
)

__version__ = "0.1.0"

__all__ = [
    # Engine
    "ComparisonEngine",
    "compare_inventories",
    # Pipeline stages
    "TokenNormalizer",
    "TokenMatcher",
    "ComponentClassifier",
    "ClassificationError",
    "StructuralMatcher",
    "DiscrepancyBuilder",
    "ConfidenceAggregator",
    "confidence_level",
    # Config
    "ComparisonConfig",
    "ConfigLoader",
    "load_config",
    # Tokens
    "TokenCategory",
    "Origin",
    "Token",
    "TokenSource",
    "ColorValue",
    "TypographyValue",
    "ShadowValue",
    # Models
    "Geometry",
    "ComponentFamily",
    "Classification",
    "ComponentRecord",
    "MatchStatus",
    "MatchResult",
    "ComponentMatch",
    "Severity",
    "Priority",
    "Discrepancy",
    "ConfidenceReport",
    "ComparisonSummary",
    "ComparisonResult",
]
