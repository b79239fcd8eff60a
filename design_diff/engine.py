"""Comparison engine.

Runs the full pipeline on two raw inventories:

    normalize -> match tokens
              -> classify -> match components
    -> build discrepancies -> aggregate confidence

The engine is a pure function of its inputs and configuration; it keeps no
state between calls, so one instance may be shared across threads.
"""

import time
from typing import Any

from .classification import ComponentClassifier
from .confidence import ConfidenceAggregator
from .config import ComparisonConfig
from .diff_logging import LogCategory, get_category_logger
from .discrepancies import DiscrepancyBuilder
from .matching import StructuralMatcher, TokenMatcher
from .models import (
    ComparisonResult,
    ComparisonSummary,
    ComponentFamily,
    ComponentMatch,
    ComponentRecord,
    MatchResult,
    MatchStatus,
)
from .normalizers import NormalizedInventory, TokenNormalizer
from .tokens import CATEGORY_ORDER, Origin

logger = get_category_logger(LogCategory.ENGINE)


class ComparisonEngine:
    """Compares a design inventory against an implementation inventory."""

    def __init__(
        self,
        config: ComparisonConfig | None = None,
        classifier: ComponentClassifier | None = None,
    ):
        """Initialize the engine and its pipeline stages.

        Args:
            config: Comparison configuration; defaults apply when omitted.
            classifier: Custom classifier (e.g. with extra rules).
        """
        self.config = config or ComparisonConfig()
        self.normalizer = TokenNormalizer(self.config)
        self.token_matcher = TokenMatcher(self.config)
        self.classifier = classifier or ComponentClassifier()
        self.structural_matcher = StructuralMatcher(self.config)
        self.discrepancy_builder = DiscrepancyBuilder(self.config)
        self.aggregator = ConfidenceAggregator()

    def compare(
        self,
        design_inventory: Any,
        implementation_inventory: Any,
        created_at: str | None = None,
    ) -> ComparisonResult:
        """Compare two inventories.

        Args:
            design_inventory: Raw design-source inventory.
            implementation_inventory: Raw implementation-source inventory.
            created_at: ISO timestamp for discrepancy records. Pass a fixed
                value for byte-identical results across runs.

        Returns:
            A new ComparisonResult owned by the caller.
        """
        start_time = time.perf_counter()

        design = self.normalizer.normalize_inventory(design_inventory, Origin.DESIGN)
        implementation = self.normalizer.normalize_inventory(
            implementation_inventory, Origin.IMPLEMENTATION
        )

        token_matches = self.token_matcher.match_tokens(design.tokens, implementation.tokens)

        design_components = self.classifier.classify_all(design.components)
        implementation_components = self.classifier.classify_all(implementation.components)
        component_matches = self.structural_matcher.match_components(
            design_components, implementation_components
        )

        discrepancies = self.discrepancy_builder.build_discrepancies(
            token_matches, component_matches, created_at=created_at
        )
        confidence = self.aggregator.aggregate(token_matches, component_matches)
        summary = self.summarize(
            design,
            implementation,
            design_components,
            implementation_components,
            token_matches,
            component_matches,
        )

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"Compared {summary.total_components} components and "
            f"{len(design.tokens) + len(implementation.tokens)} tokens: "
            f"{len(discrepancies)} discrepancies, confidence {confidence.level}",
            extra={
                "duration_ms": round(duration_ms, 2),
                "operation": "compare",
                "component_count": summary.total_components,
                "token_count": len(design.tokens) + len(implementation.tokens),
            },
        )

        return ComparisonResult(
            token_matches=token_matches,
            component_matches=component_matches,
            discrepancies=discrepancies,
            confidence=confidence,
            summary=summary,
        )

    @staticmethod
    def summarize(
        design: NormalizedInventory,
        implementation: NormalizedInventory,
        design_components: list[ComponentRecord],
        implementation_components: list[ComponentRecord],
        token_matches: list[MatchResult],
        component_matches: list[ComponentMatch],
    ) -> ComparisonSummary:
        """Count results by status, components by family, tokens by category."""
        statuses = [m.status for m in token_matches] + [m.status for m in component_matches]

        by_family = {}
        for origin, components in (
            (Origin.DESIGN, design_components),
            (Origin.IMPLEMENTATION, implementation_components),
        ):
            counts = {family.value: 0 for family in ComponentFamily}
            for component in components:
                if component.classification:
                    counts[component.classification.family.value] += 1
            by_family[origin.value] = counts

        tokens_by_category = {}
        for inventory in (design, implementation):
            grouped = inventory.tokens_by_category()
            tokens_by_category[inventory.origin.value] = {
                category.value: len(grouped[category]) for category in CATEGORY_ORDER
            }

        return ComparisonSummary(
            total_components=len(design_components) + len(implementation_components),
            matched=sum(1 for s in statuses if s == MatchStatus.MATCH),
            mismatched=sum(1 for s in statuses if s == MatchStatus.MISMATCH),
            missing=sum(1 for s in statuses if s.is_missing),
            by_family=by_family,
            tokens_by_category=tokens_by_category,
        )


def compare_inventories(
    design_inventory: Any,
    implementation_inventory: Any,
    config: ComparisonConfig | None = None,
    created_at: str | None = None,
) -> ComparisonResult:
    """Convenience function to run one comparison with a fresh engine."""
    return ComparisonEngine(config).compare(
        design_inventory, implementation_inventory, created_at=created_at
    )
