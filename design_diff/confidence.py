"""Confidence aggregation across token categories and components."""

from .diff_logging import LogCategory, get_category_logger
from .models import ComponentMatch, ConfidenceReport, MatchResult
from .tokens import CATEGORY_ORDER

logger = get_category_logger(LogCategory.ENGINE)

COMPONENTS_KEY = "components"

# (lower bound, level), checked top to bottom
CONFIDENCE_LEVELS = (
    (0.9, "excellent"),
    (0.8, "very-good"),
    (0.7, "good"),
    (0.6, "fair"),
    (0.4, "poor"),
)


def confidence_level(score: float | None) -> str:
    """Map a 0-1 score to a qualitative level ("unknown" for None)."""
    if score is None:
        return "unknown"
    for bound, level in CONFIDENCE_LEVELS:
        if score >= bound:
            return level
    return "very-poor"


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)


class ConfidenceAggregator:
    """Rolls per-result confidence up into category and overall scores.

    Missing results count as confidence 0, so absence lowers the mean.
    Categories with no results on either side are left out entirely.
    """

    def aggregate(
        self,
        token_matches: list[MatchResult],
        component_matches: list[ComponentMatch],
    ) -> ConfidenceReport:
        """Aggregate confidence.

        Args:
            token_matches: Token-level results.
            component_matches: Structural results (similarity as confidence).

        Returns:
            ConfidenceReport; ``overall`` is None when nothing was compared.
        """
        by_category: dict[str, float] = {}
        for category in CATEGORY_ORDER:
            values = [m.confidence for m in token_matches if m.token_category == category]
            if values:
                by_category[category.value] = _mean(values)

        if component_matches:
            by_category[COMPONENTS_KEY] = _mean([m.similarity for m in component_matches])

        overall = _mean(list(by_category.values())) if by_category else None
        level = confidence_level(overall)
        logger.debug(f"Aggregated confidence {overall} ({level}) over {len(by_category)} categories")
        return ConfidenceReport(overall=overall, by_category=by_category, level=level)
