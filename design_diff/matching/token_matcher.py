"""Token matcher for cross-referencing design and implementation tokens.

Each category has its own scoring function. Scored candidate pairs inside
the category's pairing window are resolved with one global greedy
assignment, so every token ends up in exactly one ``MatchResult``.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..config import ComparisonConfig
from ..diff_logging import LogCategory, get_category_logger
from ..models import MatchResult, MatchStatus
from ..tokens import (
    CATEGORY_ORDER,
    ColorValue,
    ShadowValue,
    Token,
    TokenCategory,
    TypographyValue,
)
from .color import color_confidence, color_distance, delta_e_matrix
from .text import family_similarity

logger = get_category_logger(LogCategory.MATCHER)

# Typography composite weights
FAMILY_WEIGHT = 0.5
SIZE_WEIGHT = 0.3
WEIGHT_WEIGHT = 0.2

# Span of the 100-900 font weight scale
WEIGHT_SCALE_SPAN = 800.0

# Share of typography confidence a fully diverged line height can remove
LINE_HEIGHT_PENALTY = 0.5

# Shadows without a color render with the (usually black) current color
DEFAULT_SHADOW_COLOR = ColorValue(0, 0, 0, 1.0)


@dataclass
class CandidatePair:
    """A scored design/implementation token pair inside the pairing window."""

    design_index: int
    implementation_index: int
    confidence: float
    distance: float
    accepted: bool
    exact: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    def sort_key(self) -> tuple:
        return (
            -self.confidence,
            not self.exact,
            self.distance,
            self.design_index,
            self.implementation_index,
        )


class TokenMatcher:
    """Matches tokens across sources with per-category algorithms.

    Tie-break: highest confidence wins; exact equality first, then smaller
    distance, then first-seen design order, then implementation order.
    """

    def __init__(self, config: ComparisonConfig | None = None):
        """Initialize the matcher.

        Args:
            config: Comparison configuration with thresholds and tolerances.
        """
        self.config = config or ComparisonConfig()
        self._scorers: dict[TokenCategory, Callable[[list[Token], list[Token]], list[CandidatePair]]] = {
            TokenCategory.COLOR: self._score_colors,
            TokenCategory.TYPOGRAPHY: self._score_typography,
            TokenCategory.SPACING: self._score_numeric,
            TokenCategory.SHADOW: self._score_shadows,
            TokenCategory.BORDER_RADIUS: self._score_numeric,
        }

    def match_tokens(
        self, design_tokens: list[Token], implementation_tokens: list[Token]
    ) -> list[MatchResult]:
        """Match all tokens, category by category in reporting order.

        Args:
            design_tokens: Tokens normalized from the design inventory.
            implementation_tokens: Tokens normalized from the implementation.

        Returns:
            One MatchResult per token on either side.
        """
        results: list[MatchResult] = []
        for category in CATEGORY_ORDER:
            design = [t for t in design_tokens if t.category == category]
            implementation = [t for t in implementation_tokens if t.category == category]
            if design or implementation:
                results.extend(self.match_category(category, design, implementation))
        return results

    def match_category(
        self,
        category: TokenCategory,
        design: list[Token],
        implementation: list[Token],
    ) -> list[MatchResult]:
        """Match the tokens of a single category.

        Results list design tokens in order (paired or missing in the
        implementation), followed by unpaired implementation tokens.
        """
        candidates = self._scorers[category](design, implementation) if design and implementation else []
        candidates.sort(key=CandidatePair.sort_key)

        assigned: dict[int, CandidatePair] = {}
        used_implementation: set[int] = set()
        for pair in candidates:
            if pair.design_index in assigned or pair.implementation_index in used_implementation:
                continue
            assigned[pair.design_index] = pair
            used_implementation.add(pair.implementation_index)

        results = []
        for index, token in enumerate(design):
            pair = assigned.get(index)
            if pair is None:
                results.append(
                    MatchResult(
                        token_category=category,
                        status=MatchStatus.MISSING_IN_IMPLEMENTATION,
                        confidence=0.0,
                        design_token=token,
                    )
                )
                continue
            results.append(
                MatchResult(
                    token_category=category,
                    status=MatchStatus.MATCH if pair.accepted else MatchStatus.MISMATCH,
                    confidence=pair.confidence,
                    design_token=token,
                    implementation_token=implementation[pair.implementation_index],
                    distance=pair.distance,
                    details=pair.details,
                )
            )

        for index, token in enumerate(implementation):
            if index not in used_implementation:
                results.append(
                    MatchResult(
                        token_category=category,
                        status=MatchStatus.MISSING_IN_DESIGN,
                        confidence=0.0,
                        implementation_token=token,
                    )
                )

        matched = sum(1 for r in results if r.status == MatchStatus.MATCH)
        logger.debug(
            f"Matched {category.value}: {len(design)} design / "
            f"{len(implementation)} implementation tokens, {matched} matches, "
            f"{len(assigned) - matched} mismatches",
            extra={"operation": "match_tokens", "token_count": len(design) + len(implementation)},
        )
        return results

    # Color

    def _score_colors(
        self, design: list[Token], implementation: list[Token]
    ) -> list[CandidatePair]:
        design_colors = [t.value for t in design]
        impl_colors = [t.value for t in implementation]
        distances = delta_e_matrix(design_colors, impl_colors)

        threshold = self.config.color_threshold
        pairs = []
        for i, first in enumerate(design_colors):
            for j, second in enumerate(impl_colors):
                exact = first == second
                distance = 0.0 if exact else float(distances[i, j])
                if distance > self.config.color_pairing_limit:
                    continue
                pairs.append(
                    CandidatePair(
                        design_index=i,
                        implementation_index=j,
                        confidence=1.0 if exact else color_confidence(distance, threshold),
                        distance=distance,
                        accepted=distance <= threshold,
                        exact=exact,
                        details={
                            "deltaE": round(distance, 4),
                            "maxChannelDelta": round(first.max_channel_delta(second), 2),
                        },
                    )
                )
        return pairs

    # Typography

    def size_similarity(self, first: float, second: float) -> float:
        """1.0 within the size tolerance, decaying linearly to 0 over the spread."""
        delta = abs(first - second)
        tolerance = self.config.font_size_tolerance
        if delta <= tolerance:
            return 1.0
        return max(0.0, 1.0 - (delta - tolerance) / self.config.font_size_spread)

    @staticmethod
    def weight_similarity(first: int, second: int) -> float:
        return max(0.0, 1.0 - abs(first - second) / WEIGHT_SCALE_SPAN)

    def typography_score(
        self, first: TypographyValue, second: TypographyValue
    ) -> tuple[float, dict[str, Any]]:
        """Weighted composite of family, size and weight similarity."""
        family = family_similarity(
            first.family, second.family, self.config.typography_generic_family_bonus
        )
        size = self.size_similarity(first.size, second.size)
        weight = self.weight_similarity(first.weight, second.weight)
        composite = FAMILY_WEIGHT * family + SIZE_WEIGHT * size + WEIGHT_WEIGHT * weight
        return composite, {
            "familySimilarity": round(family, 4),
            "sizeSimilarity": round(size, 4),
            "weightSimilarity": round(weight, 4),
        }

    def _score_typography(
        self, design: list[Token], implementation: list[Token]
    ) -> list[CandidatePair]:
        pairs = []
        for i, first_token in enumerate(design):
            for j, second_token in enumerate(implementation):
                first, second = first_token.value, second_token.value
                composite, details = self.typography_score(first, second)
                if composite < self.config.typography_pairing_floor:
                    continue

                confidence = composite
                line_height_ok = True
                if first.line_height is not None and second.line_height is not None:
                    delta = abs(first.line_height - second.line_height)
                    similarity = self.size_similarity(first.line_height, second.line_height)
                    details["lineHeightDelta"] = round(delta, 2)
                    details["lineHeightSimilarity"] = round(similarity, 4)
                    confidence = composite * (1.0 - LINE_HEIGHT_PENALTY * (1.0 - similarity))
                    line_height_ok = delta <= self.config.font_size_tolerance

                pairs.append(
                    CandidatePair(
                        design_index=i,
                        implementation_index=j,
                        confidence=confidence,
                        distance=1.0 - confidence,
                        accepted=(
                            composite >= self.config.typography_threshold and line_height_ok
                        ),
                        exact=first == second,
                        details=details,
                    )
                )
        return pairs

    # Spacing and border radius

    def _score_numeric(
        self, design: list[Token], implementation: list[Token]
    ) -> list[CandidatePair]:
        pairs = []
        for i, first_token in enumerate(design):
            for j, second_token in enumerate(implementation):
                first, second = first_token.value, second_token.value
                delta = abs(first - second)
                largest = max(first, second)
                relative = delta / largest if largest > 0 else 0.0
                if relative > self.config.numeric_pairing_max_relative_delta:
                    continue
                pairs.append(
                    CandidatePair(
                        design_index=i,
                        implementation_index=j,
                        confidence=1.0 - relative,
                        distance=relative,
                        accepted=delta <= self.config.spacing_tolerance,
                        exact=first == second,
                        details={
                            "absoluteDelta": round(delta, 2),
                            "relativeDelta": round(relative, 4),
                        },
                    )
                )
        return pairs

    # Shadows

    def elevation_level(self, shadow: ShadowValue) -> int:
        """1-based elevation level from the configured boundaries."""
        elevation = shadow.elevation
        for index, boundary in enumerate(self.config.shadow_elevation_levels):
            if elevation <= boundary:
                return index + 1
        return len(self.config.shadow_elevation_levels) + 1

    def _score_shadows(
        self, design: list[Token], implementation: list[Token]
    ) -> list[CandidatePair]:
        pairs = []
        threshold = self.config.color_threshold
        for i, first_token in enumerate(design):
            for j, second_token in enumerate(implementation):
                first, second = first_token.value, second_token.value
                first_level = self.elevation_level(first)
                second_level = self.elevation_level(second)
                level_delta = abs(first_level - second_level)
                if level_delta > self.config.shadow_level_tolerance + 1:
                    continue

                highest = max(first.elevation, second.elevation)
                elevation_similarity = (
                    1.0 - abs(first.elevation - second.elevation) / highest
                    if highest > 0
                    else 1.0
                )
                delta_e = color_distance(
                    first.color or DEFAULT_SHADOW_COLOR,
                    second.color or DEFAULT_SHADOW_COLOR,
                )
                confidence = (elevation_similarity + color_confidence(delta_e, threshold)) / 2

                pairs.append(
                    CandidatePair(
                        design_index=i,
                        implementation_index=j,
                        confidence=confidence,
                        distance=1.0 - confidence,
                        accepted=(
                            level_delta <= self.config.shadow_level_tolerance
                            and delta_e <= threshold
                            and first.inset == second.inset
                        ),
                        exact=first == second,
                        details={
                            "designLevel": first_level,
                            "implementationLevel": second_level,
                            "elevationDelta": round(abs(first.elevation - second.elevation), 2),
                            "deltaE": round(delta_e, 4),
                        },
                    )
                )
        return pairs
