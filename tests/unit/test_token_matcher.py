"""Unit tests for the token matcher."""

import pytest

from design_diff.config import ComparisonConfig
from design_diff.matching import TokenMatcher
from design_diff.models import MatchStatus
from design_diff.tokens import (
    ColorValue,
    Origin,
    ShadowValue,
    Token,
    TokenCategory,
    TokenSource,
    TypographyValue,
)


def design(category: TokenCategory, value, ref: str = "design-node") -> Token:
    return Token(category, value, (TokenSource(Origin.DESIGN, ref, str(value)),))


def impl(category: TokenCategory, value, ref: str = "impl-node") -> Token:
    return Token(category, value, (TokenSource(Origin.IMPLEMENTATION, ref, str(value)),))


@pytest.fixture
def matcher() -> TokenMatcher:
    """Create a matcher with default configuration."""
    return TokenMatcher()


class TestColorMatching:
    """Tests for color matching."""

    def test_darker_shade_is_a_mismatch(self, matcher):
        """Test a noticeably darker blue pairs but does not match."""
        (result,) = matcher.match_tokens(
            [design(TokenCategory.COLOR, ColorValue(0, 123, 255))],
            [impl(TokenCategory.COLOR, ColorValue(0, 86, 179))],
        )
        assert result.status == MatchStatus.MISMATCH
        assert result.implementation_token is not None
        assert result.confidence == 0.0
        assert result.distance > 10.0
        assert result.details["maxChannelDelta"] == pytest.approx(29.8, abs=0.01)

    def test_identical_colors(self, matcher):
        """Test identical colors match with full confidence."""
        (result,) = matcher.match_tokens(
            [design(TokenCategory.COLOR, ColorValue(0, 123, 255))],
            [impl(TokenCategory.COLOR, ColorValue(0, 123, 255))],
        )
        assert result.status == MatchStatus.MATCH
        assert result.confidence == 1.0
        assert result.distance == 0.0

    def test_near_color_matches_with_partial_confidence(self, matcher):
        """Test a barely different color is accepted below full confidence."""
        (result,) = matcher.match_tokens(
            [design(TokenCategory.COLOR, ColorValue(0, 123, 255))],
            [impl(TokenCategory.COLOR, ColorValue(0, 122, 254))],
        )
        assert result.status == MatchStatus.MATCH
        assert 0.0 < result.confidence < 1.0

    def test_pairing_window(self, matcher):
        """Test colors too far apart are never paired."""
        results = matcher.match_tokens(
            [design(TokenCategory.COLOR, ColorValue(255, 255, 255))],
            [impl(TokenCategory.COLOR, ColorValue(0, 0, 0))],
        )
        assert [r.status for r in results] == [
            MatchStatus.MISSING_IN_IMPLEMENTATION,
            MatchStatus.MISSING_IN_DESIGN,
        ]

    def test_exact_pair_wins(self, matcher):
        """Test an exact match takes precedence over a near one."""
        blue = ColorValue(0, 123, 255)
        results = matcher.match_tokens(
            [design(TokenCategory.COLOR, blue)],
            [
                impl(TokenCategory.COLOR, ColorValue(0, 122, 254), "near"),
                impl(TokenCategory.COLOR, blue, "exact"),
            ],
        )
        assert results[0].implementation_token.component_refs == ["exact"]
        assert results[1].status == MatchStatus.MISSING_IN_DESIGN


class TestTypographyMatching:
    """Tests for typography matching."""

    def test_different_family_is_a_mismatch(self, matcher):
        """Test Inter vs Arial at the same size and weight."""
        (result,) = matcher.match_tokens(
            [design(TokenCategory.TYPOGRAPHY, TypographyValue("inter", 16.0, 600))],
            [impl(TokenCategory.TYPOGRAPHY, TypographyValue("arial", 16.0, 600))],
        )
        assert result.status == MatchStatus.MISMATCH
        assert result.confidence == pytest.approx(0.575)
        assert result.details["familySimilarity"] == pytest.approx(0.15)
        assert result.details["sizeSimilarity"] == 1.0
        assert result.details["weightSimilarity"] == 1.0

    def test_size_within_tolerance_matches(self, matcher):
        """Test a 1px size difference still matches."""
        (result,) = matcher.match_tokens(
            [design(TokenCategory.TYPOGRAPHY, TypographyValue("inter", 16.0, 400))],
            [impl(TokenCategory.TYPOGRAPHY, TypographyValue("inter", 17.0, 400))],
        )
        assert result.status == MatchStatus.MATCH
        assert result.confidence == 1.0

    def test_line_height_difference_is_a_mismatch(self, matcher):
        """Test a 16px vs 40px line height on the same face is reported."""
        (result,) = matcher.match_tokens(
            [design(TokenCategory.TYPOGRAPHY, TypographyValue("inter", 16.0, 400, 16.0))],
            [impl(TokenCategory.TYPOGRAPHY, TypographyValue("inter", 16.0, 400, 40.0))],
        )
        assert result.status == MatchStatus.MISMATCH
        assert result.confidence == pytest.approx(0.5)
        assert result.details["lineHeightDelta"] == 24.0
        assert result.details["lineHeightSimilarity"] == 0.0

    @pytest.mark.parametrize(
        "design_line_height, impl_line_height, status, confidence",
        [
            (24.0, 25.0, MatchStatus.MATCH, 1.0),
            (24.0, 30.0, MatchStatus.MISMATCH, 0.8),
            (24.0, None, MatchStatus.MATCH, 1.0),
        ],
    )
    def test_line_height_tolerance(self, matcher, design_line_height, impl_line_height, status, confidence):
        """Test line heights within tolerance or absent on one side still match."""
        (result,) = matcher.match_tokens(
            [design(TokenCategory.TYPOGRAPHY, TypographyValue("inter", 16.0, 400, design_line_height))],
            [impl(TokenCategory.TYPOGRAPHY, TypographyValue("inter", 16.0, 400, impl_line_height))],
        )
        assert result.status == status
        assert result.confidence == pytest.approx(confidence)

    def test_size_and_weight_decay(self, matcher):
        """Test size decays past the tolerance and weight by scale span."""
        assert matcher.size_similarity(16.0, 23.0) == pytest.approx(0.5)
        assert matcher.size_similarity(16.0, 40.0) == 0.0
        assert matcher.weight_similarity(400, 600) == pytest.approx(0.75)

    def test_pairing_floor(self, matcher):
        """Test completely different type styles are not paired."""
        results = matcher.match_tokens(
            [design(TokenCategory.TYPOGRAPHY, TypographyValue("inter", 16.0, 400))],
            [impl(TokenCategory.TYPOGRAPHY, TypographyValue("courier new", 40.0, 900))],
        )
        assert [r.status for r in results] == [
            MatchStatus.MISSING_IN_IMPLEMENTATION,
            MatchStatus.MISSING_IN_DESIGN,
        ]


class TestNumericMatching:
    """Tests for spacing and border radius matching."""

    def test_within_tolerance(self, matcher):
        """Test 16px vs 17px matches with 2px tolerance."""
        (result,) = matcher.match_tokens(
            [design(TokenCategory.SPACING, 16.0)],
            [impl(TokenCategory.SPACING, 17.0)],
        )
        assert result.status == MatchStatus.MATCH
        assert result.confidence == pytest.approx(1 - 1 / 17)
        assert result.details["absoluteDelta"] == 1.0

    def test_outside_tolerance(self, matcher):
        """Test a 4px radius difference is a mismatch."""
        (result,) = matcher.match_tokens(
            [design(TokenCategory.BORDER_RADIUS, 4.0)],
            [impl(TokenCategory.BORDER_RADIUS, 8.0)],
        )
        assert result.status == MatchStatus.MISMATCH
        assert result.token_category == TokenCategory.BORDER_RADIUS

    def test_custom_tolerance(self):
        """Test the tolerance comes from configuration."""
        matcher = TokenMatcher(ComparisonConfig(spacing_tolerance=0))
        (result,) = matcher.match_tokens(
            [design(TokenCategory.SPACING, 16.0)],
            [impl(TokenCategory.SPACING, 17.0)],
        )
        assert result.status == MatchStatus.MISMATCH

    def test_each_token_used_once(self, matcher):
        """Test the exact pair wins and the leftover is reported."""
        results = matcher.match_tokens(
            [design(TokenCategory.SPACING, 8.0), design(TokenCategory.SPACING, 16.0)],
            [impl(TokenCategory.SPACING, 16.0)],
        )
        assert [r.status for r in results] == [
            MatchStatus.MISSING_IN_IMPLEMENTATION,
            MatchStatus.MATCH,
        ]
        assert results[0].design_token.value == 8.0

    def test_design_order_breaks_ties(self, matcher):
        """Test equal candidates go to the first design token."""
        results = matcher.match_tokens(
            [design(TokenCategory.SPACING, 16.0, "first"), design(TokenCategory.SPACING, 16.0, "second")],
            [impl(TokenCategory.SPACING, 16.0)],
        )
        assert results[0].status == MatchStatus.MATCH
        assert results[0].design_token.component_refs == ["first"]
        assert results[1].status == MatchStatus.MISSING_IN_IMPLEMENTATION


class TestShadowMatching:
    """Tests for shadow matching by elevation level."""

    SHADOW = ShadowValue(0.0, 2.0, 4.0, 0.0, ColorValue(0, 0, 0, 0.25))

    def test_identical_shadows(self, matcher):
        """Test identical shadows match."""
        (result,) = matcher.match_tokens(
            [design(TokenCategory.SHADOW, self.SHADOW)],
            [impl(TokenCategory.SHADOW, self.SHADOW)],
        )
        assert result.status == MatchStatus.MATCH
        assert result.confidence == 1.0

    def test_adjacent_level_is_a_mismatch(self, matcher):
        """Test a shadow one elevation level up pairs as a mismatch."""
        higher = ShadowValue(0.0, 4.0, 8.0, 0.0, ColorValue(0, 0, 0, 0.25))
        (result,) = matcher.match_tokens(
            [design(TokenCategory.SHADOW, self.SHADOW)],
            [impl(TokenCategory.SHADOW, higher)],
        )
        assert result.status == MatchStatus.MISMATCH
        assert result.details["designLevel"] == 2
        assert result.details["implementationLevel"] == 3
        assert result.confidence == pytest.approx(0.75)

    def test_distant_levels_are_not_paired(self, matcher):
        """Test shadows several levels apart stay unpaired."""
        results = matcher.match_tokens(
            [design(TokenCategory.SHADOW, self.SHADOW)],
            [impl(TokenCategory.SHADOW, ShadowValue(0.0, 10.0, 20.0))],
        )
        assert len(results) == 2
        assert all(r.status.is_missing for r in results)

    def test_inset_differs(self, matcher):
        """Test inset and drop shadows never match."""
        inset = ShadowValue(0.0, 2.0, 4.0, 0.0, ColorValue(0, 0, 0, 0.25), inset=True)
        (result,) = matcher.match_tokens(
            [design(TokenCategory.SHADOW, self.SHADOW)],
            [impl(TokenCategory.SHADOW, inset)],
        )
        assert result.status == MatchStatus.MISMATCH

    def test_elevation_levels(self, matcher):
        """Test level boundaries are inclusive and 1-based."""
        assert matcher.elevation_level(ShadowValue(0.0, 0.0, 0.0)) == 1
        assert matcher.elevation_level(ShadowValue(0.0, 2.0, 2.0)) == 1
        assert matcher.elevation_level(ShadowValue(0.0, 0.0, 6.0)) == 2
        assert matcher.elevation_level(ShadowValue(0.0, 0.0, 30.0)) == 5


class TestCompleteness:
    """Tests that every token lands in exactly one result."""

    def test_every_token_reported_once(self, matcher):
        """Test union of result tokens equals the input token sets."""
        design_tokens = [
            design(TokenCategory.COLOR, ColorValue(255, 255, 255)),
            design(TokenCategory.COLOR, ColorValue(0, 123, 255)),
            design(TokenCategory.SPACING, 8.0),
            design(TokenCategory.BORDER_RADIUS, 4.0),
        ]
        implementation_tokens = [
            impl(TokenCategory.COLOR, ColorValue(0, 123, 255)),
            impl(TokenCategory.SPACING, 9.0),
            impl(TokenCategory.SPACING, 64.0),
            impl(TokenCategory.TYPOGRAPHY, TypographyValue("inter", 16.0)),
        ]
        results = matcher.match_tokens(design_tokens, implementation_tokens)

        seen_design = [r.design_token for r in results if r.design_token]
        seen_impl = [r.implementation_token for r in results if r.implementation_token]
        assert sorted(t.id for t in seen_design) == sorted(t.id for t in design_tokens)
        assert sorted(t.id for t in seen_impl) == sorted(t.id for t in implementation_tokens)

    def test_results_follow_category_order(self, matcher):
        """Test results are grouped in reporting order."""
        results = matcher.match_tokens(
            [design(TokenCategory.BORDER_RADIUS, 4.0), design(TokenCategory.COLOR, ColorValue(0, 0, 0))],
            [impl(TokenCategory.SPACING, 4.0)],
        )
        assert [r.token_category for r in results] == [
            TokenCategory.COLOR,
            TokenCategory.SPACING,
            TokenCategory.BORDER_RADIUS,
        ]

    def test_empty_sides(self, matcher):
        """Test empty inputs yield no results."""
        assert matcher.match_tokens([], []) == []
        results = matcher.match_tokens([design(TokenCategory.SPACING, 8.0)], [])
        assert [r.status for r in results] == [MatchStatus.MISSING_IN_IMPLEMENTATION]
