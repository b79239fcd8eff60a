"""Discrepancy builder.

Converts every non-matching token or component result into exactly one
severity- and priority-tagged ``Discrepancy``. Ids come from a counter
local to each ``build_discrepancies`` call, assigned in the fixed order
color, typography, spacing, shadow, borderRadius, components.
"""

import itertools
from datetime import datetime

from .classification.signals import tokenize_name
from .config import ComparisonConfig
from .diff_logging import LogCategory, get_category_logger
from .models import (
    ComponentMatch,
    ComponentRecord,
    Discrepancy,
    MatchResult,
    MatchStatus,
    Priority,
    Severity,
)
from .tokens import CATEGORY_ORDER, ColorValue, Origin, Token, TokenCategory, format_number

logger = get_category_logger(LogCategory.ENGINE)

COMPONENTS_CATEGORY = "components"

# Max channel delta (% of full scale) bands for color severity
CRITICAL_COLOR_DELTA = 30.0
MAJOR_COLOR_DELTA = 10.0

CATEGORY_LABELS = {
    TokenCategory.COLOR: "color",
    TokenCategory.TYPOGRAPHY: "typography",
    TokenCategory.SPACING: "spacing",
    TokenCategory.SHADOW: "shadow",
    TokenCategory.BORDER_RADIUS: "border radius",
}

MISMATCH_SEVERITY = {
    TokenCategory.TYPOGRAPHY: Severity.MAJOR,
    TokenCategory.SPACING: Severity.MINOR,
    TokenCategory.SHADOW: Severity.MINOR,
    TokenCategory.BORDER_RADIUS: Severity.MINOR,
}

ComponentIndex = dict[tuple[Origin, str], ComponentRecord]


def color_severity(max_channel_delta: float) -> Severity:
    """Severity band for a color difference given as % of full channel scale."""
    if max_channel_delta > CRITICAL_COLOR_DELTA:
        return Severity.CRITICAL
    if max_channel_delta >= MAJOR_COLOR_DELTA:
        return Severity.MAJOR
    return Severity.MINOR


class DiscrepancyBuilder:
    """Builds discrepancy records from match results."""

    def __init__(self, config: ComparisonConfig | None = None):
        """Initialize the builder.

        Args:
            config: Comparison configuration (priority boost subtypes).
        """
        self.config = config or ComparisonConfig()
        self.boost_subtypes = frozenset(self.config.priority_boost_subtypes)

    def build_discrepancies(
        self,
        token_matches: list[MatchResult],
        component_matches: list[ComponentMatch],
        created_at: str | None = None,
    ) -> list[Discrepancy]:
        """Create one discrepancy per non-matching result.

        Args:
            token_matches: Token-level results from the token matcher.
            component_matches: Results from the structural matcher; also
                used to look up the components behind each token.
            created_at: ISO timestamp stamped on every record; defaults to now.

        Returns:
            Discrepancies with ids 1..n in category order.
        """
        timestamp = created_at or datetime.now().isoformat()
        ids = itertools.count(1)
        components = self._index_components(component_matches)

        discrepancies = []
        for category in CATEGORY_ORDER:
            for match in token_matches:
                if match.token_category != category or match.status == MatchStatus.MATCH:
                    continue
                discrepancies.append(
                    self._token_discrepancy(next(ids), match, components, timestamp)
                )

        for component_match in component_matches:
            if component_match.status != MatchStatus.MATCH:
                discrepancies.append(
                    self._component_discrepancy(next(ids), component_match, timestamp)
                )

        logger.debug(
            f"Built {len(discrepancies)} discrepancies",
            extra={"operation": "build_discrepancies"},
        )
        return discrepancies

    # Priority

    def is_interactive(self, component: ComponentRecord) -> bool:
        """Whether a component qualifies for the priority boost."""
        subtype = component.classification.subtype if component.classification else None
        if subtype in self.boost_subtypes:
            return True
        if "links" in self.boost_subtypes:
            role = str(component.hints.get("role") or "").lower()
            if component.role_type.lower() == "a" or role == "link":
                return True
            if component.origin == Origin.DESIGN and "link" in tokenize_name(component.display_name):
                return True
        if "ctas" in self.boost_subtypes and "cta" in component.display_name.lower():
            return True
        return False

    def priority_for(self, severity: Severity, components: list[ComponentRecord]) -> Priority:
        """Base priority from severity, boosted one level for interactive components."""
        priority = severity.base_priority
        if any(self.is_interactive(c) for c in components):
            priority = priority.boosted()
        return priority

    # Token discrepancies

    @staticmethod
    def _index_components(component_matches: list[ComponentMatch]) -> ComponentIndex:
        index: ComponentIndex = {}
        for match in component_matches:
            for component in match.components:
                index.setdefault((component.origin, component.id), component)
        return index

    @staticmethod
    def _token_components(match: MatchResult, components: ComponentIndex) -> list[ComponentRecord]:
        found = []
        for token in match.tokens:
            for source in token.sources:
                component = components.get((source.origin, source.component_ref))
                if component is not None and component not in found:
                    found.append(component)
        return found

    def token_severity(self, match: MatchResult) -> Severity:
        if match.status.is_missing:
            return Severity.MAJOR
        if match.token_category == TokenCategory.COLOR:
            design, implementation = match.design_token.value, match.implementation_token.value
            return color_severity(design.max_channel_delta(implementation))
        return MISMATCH_SEVERITY[match.token_category]

    def _token_discrepancy(
        self,
        discrepancy_id: int,
        match: MatchResult,
        components: ComponentIndex,
        created_at: str,
    ) -> Discrepancy:
        severity = self.token_severity(match)
        priority = self.priority_for(severity, self._token_components(match, components))
        label = CATEGORY_LABELS[match.token_category]
        expected = match.design_token.display_value() if match.design_token else None
        actual = (
            match.implementation_token.display_value() if match.implementation_token else None
        )

        if match.status == MatchStatus.MISSING_IN_IMPLEMENTATION:
            title = f"Missing {label} in implementation: {expected}"
            description = (
                f"Design {label} {expected} ({_usage(match.design_token)}) has no "
                f"counterpart in the implementation."
            )
        elif match.status == MatchStatus.MISSING_IN_DESIGN:
            title = f"Undocumented {label} in implementation: {actual}"
            description = (
                f"Implementation {label} {actual} ({_usage(match.implementation_token)}) "
                f"does not exist in the design."
            )
        else:
            title = f"{label.capitalize()} mismatch: {expected} vs {actual}"
            description = self._mismatch_description(match, expected, actual)

        return Discrepancy(
            id=discrepancy_id,
            category=match.token_category.value,
            severity=severity,
            priority=priority,
            title=title,
            description=description,
            created_at=created_at,
            design_ref=_refs(match.design_token),
            implementation_ref=_refs(match.implementation_token),
            expected=expected,
            actual=actual,
        )

    @staticmethod
    def _mismatch_description(match: MatchResult, expected: str, actual: str) -> str:
        details = match.details
        category = match.token_category
        if category == TokenCategory.COLOR:
            design: ColorValue = match.design_token.value
            return (
                f"Implementation uses {actual} where the design specifies {expected} "
                f"(Delta E {details.get('deltaE', 0):.1f}, max channel delta "
                f"{design.max_channel_delta(match.implementation_token.value):.1f}%)."
            )
        if category == TokenCategory.TYPOGRAPHY:
            line_height = ""
            if "lineHeightDelta" in details:
                line_height = (
                    f", line height off by {format_number(details['lineHeightDelta'])}px"
                )
            return (
                f"Typography differs from the design (family "
                f"{details.get('familySimilarity', 0):.2f}, size "
                f"{details.get('sizeSimilarity', 0):.2f}, weight "
                f"{details.get('weightSimilarity', 0):.2f}{line_height}; confidence "
                f"{match.confidence:.2f})."
            )
        if category == TokenCategory.SHADOW:
            return (
                f"Shadow elevation level {details.get('implementationLevel')} differs "
                f"from design level {details.get('designLevel')} or its color drifts "
                f"(Delta E {details.get('deltaE', 0):.1f})."
            )
        return (
            f"Value differs by {format_number(details.get('absoluteDelta', 0))}px "
            f"({details.get('relativeDelta', 0) * 100:.1f}%)."
        )

    # Component discrepancies

    def _component_discrepancy(
        self, discrepancy_id: int, match: ComponentMatch, created_at: str
    ) -> Discrepancy:
        severity = Severity.MAJOR
        priority = self.priority_for(severity, match.components)
        design, implementation = match.design_component, match.implementation_component
        kind = match.classification.subtype if match.classification else "unclassified"

        if match.status == MatchStatus.MISSING_IN_IMPLEMENTATION:
            title = f"Missing component in implementation: {design.display_name}"
            description = (
                f"Design {kind} component '{design.display_name}' ({design.role_type}) "
                f"has no matching implementation element."
            )
        elif match.status == MatchStatus.MISSING_IN_DESIGN:
            title = f"Component not in design: {implementation.display_name}"
            description = (
                f"Implementation {kind} element '{implementation.display_name}' "
                f"({implementation.role_type}) has no matching design component."
            )
        else:
            title = f"Component mismatch: {design.display_name}"
            description = (
                f"Component '{design.display_name}' differs structurally from "
                f"'{implementation.display_name}' (similarity {match.similarity:.2f})."
            )

        return Discrepancy(
            id=discrepancy_id,
            category=COMPONENTS_CATEGORY,
            severity=severity,
            priority=priority,
            title=title,
            description=description,
            created_at=created_at,
            design_ref=design.id if design else None,
            implementation_ref=implementation.id if implementation else None,
            expected=_describe(design),
            actual=_describe(implementation),
        )


def _refs(token: Token | None) -> str | None:
    if token is None:
        return None
    return ", ".join(token.component_refs) or None


def _usage(token: Token) -> str:
    count = len(token.component_refs)
    return f"used by {count} component" + ("" if count == 1 else "s")


def _describe(component: ComponentRecord | None) -> str | None:
    if component is None:
        return None
    classification = component.classification.bucket if component.classification else "unclassified"
    return f"{component.display_name} <{component.role_type}> [{classification}]"
