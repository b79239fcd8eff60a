"""Token normalizer for raw design and implementation inventories.

Turns every raw style attribute of every component into canonical tokens.
Semantically identical raw values (``"16px"`` and ``16``, ``rgb()`` and
``rgba()`` spellings of one color) collapse into a single token that keeps
each raw occurrence as a source.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any

from ..config import ComparisonConfig
from ..diff_logging import LogCategory, get_category_logger
from ..models import ComponentRecord
from ..tokens import (
    ColorValue,
    Origin,
    ShadowValue,
    Token,
    TokenCategory,
    TokenSource,
    TokenValue,
    TypographyValue,
    normalize_font_family,
    normalize_font_weight,
    parse_box_shadow,
    parse_color,
    parse_length,
    parse_line_height,
    parse_lengths,
    token_key,
)
from .adapters import (
    AdaptedComponent,
    RawStyleValue,
    from_design_component,
    from_implementation_component,
    iter_raw_components,
)

logger = get_category_logger(LogCategory.NORMALIZER)

# Properties whose fully transparent colors are noise
BACKGROUND_PROPERTIES = frozenset(["backgroundColor"])


@dataclass
class NormalizedInventory:
    """Tokens and component records extracted from one inventory."""

    origin: Origin
    tokens: list[Token] = field(default_factory=list)
    components: list[ComponentRecord] = field(default_factory=list)
    skipped_components: int = 0

    def tokens_by_category(self) -> dict[TokenCategory, list[Token]]:
        """Group tokens by category, preserving first-seen order."""
        grouped: dict[TokenCategory, list[Token]] = {c: [] for c in TokenCategory}
        for token in self.tokens:
            grouped[token.category].append(token)
        return grouped


def raw_text(value: Any) -> str:
    """Stable string form of a raw value for provenance."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict | list):
        return json.dumps(value, sort_keys=True, default=str)
    return str(value)


class TokenNormalizer:
    """Normalizes raw inventories into canonical tokens.

    Malformed attributes are skipped individually; a single bad value never
    aborts the component, and a bad component never aborts the inventory.
    """

    def __init__(self, config: ComparisonConfig | None = None):
        """Initialize the normalizer.

        Args:
            config: Comparison configuration (base font size, transparency).
        """
        self.config = config or ComparisonConfig()

    def normalize(self, raw_inventory: Any, origin: Origin) -> list[Token]:
        """Normalize a raw inventory into tokens (first-seen order)."""
        return self.normalize_inventory(raw_inventory, origin).tokens

    def normalize_inventory(self, raw_inventory: Any, origin: Origin) -> NormalizedInventory:
        """Normalize a raw inventory into tokens and component records.

        Args:
            raw_inventory: Flat or nested list of raw components, or a
                dict wrapping one.
            origin: Which source the inventory came from.

        Returns:
            NormalizedInventory with tokens and records whose ``style_refs``
            point at token ids.
        """
        occurrences: dict[tuple[TokenCategory, str], tuple[TokenValue, list[TokenSource]]] = {}
        components: list[ComponentRecord] = []
        skipped = 0

        for index, (raw, depth) in enumerate(iter_raw_components(raw_inventory)):
            if not isinstance(raw, dict):
                logger.warning(
                    f"Skipping non-object {origin.value} component at index {index}: "
                    f"{type(raw).__name__}"
                )
                skipped += 1
                continue

            adapted = self._adapt(raw, origin, index, depth)
            refs: list[str] = []
            for style in adapted.styles:
                for value, value_key in self._parse_style(style, adapted.record.id):
                    key = (style.category, value_key)
                    source = TokenSource(
                        origin=origin,
                        component_ref=adapted.record.id,
                        raw_value=raw_text(style.value),
                        property=style.property,
                    )
                    if key not in occurrences:
                        occurrences[key] = (value, [])
                    occurrences[key][1].append(source)

                    token_id = f"{style.category.value}:{key[1]}"
                    if token_id not in refs:
                        refs.append(token_id)

            components.append(replace(adapted.record, style_refs=tuple(refs)))

        tokens = [
            Token(category=category, value=value, sources=tuple(sources))
            for (category, _), (value, sources) in occurrences.items()
        ]

        logger.debug(
            f"Normalized {len(components)} {origin.value} components into "
            f"{len(tokens)} tokens ({skipped} skipped)",
            extra={
                "operation": "normalize",
                "component_count": len(components),
                "token_count": len(tokens),
            },
        )
        return NormalizedInventory(
            origin=origin,
            tokens=tokens,
            components=components,
            skipped_components=skipped,
        )

    def _adapt(
        self, raw: dict[str, Any], origin: Origin, index: int, depth: int
    ) -> AdaptedComponent:
        if origin == Origin.DESIGN:
            return from_design_component(raw, index=index, depth=depth)
        return from_implementation_component(raw, index=index, depth=depth)

    def _parse_style(
        self, style: RawStyleValue, component_ref: str
    ) -> list[tuple[TokenValue, str]]:
        """Parse one raw attribute into (value, key) pairs.

        Malformed values yield no tokens.
        """
        try:
            if style.category == TokenCategory.COLOR:
                values = self._parse_color(style)
            elif style.category == TokenCategory.TYPOGRAPHY:
                values = [self._parse_typography(style.value)]
            elif style.category == TokenCategory.SHADOW:
                values = self._parse_shadow(style.value)
            else:
                values = self._parse_numeric(style.value)
            return [(value, token_key(style.category, value)) for value in values]
        except (ValueError, TypeError, OverflowError) as e:
            logger.debug(
                f"Skipping malformed {style.category.value} value on "
                f"{component_ref} ({style.property}): {e}"
            )
            return []

    def _parse_color(self, style: RawStyleValue) -> list[TokenValue]:
        value = style.value
        if isinstance(value, dict):
            color = ColorValue.from_unit_rgba(value)
        else:
            color = parse_color(value)

        if (
            color.a == 0
            and style.property in BACKGROUND_PROPERTIES
            and not self.config.include_transparent_backgrounds
        ):
            return []
        return [color]

    def _parse_typography(self, value: Any) -> TokenValue:
        if not isinstance(value, dict):
            raise ValueError(f"Typography must be an object: {value!r}")

        base = self.config.base_font_size
        family, stack = normalize_font_family(value.get("fontFamily"))
        size = parse_length(value.get("fontSize"), base)
        if size <= 0:
            raise ValueError(f"Font size must be positive: {value.get('fontSize')!r}")

        raw_weight = value.get("fontWeight")
        weight = normalize_font_weight(raw_weight) if raw_weight is not None else 400

        try:
            line_height = parse_line_height(value.get("lineHeight"), size, base)
        except ValueError:
            line_height = None

        return TypographyValue(
            family=family,
            size=round(size, 2),
            weight=weight,
            line_height=round(line_height, 2) if line_height is not None else None,
            stack=stack,
        )

    def _parse_numeric(self, value: Any) -> list[TokenValue]:
        lengths = parse_lengths(value, self.config.base_font_size)
        return [round(length, 2) for length in lengths if length > 0]

    def _parse_shadow(self, value: Any) -> list[TokenValue]:
        if isinstance(value, dict):
            shadows = [self._shadow_from_effect(value)]
        else:
            shadows = parse_box_shadow(value, self.config.base_font_size)

        return [
            shadow
            for shadow in shadows
            if not shadow.is_empty() and not (shadow.color and shadow.color.a == 0)
        ]

    def _shadow_from_effect(self, effect: dict[str, Any]) -> ShadowValue:
        base = self.config.base_font_size
        color = effect.get("color")
        if isinstance(color, dict):
            color_value: ColorValue | None = ColorValue.from_unit_rgba(color)
        elif color is not None:
            color_value = parse_color(color)
        else:
            color_value = None

        return ShadowValue(
            offset_x=round(parse_length(effect.get("offsetX", 0), base), 2),
            offset_y=round(parse_length(effect.get("offsetY", 0), base), 2),
            blur=round(parse_length(effect.get("blur", 0), base), 2),
            spread=round(parse_length(effect.get("spread", 0), base), 2),
            color=color_value,
            inset=bool(effect.get("inset", False)),
        )
