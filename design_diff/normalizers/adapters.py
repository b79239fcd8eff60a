"""Source adapters for raw inventories.

Design-tool nodes and rendered-page elements arrive in very different
shapes. The two adapters here turn either one into the same internal
shape: a ``ComponentRecord`` plus the list of raw style values the token
normalizer parses. No value parsing happens here, only shape mapping.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from ..models import ComponentRecord, Geometry
from ..tokens import Origin, TokenCategory

# Keys under which an inventory dict may wrap its component list
INVENTORY_LIST_KEYS = ("components", "elements", "nodes", "children")

GEOMETRY_KEYS = ("absoluteBoundingBox", "boundingRect", "rect", "boundingBox", "bounds")

SPACING_PROPERTIES = (
    "padding",
    "paddingTop",
    "paddingRight",
    "paddingBottom",
    "paddingLeft",
    "margin",
    "marginTop",
    "marginRight",
    "marginBottom",
    "marginLeft",
    "gap",
    "rowGap",
    "columnGap",
)

RADIUS_PROPERTIES = (
    "borderRadius",
    "borderTopLeftRadius",
    "borderTopRightRadius",
    "borderBottomRightRadius",
    "borderBottomLeftRadius",
)

DESIGN_SPACING_PROPERTIES = (
    "paddingTop",
    "paddingRight",
    "paddingBottom",
    "paddingLeft",
    "itemSpacing",
)

SHADOW_EFFECT_TYPES = {"DROP_SHADOW", "INNER_SHADOW"}


@dataclass(frozen=True)
class RawStyleValue:
    """A single unparsed style attribute of one component."""

    category: TokenCategory
    property: str
    value: Any


@dataclass
class AdaptedComponent:
    """A component mapped onto the shared shape, styles still raw."""

    record: ComponentRecord
    styles: list[RawStyleValue] = field(default_factory=list)


def iter_raw_components(inventory: Any) -> Iterator[tuple[Any, int]]:
    """Flatten an inventory depth-first, pre-order.

    Accepts a list of components, a dict wrapping one under a known key,
    or a single root node (optionally under ``document``).

    Yields:
        Tuples of (raw component, depth). Non-dict entries are yielded
        as-is so the caller can report and skip them.
    """
    if inventory is None:
        return
    if isinstance(inventory, dict):
        if "document" in inventory and isinstance(inventory["document"], dict):
            yield from _walk(inventory["document"], 0)
            return
        if _is_wrapper(inventory):
            for key in INVENTORY_LIST_KEYS:
                if isinstance(inventory.get(key), list):
                    for item in inventory[key]:
                        yield from _walk(item, 0)
                    return
        yield from _walk(inventory, 0)
        return
    if isinstance(inventory, list | tuple):
        for item in inventory:
            yield from _walk(item, 0)
        return
    yield inventory, 0


def _is_wrapper(data: dict[str, Any]) -> bool:
    # A wrapper holds the list but is not itself a node. Named wrappers
    # ({"name": "Home", "elements": [...]}) still count; a named dict with
    # only "children" is a node whose children _walk visits.
    if any(k in data for k in ("type", "tagName", "selector")):
        return False
    if any(isinstance(data.get(k), list) for k in INVENTORY_LIST_KEYS[:-1]):
        return True
    return not any(k in data for k in ("name", "id"))


def _walk(node: Any, depth: int) -> Iterator[tuple[Any, int]]:
    yield node, depth
    if isinstance(node, dict):
        children = node.get("children")
        if isinstance(children, list):
            for child in children:
                yield from _walk(child, depth + 1)


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def extract_geometry(data: dict[str, Any]) -> Geometry | None:
    """Find a bounding box under any of the known keys."""
    for key in GEOMETRY_KEYS:
        box = data.get(key)
        if not isinstance(box, dict):
            continue
        width = _number(box.get("width"))
        height = _number(box.get("height"))
        if width is None or height is None:
            continue
        x = _number(box.get("x", box.get("left"))) or 0.0
        y = _number(box.get("y", box.get("top"))) or 0.0
        return Geometry(x=x, y=y, width=width, height=height)
    return None


def _child_count(data: dict[str, Any]) -> int:
    children = data.get("children")
    if isinstance(children, list):
        return len(children)
    count = _number(data.get("childCount"))
    return int(count) if count is not None else 0


# Design source


def from_design_component(
    node: dict[str, Any], index: int = 0, depth: int = 0
) -> AdaptedComponent:
    """Map a design-tool node onto the shared component shape.

    Args:
        node: Raw node (design-tool node graph shape or the simplified
            ``properties`` shape).
        index: Position in the flattened inventory, used for fallback ids.
        depth: Nesting depth in the node tree.
    """
    node_type = str(node.get("type") or "FRAME").upper()
    node_id = str(node.get("id") or f"design-{index}")
    name = str(node.get("name") or node_id)
    properties = node.get("properties") if isinstance(node.get("properties"), dict) else {}

    record = ComponentRecord(
        id=node_id,
        display_name=name,
        origin=Origin.DESIGN,
        role_type=node_type,
        geometry=extract_geometry(node),
        child_count=_child_count(node),
        depth=depth,
        hints={
            "name": name,
            "layout_mode": node.get("layoutMode"),
            "has_layout_grid": bool(node.get("layoutGrids")),
            "layout": properties.get("layout"),
            "component_type": node.get("componentType"),
        },
    )

    styles: list[RawStyleValue] = []
    styles.extend(_design_fills(node, node_type))
    styles.extend(_design_effects(node))
    styles.extend(_design_typography(node))
    styles.extend(_design_numeric(node))
    styles.extend(_simplified_properties(properties))
    return AdaptedComponent(record=record, styles=styles)


def _design_fills(node: dict[str, Any], node_type: str) -> list[RawStyleValue]:
    fills = node.get("fills")
    if not isinstance(fills, list):
        return []

    prop = "color" if node_type == "TEXT" else "backgroundColor"
    values = []
    for paint in fills:
        if not isinstance(paint, dict) or paint.get("visible") is False:
            continue
        color = _paint_color(paint)
        if color is None:
            continue
        values.append(RawStyleValue(TokenCategory.COLOR, prop, color))
    return values


def _paint_color(paint: dict[str, Any]) -> Any:
    """Color of a solid paint, resolving variable references."""
    bound = paint.get("boundVariables")
    if isinstance(bound, dict) and "color" in bound:
        resolved = paint.get("resolvedValue", paint.get("value"))
        if resolved is not None:
            return _with_opacity(resolved, paint.get("opacity"))

    if paint.get("type", "SOLID") != "SOLID":
        return None
    color = paint.get("color")
    if color is None:
        return None
    return _with_opacity(color, paint.get("opacity"))


def _with_opacity(color: Any, opacity: Any) -> Any:
    opacity_value = _number(opacity)
    if isinstance(color, dict) and opacity_value is not None:
        merged = dict(color)
        alpha = _number(color.get("a"))
        merged["a"] = (1.0 if alpha is None else alpha) * opacity_value
        return merged
    return color


def _design_effects(node: dict[str, Any]) -> list[RawStyleValue]:
    effects = node.get("effects")
    if not isinstance(effects, list):
        return []

    values = []
    for effect in effects:
        if not isinstance(effect, dict) or effect.get("visible") is False:
            continue
        if effect.get("type") not in SHADOW_EFFECT_TYPES:
            continue
        offset = effect.get("offset") if isinstance(effect.get("offset"), dict) else {}
        values.append(
            RawStyleValue(
                TokenCategory.SHADOW,
                "effects",
                {
                    "offsetX": offset.get("x", 0),
                    "offsetY": offset.get("y", 0),
                    "blur": effect.get("radius", 0),
                    "spread": effect.get("spread", 0),
                    "color": effect.get("color"),
                    "inset": effect.get("type") == "INNER_SHADOW",
                },
            )
        )
    return values


def _design_typography(node: dict[str, Any]) -> list[RawStyleValue]:
    style = node.get("style")
    if not isinstance(style, dict) or not style.get("fontFamily"):
        return []

    line_height: Any = None
    if style.get("lineHeightPx") is not None:
        line_height = style["lineHeightPx"]
    elif style.get("lineHeightPercentFontSize") is not None:
        line_height = f"{style['lineHeightPercentFontSize']}%"

    return [
        RawStyleValue(
            TokenCategory.TYPOGRAPHY,
            "style",
            {
                "fontFamily": style.get("fontFamily"),
                "fontSize": style.get("fontSize"),
                "fontWeight": style.get("fontWeight"),
                "lineHeight": line_height,
            },
        )
    ]


def _design_numeric(node: dict[str, Any]) -> list[RawStyleValue]:
    values = []
    for prop in DESIGN_SPACING_PROPERTIES:
        if node.get(prop) is not None:
            values.append(RawStyleValue(TokenCategory.SPACING, prop, node[prop]))

    radii = node.get("rectangleCornerRadii")
    if isinstance(radii, list) and radii:
        values.append(RawStyleValue(TokenCategory.BORDER_RADIUS, "rectangleCornerRadii", radii))
    elif node.get("cornerRadius") is not None:
        values.append(
            RawStyleValue(TokenCategory.BORDER_RADIUS, "cornerRadius", node["cornerRadius"])
        )
    return values


def _simplified_properties(properties: dict[str, Any]) -> list[RawStyleValue]:
    values = []
    for prop in ("color", "backgroundColor"):
        if properties.get(prop) is not None:
            values.append(RawStyleValue(TokenCategory.COLOR, prop, properties[prop]))

    typography = properties.get("typography")
    if isinstance(typography, dict) and typography.get("fontFamily"):
        values.append(RawStyleValue(TokenCategory.TYPOGRAPHY, "typography", typography))

    spacing = properties.get("spacing")
    if isinstance(spacing, dict):
        for key, value in spacing.items():
            values.append(RawStyleValue(TokenCategory.SPACING, f"spacing.{key}", value))
    elif spacing is not None:
        values.append(RawStyleValue(TokenCategory.SPACING, "spacing", spacing))

    if properties.get("borderRadius") is not None:
        values.append(
            RawStyleValue(TokenCategory.BORDER_RADIUS, "borderRadius", properties["borderRadius"])
        )

    shadows = properties.get("shadows")
    if isinstance(shadows, str):
        shadows = [shadows]
    if isinstance(shadows, list):
        for shadow in shadows:
            values.append(RawStyleValue(TokenCategory.SHADOW, "shadows", shadow))
    return values


# Implementation source


def camel_case(name: str) -> str:
    """Convert a kebab-case CSS property name to camelCase."""
    return re.sub(r"-([a-z])", lambda m: m.group(1).upper(), name.strip())


def _computed_styles(element: dict[str, Any]) -> dict[str, Any]:
    styles = element.get("styles") or element.get("computedStyles") or {}
    if not isinstance(styles, dict):
        return {}
    return {camel_case(str(k)): v for k, v in styles.items()}


def from_implementation_component(
    element: dict[str, Any], index: int = 0, depth: int = 0
) -> AdaptedComponent:
    """Map a rendered-page element onto the shared component shape.

    Args:
        element: Raw element with computed styles and a bounding rect.
        index: Position in the flattened inventory, used for fallback ids.
        depth: Nesting depth in the element tree.
    """
    styles = _computed_styles(element)
    tag = str(element.get("tagName") or element.get("tag") or "div").lower()
    class_name = element.get("className") or ""
    if isinstance(class_name, list):
        class_name = " ".join(str(c) for c in class_name)

    element_id = str(element.get("id") or element.get("selector") or f"implementation-{index}")
    display_name = str(element.get("name") or element.get("selector") or _describe(tag, class_name))

    detailed = element.get("detailedStyles")
    layout = detailed.get("layout") if isinstance(detailed, dict) else None
    layout = layout if isinstance(layout, dict) else {}

    record = ComponentRecord(
        id=element_id,
        display_name=display_name,
        origin=Origin.IMPLEMENTATION,
        role_type=tag,
        geometry=extract_geometry(element),
        child_count=_child_count(element),
        depth=depth,
        hints={
            "name": display_name,
            "class_name": str(class_name),
            "role": element.get("role"),
            "input_type": element.get("type"),
            "text": element.get("text") or element.get("textContent"),
            "href": element.get("href"),
            "display": layout.get("display") or styles.get("display"),
            "position": layout.get("position") or styles.get("position"),
        },
    )

    values: list[RawStyleValue] = []
    for prop in ("color", "backgroundColor"):
        if styles.get(prop) is not None:
            values.append(RawStyleValue(TokenCategory.COLOR, prop, styles[prop]))

    if styles.get("fontFamily") and styles.get("fontSize") is not None:
        values.append(
            RawStyleValue(
                TokenCategory.TYPOGRAPHY,
                "font",
                {
                    "fontFamily": styles.get("fontFamily"),
                    "fontSize": styles.get("fontSize"),
                    "fontWeight": styles.get("fontWeight"),
                    "lineHeight": styles.get("lineHeight"),
                },
            )
        )

    for prop in SPACING_PROPERTIES:
        if styles.get(prop) is not None:
            values.append(RawStyleValue(TokenCategory.SPACING, prop, styles[prop]))
    for prop in RADIUS_PROPERTIES:
        if styles.get(prop) is not None:
            values.append(RawStyleValue(TokenCategory.BORDER_RADIUS, prop, styles[prop]))
    if styles.get("boxShadow") is not None:
        values.append(RawStyleValue(TokenCategory.SHADOW, "boxShadow", styles["boxShadow"]))

    return AdaptedComponent(record=record, styles=values)


def _describe(tag: str, class_name: str) -> str:
    first_class = class_name.split()[0] if class_name.split() else ""
    return f"{tag}.{first_class}" if first_class else tag
