"""Canonical design token models.

This module defines the source-independent token values (colors,
typography, spacing, radii, shadows) together with the parsers that turn
raw style strings from either source into those canonical values.
"""

import colorsys
import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

# 1pt = 1/72in, 1px = 1/96in
PT_TO_PX = 96.0 / 72.0


class TokenCategory(Enum):
    """Categories of design tokens, in reporting order."""

    COLOR = "color"
    TYPOGRAPHY = "typography"
    SPACING = "spacing"
    SHADOW = "shadow"
    BORDER_RADIUS = "borderRadius"


# Fixed iteration order for matching, discrepancy numbering and reporting
CATEGORY_ORDER: tuple[TokenCategory, ...] = (
    TokenCategory.COLOR,
    TokenCategory.TYPOGRAPHY,
    TokenCategory.SPACING,
    TokenCategory.SHADOW,
    TokenCategory.BORDER_RADIUS,
)


class Origin(Enum):
    """Which inventory a token or component came from."""

    DESIGN = "design"
    IMPLEMENTATION = "implementation"


CSS_NAMED_COLORS: dict[str, str] = {
    "aliceblue": "f0f8ff", "antiquewhite": "faebd7", "aqua": "00ffff",
    "aquamarine": "7fffd4", "azure": "f0ffff", "beige": "f5f5dc",
    "bisque": "ffe4c4", "black": "000000", "blanchedalmond": "ffebcd",
    "blue": "0000ff", "blueviolet": "8a2be2", "brown": "a52a2a",
    "burlywood": "deb887", "cadetblue": "5f9ea0", "chartreuse": "7fff00",
    "chocolate": "d2691e", "coral": "ff7f50", "cornflowerblue": "6495ed",
    "cornsilk": "fff8dc", "crimson": "dc143c", "cyan": "00ffff",
    "darkblue": "00008b", "darkcyan": "008b8b", "darkgoldenrod": "b8860b",
    "darkgray": "a9a9a9", "darkgreen": "006400", "darkgrey": "a9a9a9",
    "darkkhaki": "bdb76b", "darkmagenta": "8b008b", "darkolivegreen": "556b2f",
    "darkorange": "ff8c00", "darkorchid": "9932cc", "darkred": "8b0000",
    "darksalmon": "e9967a", "darkseagreen": "8fbc8f", "darkslateblue": "483d8b",
    "darkslategray": "2f4f4f", "darkslategrey": "2f4f4f",
    "darkturquoise": "00ced1", "darkviolet": "9400d3", "deeppink": "ff1493",
    "deepskyblue": "00bfff", "dimgray": "696969", "dimgrey": "696969",
    "dodgerblue": "1e90ff", "firebrick": "b22222", "floralwhite": "fffaf0",
    "forestgreen": "228b22", "fuchsia": "ff00ff", "gainsboro": "dcdcdc",
    "ghostwhite": "f8f8ff", "gold": "ffd700", "goldenrod": "daa520",
    "gray": "808080", "green": "008000", "greenyellow": "adff2f",
    "grey": "808080", "honeydew": "f0fff0", "hotpink": "ff69b4",
    "indianred": "cd5c5c", "indigo": "4b0082", "ivory": "fffff0",
    "khaki": "f0e68c", "lavender": "e6e6fa", "lavenderblush": "fff0f5",
    "lawngreen": "7cfc00", "lemonchiffon": "fffacd", "lightblue": "add8e6",
    "lightcoral": "f08080", "lightcyan": "e0ffff",
    "lightgoldenrodyellow": "fafad2", "lightgray": "d3d3d3",
    "lightgreen": "90ee90", "lightgrey": "d3d3d3", "lightpink": "ffb6c1",
    "lightsalmon": "ffa07a", "lightseagreen": "20b2aa", "lightskyblue": "87cefa",
    "lightslategray": "778899", "lightslategrey": "778899",
    "lightsteelblue": "b0c4de", "lightyellow": "ffffe0", "lime": "00ff00",
    "limegreen": "32cd32", "linen": "faf0e6", "magenta": "ff00ff",
    "maroon": "800000", "mediumaquamarine": "66cdaa", "mediumblue": "0000cd",
    "mediumorchid": "ba55d3", "mediumpurple": "9370db",
    "mediumseagreen": "3cb371", "mediumslateblue": "7b68ee",
    "mediumspringgreen": "00fa9a", "mediumturquoise": "48d1cc",
    "mediumvioletred": "c71585", "midnightblue": "191970", "mintcream": "f5fffa",
    "mistyrose": "ffe4e1", "moccasin": "ffe4b5", "navajowhite": "ffdead",
    "navy": "000080", "oldlace": "fdf5e6", "olive": "808000",
    "olivedrab": "6b8e23", "orange": "ffa500", "orangered": "ff4500",
    "orchid": "da70d6", "palegoldenrod": "eee8aa", "palegreen": "98fb98",
    "paleturquoise": "afeeee", "palevioletred": "db7093", "papayawhip": "ffefd5",
    "peachpuff": "ffdab9", "peru": "cd853f", "pink": "ffc0cb", "plum": "dda0dd",
    "powderblue": "b0e0e6", "purple": "800080", "rebeccapurple": "663399",
    "red": "ff0000", "rosybrown": "bc8f8f", "royalblue": "4169e1",
    "saddlebrown": "8b4513", "salmon": "fa8072", "sandybrown": "f4a460",
    "seagreen": "2e8b57", "seashell": "fff5ee", "sienna": "a0522d",
    "silver": "c0c0c0", "skyblue": "87ceeb", "slateblue": "6a5acd",
    "slategray": "708090", "slategrey": "708090", "snow": "fffafa",
    "springgreen": "00ff7f", "steelblue": "4682b4", "tan": "d2b48c",
    "teal": "008080", "thistle": "d8bfd8", "tomato": "ff6347",
    "turquoise": "40e0d0", "violet": "ee82ee", "wheat": "f5deb3",
    "white": "ffffff", "whitesmoke": "f5f5f5", "yellow": "ffff00",
    "yellowgreen": "9acd32",
}

FONT_WEIGHT_KEYWORDS: dict[str, int] = {
    "thin": 100,
    "hairline": 100,
    "extralight": 200,
    "ultralight": 200,
    "light": 300,
    "normal": 400,
    "regular": 400,
    "book": 400,
    "medium": 500,
    "semibold": 600,
    "demibold": 600,
    "bold": 700,
    "extrabold": 800,
    "ultrabold": 800,
    "black": 900,
    "heavy": 900,
}

_LENGTH_RE = re.compile(r"^(-?\d*\.?\d+(?:e-?\d+)?)\s*(px|pt|rem|em)?$")
_FUNC_RE = re.compile(r"^(rgba?|hsla?)\s*\((.*)\)$")
_SHADOW_COLOR_RE = re.compile(
    r"(rgba?\([^)]*\)|hsla?\([^)]*\)|#[0-9a-fA-F]{3,8}\b)"
)


def _require_finite(number: float, raw: Any) -> float:
    if not math.isfinite(number):
        raise ValueError(f"Non-finite value: {raw!r}")
    return number


def format_number(value: float) -> str:
    """Format a pixel quantity without trailing zeros ("16", "16.5")."""
    value = round(value, 2)
    if value == int(value):
        return str(int(value))
    return f"{value:g}"


@dataclass(frozen=True)
class ColorValue:
    """Canonical RGBA color: channels 0-255, alpha 0-1 (3 decimals)."""

    r: int
    g: int
    b: int
    a: float = 1.0

    @property
    def hex(self) -> str:
        """Opaque hex form, e.g. "#007BFF"."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    @property
    def rgba_hex(self) -> str:
        """Canonical hex form including alpha, e.g. "#007BFFFF"."""
        return f"{self.hex}{round(self.a * 255):02X}"

    @property
    def key(self) -> str:
        return self.rgba_hex

    def display(self) -> str:
        if self.a >= 1.0:
            return self.hex
        return f"rgba({self.r}, {self.g}, {self.b}, {self.a:g})"

    def max_channel_delta(self, other: "ColorValue") -> float:
        """Largest per-channel difference as a percentage of full scale.

        Alpha is scaled to 0-255 so that it weighs like a color channel.
        """
        deltas = (
            abs(self.r - other.r),
            abs(self.g - other.g),
            abs(self.b - other.b),
            abs(self.a - other.a) * 255,
        )
        return max(deltas) / 255 * 100

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"r": self.r, "g": self.g, "b": self.b, "a": self.a, "hex": self.hex}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ColorValue":
        """Create from dictionary."""
        return cls(r=data["r"], g=data["g"], b=data["b"], a=data.get("a", 1.0))

    @classmethod
    def from_channels(
        cls, r: float, g: float, b: float, a: float = 1.0
    ) -> "ColorValue":
        """Build a canonical color from 0-255 channels, clamping and rounding."""
        for channel in (r, g, b, a):
            _require_finite(float(channel), channel)
        return cls(
            r=_clamp_channel(r),
            g=_clamp_channel(g),
            b=_clamp_channel(b),
            a=round(min(max(float(a), 0.0), 1.0), 3),
        )

    @classmethod
    def from_unit_rgba(
        cls, color: dict[str, Any], opacity: float = 1.0
    ) -> "ColorValue":
        """Build from a design-tool color dict with 0-1 float channels.

        Dicts whose channels exceed 1 are treated as already 0-255.

        Raises:
            ValueError: If a channel is missing or not numeric.
        """
        try:
            channels = [float(color[c]) for c in ("r", "g", "b")]
            alpha = float(color.get("a", 1.0)) * float(opacity)
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid color object: {color!r}") from e

        scale = 1.0 if any(c > 1.0 for c in channels) else 255.0
        r, g, b = (c * scale for c in channels)
        return cls.from_channels(r, g, b, alpha)


def _clamp_channel(value: float) -> int:
    return int(round(min(max(float(value), 0.0), 255.0)))


def parse_color(value: str) -> ColorValue:
    """Parse a CSS-like color string into a canonical ColorValue.

    Supports: #RGB, #RGBA, #RRGGBB, #RRGGBBAA, rgb(), rgba(), hsl(),
    hsla() (comma or space separated, optional "/ alpha"), named colors
    and ``transparent``.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if not isinstance(value, str):
        raise ValueError(f"Color must be a string, got {type(value).__name__}")

    text = value.strip().lower()
    if not text:
        raise ValueError("Empty color value")

    if text == "transparent":
        return ColorValue(0, 0, 0, 0.0)

    if text in CSS_NAMED_COLORS:
        text = "#" + CSS_NAMED_COLORS[text]

    if text.startswith("#"):
        return _parse_hex(text)

    func_match = _FUNC_RE.match(text)
    if func_match:
        name, args = func_match.groups()
        parts = _split_color_args(args)
        if name.startswith("rgb"):
            return _parse_rgb_parts(parts, value)
        return _parse_hsl_parts(parts, value)

    raise ValueError(f"Unrecognized color: {value!r}")


def _parse_hex(text: str) -> ColorValue:
    digits = text[1:]
    if not re.fullmatch(r"[0-9a-f]+", digits) or len(digits) not in (3, 4, 6, 8):
        raise ValueError(f"Invalid hex color: {text!r}")

    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)

    r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    a = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
    return ColorValue.from_channels(r, g, b, a)


def _split_color_args(args: str) -> list[str]:
    args = args.replace("/", " / ")
    if "," in args:
        parts = [p.strip() for p in args.split(",")]
    else:
        parts = args.split()
    # "/ alpha" syntax: drop the separator
    return [p for p in parts if p and p != "/"]


def _parse_channel(part: str) -> float:
    if part.endswith("%"):
        return _require_finite(float(part[:-1]), part) / 100 * 255
    return _require_finite(float(part), part)


def _parse_alpha(part: str) -> float:
    if part.endswith("%"):
        return _require_finite(float(part[:-1]), part) / 100
    return _require_finite(float(part), part)


def _parse_rgb_parts(parts: list[str], original: str) -> ColorValue:
    if len(parts) not in (3, 4):
        raise ValueError(f"Invalid rgb color: {original!r}")
    try:
        r, g, b = (_parse_channel(p) for p in parts[:3])
        a = _parse_alpha(parts[3]) if len(parts) == 4 else 1.0
    except ValueError as e:
        raise ValueError(f"Invalid rgb color: {original!r}") from e
    return ColorValue.from_channels(r, g, b, a)


def _parse_hsl_parts(parts: list[str], original: str) -> ColorValue:
    if len(parts) not in (3, 4):
        raise ValueError(f"Invalid hsl color: {original!r}")
    try:
        hue = _require_finite(float(parts[0].removesuffix("deg")), parts[0]) % 360
        sat = _require_finite(float(parts[1].rstrip("%")), parts[1]) / 100
        light = _require_finite(float(parts[2].rstrip("%")), parts[2]) / 100
        a = _parse_alpha(parts[3]) if len(parts) == 4 else 1.0
    except ValueError as e:
        raise ValueError(f"Invalid hsl color: {original!r}") from e

    r, g, b = colorsys.hls_to_rgb(hue / 360, light, sat)
    return ColorValue.from_channels(r * 255, g * 255, b * 255, a)


def parse_length(value: Any, base_font_size: float = 16.0) -> float:
    """Normalize a length to pixels.

    Supports px, pt (x 96/72), rem and em (x base_font_size) and plain
    numbers (pixels).

    Raises:
        ValueError: For percentages, viewport units, keywords or garbage.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid length: {value!r}")
    if isinstance(value, int | float):
        return _require_finite(float(value), value)
    if not isinstance(value, str):
        raise ValueError(f"Invalid length: {value!r}")

    match = _LENGTH_RE.match(value.strip().lower())
    if not match:
        raise ValueError(f"Unsupported length: {value!r}")

    number = _require_finite(float(match.group(1)), value)
    unit = match.group(2) or "px"
    if unit == "pt":
        return number * PT_TO_PX
    if unit in ("rem", "em"):
        return number * base_font_size
    return number


def parse_lengths(value: Any, base_font_size: float = 16.0) -> list[float]:
    """Parse a single length or a whitespace-separated shorthand.

    Keywords inside a shorthand (e.g. ``auto``) are ignored.
    """
    if isinstance(value, str):
        results = []
        for part in value.split():
            try:
                results.append(parse_length(part, base_font_size))
            except ValueError:
                continue
        return results
    if isinstance(value, list | tuple):
        results = []
        for part in value:
            try:
                results.append(parse_length(part, base_font_size))
            except ValueError:
                continue
        return results
    return [parse_length(value, base_font_size)]


def normalize_font_weight(value: Any) -> int:
    """Map a font weight (number or keyword) onto the 100-900 scale.

    Raises:
        ValueError: If the keyword is unknown.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid font weight: {value!r}")
    if isinstance(value, int | float):
        _require_finite(float(value), value)
        return int(min(max(round(value), 1), 1000))

    text = str(value).strip().lower()
    if re.fullmatch(r"\d+(\.\d+)?", text):
        return int(min(max(round(float(text)), 1), 1000))

    keyword = re.sub(r"[\s_-]", "", text)
    if keyword in FONT_WEIGHT_KEYWORDS:
        return FONT_WEIGHT_KEYWORDS[keyword]
    raise ValueError(f"Unknown font weight: {value!r}")


def normalize_font_family(value: str) -> tuple[str, tuple[str, ...]]:
    """Lower-case and unquote a font-family list.

    Returns:
        Tuple of (primary family, full normalized stack).

    Raises:
        ValueError: If no family name is present.
    """
    if not isinstance(value, str):
        raise ValueError(f"Font family must be a string: {value!r}")

    stack = tuple(
        name
        for name in (
            part.strip().strip("'\"").strip().lower() for part in value.split(",")
        )
        if name
    )
    if not stack:
        raise ValueError(f"Empty font family: {value!r}")
    return stack[0], stack


def parse_line_height(value: Any, font_size: float, base_font_size: float = 16.0):
    """Resolve a line height to pixels.

    Numbers are pixels; unitless strings and percentages are multipliers of
    the font size; ``normal`` yields None.
    """
    if value is None:
        return None
    if isinstance(value, int | float) and not isinstance(value, bool):
        _require_finite(float(value), value)
        return float(value) if value > 0 else None

    text = str(value).strip().lower()
    if text in ("", "normal", "auto"):
        return None
    if text.endswith("%"):
        return _require_finite(float(text[:-1]), value) / 100 * font_size
    if re.fullmatch(r"\d*\.?\d+", text):
        return float(text) * font_size
    return parse_length(text, base_font_size)


@dataclass(frozen=True)
class TypographyValue:
    """Canonical typography: primary family, px size, numeric weight.

    ``stack`` keeps the full family list for display only and does not
    take part in equality.
    """

    family: str
    size: float
    weight: int = 400
    line_height: float | None = None
    stack: tuple[str, ...] = field(default=(), compare=False)

    @property
    def key(self) -> str:
        line_height = (
            format_number(self.line_height) if self.line_height is not None else "normal"
        )
        return f"{self.family}|{format_number(self.size)}|{self.weight}|{line_height}"

    def display(self) -> str:
        family = ", ".join(self.stack) if self.stack else self.family
        size = f"{format_number(self.size)}px"
        if self.line_height is not None:
            size += f"/{format_number(self.line_height)}px"
        return f"{family} {size} {self.weight}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "family": self.family,
            "size": self.size,
            "weight": self.weight,
            "lineHeight": self.line_height,
            "stack": list(self.stack),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TypographyValue":
        """Create from dictionary."""
        return cls(
            family=data["family"],
            size=data["size"],
            weight=data.get("weight", 400),
            line_height=data.get("lineHeight"),
            stack=tuple(data.get("stack", ())),
        )


@dataclass(frozen=True)
class ShadowValue:
    """Canonical shadow geometry in pixels plus its color."""

    offset_x: float
    offset_y: float
    blur: float = 0.0
    spread: float = 0.0
    color: ColorValue | None = None
    inset: bool = False

    @property
    def elevation(self) -> float:
        """Perceived elevation: max(blur, |offsetY|)."""
        return max(self.blur, abs(self.offset_y))

    @property
    def key(self) -> str:
        color = self.color.key if self.color else "currentcolor"
        prefix = "inset " if self.inset else ""
        lengths = ",".join(
            format_number(v)
            for v in (self.offset_x, self.offset_y, self.blur, self.spread)
        )
        return f"{prefix}{lengths},{color}"

    def display(self) -> str:
        color = self.color.display() if self.color else "currentColor"
        prefix = "inset " if self.inset else ""
        lengths = " ".join(
            f"{format_number(v)}px"
            for v in (self.offset_x, self.offset_y, self.blur, self.spread)
        )
        return f"{prefix}{lengths} {color}"

    def is_empty(self) -> bool:
        return not any((self.offset_x, self.offset_y, self.blur, self.spread))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "offsetX": self.offset_x,
            "offsetY": self.offset_y,
            "blur": self.blur,
            "spread": self.spread,
            "color": self.color.to_dict() if self.color else None,
            "inset": self.inset,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShadowValue":
        """Create from dictionary."""
        color = data.get("color")
        return cls(
            offset_x=data["offsetX"],
            offset_y=data["offsetY"],
            blur=data.get("blur", 0.0),
            spread=data.get("spread", 0.0),
            color=ColorValue.from_dict(color) if color else None,
            inset=data.get("inset", False),
        )


def parse_box_shadow(value: str, base_font_size: float = 16.0) -> list[ShadowValue]:
    """Parse a (possibly multi-layer) CSS box-shadow value.

    Raises:
        ValueError: If a layer has too few or too many lengths.
    """
    if not isinstance(value, str):
        raise ValueError(f"Shadow must be a string: {value!r}")

    text = value.strip()
    if not text or text.lower() == "none":
        return []

    shadows = []
    for layer in _split_top_level(text):
        inset = False
        color = None

        color_match = _SHADOW_COLOR_RE.search(layer)
        if color_match:
            color = parse_color(color_match.group(1))
            layer = layer[: color_match.start()] + layer[color_match.end() :]

        lengths = []
        for part in layer.split():
            lowered = part.lower()
            if lowered == "inset":
                inset = True
            elif lowered in CSS_NAMED_COLORS or lowered == "transparent":
                color = parse_color(lowered)
            elif lowered != "currentcolor":
                lengths.append(parse_length(part, base_font_size))

        if len(lengths) not in (2, 3, 4):
            raise ValueError(f"Invalid shadow layer: {layer!r}")
        lengths += [0.0] * (4 - len(lengths))

        shadows.append(
            ShadowValue(
                offset_x=round(lengths[0], 2),
                offset_y=round(lengths[1], 2),
                blur=round(lengths[2], 2),
                spread=round(lengths[3], 2),
                color=color,
                inset=inset,
            )
        )
    return shadows


def _split_top_level(text: str) -> list[str]:
    """Split on commas that are not inside parentheses."""
    parts = []
    depth = 0
    current = []
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    parts.append("".join(current).strip())
    return [p for p in parts if p]


TokenValue = Union[ColorValue, TypographyValue, ShadowValue, float]


def token_key(category: TokenCategory, value: TokenValue) -> str:
    """Canonical identity key of a token value within its category."""
    if isinstance(value, ColorValue | TypographyValue | ShadowValue):
        return value.key
    return format_number(value)


@dataclass(frozen=True)
class TokenSource:
    """One raw occurrence that normalized to a token."""

    origin: Origin
    component_ref: str
    raw_value: str
    property: str | None = None  # e.g. "backgroundColor", "paddingTop"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "origin": self.origin.value,
            "componentRef": self.component_ref,
            "rawValue": self.raw_value,
            "property": self.property,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenSource":
        """Create from dictionary."""
        return cls(
            origin=Origin(data["origin"]),
            component_ref=data["componentRef"],
            raw_value=data["rawValue"],
            property=data.get("property"),
        )


@dataclass(frozen=True)
class Token:
    """A canonical design primitive with provenance.

    Tokens are created once per unique normalized value and are immutable.
    Two raw values that are semantically identical share one token.
    """

    category: TokenCategory
    value: TokenValue
    sources: tuple[TokenSource, ...] = ()

    @property
    def key(self) -> str:
        return token_key(self.category, self.value)

    @property
    def id(self) -> str:
        """Source-independent token id, e.g. "color:#007BFFFF"."""
        return f"{self.category.value}:{self.key}"

    @property
    def usage(self) -> int:
        """Number of raw occurrences behind this token."""
        return len(self.sources)

    @property
    def component_refs(self) -> list[str]:
        """Distinct component refs in first-seen order."""
        return list(dict.fromkeys(s.component_ref for s in self.sources))

    def display_value(self) -> str:
        if isinstance(self.value, ColorValue | TypographyValue | ShadowValue):
            return self.value.display()
        return f"{format_number(self.value)}px"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        if isinstance(self.value, ColorValue | TypographyValue | ShadowValue):
            value: Any = self.value.to_dict()
        else:
            value = self.value
        return {
            "id": self.id,
            "category": self.category.value,
            "value": value,
            "sources": [s.to_dict() for s in self.sources],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Token":
        """Create from dictionary."""
        category = TokenCategory(data["category"])
        raw = data["value"]
        value: TokenValue
        if category == TokenCategory.COLOR:
            value = ColorValue.from_dict(raw)
        elif category == TokenCategory.TYPOGRAPHY:
            value = TypographyValue.from_dict(raw)
        elif category == TokenCategory.SHADOW:
            value = ShadowValue.from_dict(raw)
        else:
            value = float(raw)
        return cls(
            category=category,
            value=value,
            sources=tuple(TokenSource.from_dict(s) for s in data.get("sources", [])),
        )
