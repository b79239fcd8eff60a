"""Classification signal extraction.

Design nodes and rendered elements expose different raw evidence (node
types and layout modes on one side, tags, roles and computed display on
the other). Each source has an extractor that reduces a component record
to the same ``ComponentSignals`` so the rules never look at raw shapes.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from ..models import ComponentRecord

INTERACTIVE_KEYWORDS = frozenset(
    ["button", "btn", "cta", "link", "input", "submit", "action", "toggle", "checkbox"]
)

INTERACTIVE_TAGS = frozenset(["a", "button", "input", "select", "textarea", "summary"])

INTERACTIVE_ROLES = frozenset(
    [
        "button",
        "link",
        "tab",
        "menuitem",
        "checkbox",
        "radio",
        "switch",
        "textbox",
        "searchbox",
        "combobox",
        "option",
    ]
)

TEXT_TAGS = frozenset(
    [
        "p",
        "span",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "label",
        "strong",
        "em",
        "b",
        "i",
        "small",
        "blockquote",
        "code",
        "pre",
    ]
)

VECTOR_NODE_TYPES = frozenset(["VECTOR", "BOOLEAN_OPERATION", "STAR", "POLYGON"])

FLEX_LAYOUT_MODES = frozenset(["HORIZONTAL", "VERTICAL", "FLEX"])

POSITIONED_VALUES = frozenset(["absolute", "fixed", "sticky"])


def tokenize_name(*parts: Any) -> frozenset[str]:
    """Split names into lower-case words for keyword lookup.

    Splits on non-alphanumerics and camelCase boundaries and adds joined
    neighbours ("search-box" also yields "searchbox") and naive singulars
    ("buttons" also yields "button"). Whole words only, so "table" never
    matches "tab".
    """
    words: set[str] = set()
    for part in parts:
        if not part:
            continue
        spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", str(part))
        pieces = [p.lower() for p in re.split(r"[^A-Za-z0-9]+", spaced) if p]
        words.update(pieces)
        words.update(a + b for a, b in zip(pieces, pieces[1:], strict=False))
    words.update(w[:-1] for w in list(words) if len(w) > 3 and w.endswith("s"))
    return frozenset(words)


@dataclass(frozen=True)
class ComponentSignals:
    """Source-independent evidence used by classification rules."""

    node_type: str
    tag: str | None = None
    role: str | None = None
    input_type: str | None = None
    words: frozenset[str] = frozenset()
    interactive: bool = False
    is_link: bool = False
    is_text: bool = False
    is_vector: bool = False
    is_line: bool = False
    layout: str | None = None  # "flex", "grid" or "positioned"
    child_count: int = 0

    def has_keyword(self, *keywords: str) -> bool:
        return any(k in self.words for k in keywords)


class SignalExtractor(ABC):
    """Reduces a component record to classification signals."""

    @abstractmethod
    def extract(self, component: ComponentRecord) -> ComponentSignals:
        """Extract signals from a component of this extractor's origin."""


class DesignSignalExtractor(SignalExtractor):
    """Signals from design-tool nodes: node type, naming, auto layout."""

    def extract(self, component: ComponentRecord) -> ComponentSignals:
        hints = component.hints
        node_type = component.role_type.upper()
        words = tokenize_name(component.display_name, hints.get("component_type"))

        return ComponentSignals(
            node_type=node_type,
            words=words,
            interactive=bool(words & INTERACTIVE_KEYWORDS),
            is_link="link" in words,
            is_text=node_type == "TEXT",
            is_vector=node_type in VECTOR_NODE_TYPES,
            is_line=node_type == "LINE",
            layout=self._layout(hints),
            child_count=component.child_count,
        )

    @staticmethod
    def _layout(hints: dict[str, Any]) -> str | None:
        mode = str(hints.get("layout_mode") or "").upper()
        if mode == "GRID" or hints.get("has_layout_grid"):
            return "grid"
        if mode in FLEX_LAYOUT_MODES:
            return "flex"

        layout = hints.get("layout")
        if isinstance(layout, dict):
            display = str(layout.get("display") or "").lower()
            if "grid" in display:
                return "grid"
            if "flex" in display:
                return "flex"
            if str(layout.get("position") or "").lower() in POSITIONED_VALUES:
                return "positioned"
        return None


class ImplementationSignalExtractor(SignalExtractor):
    """Signals from rendered elements: tag, ARIA role, classes, display."""

    def extract(self, component: ComponentRecord) -> ComponentSignals:
        hints = component.hints
        tag = component.role_type.lower()
        role = str(hints.get("role") or "").lower() or None
        input_type = str(hints.get("input_type") or "").lower() or None
        words = tokenize_name(
            hints.get("class_name"),
            component.id,
            component.display_name,
        )

        is_link = tag == "a" or role == "link"
        interactive = (
            tag in INTERACTIVE_TAGS
            or role in INTERACTIVE_ROLES
            or bool(words & INTERACTIVE_KEYWORDS)
        )

        return ComponentSignals(
            node_type=tag,
            tag=tag,
            role=role,
            input_type=input_type,
            words=words,
            interactive=interactive,
            is_link=is_link,
            is_text=tag in TEXT_TAGS,
            is_vector=tag in ("svg", "img", "picture"),
            is_line=tag == "hr",
            layout=self._layout(hints),
            child_count=component.child_count,
        )

    @staticmethod
    def _layout(hints: dict[str, Any]) -> str | None:
        display = str(hints.get("display") or "").lower()
        if "grid" in display:
            return "grid"
        if "flex" in display:
            return "flex"
        if str(hints.get("position") or "").lower() in POSITIONED_VALUES:
            return "positioned"
        return None
