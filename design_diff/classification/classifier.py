"""Rule-based component classifier.

Components are classified into the closed taxonomy by an ordered list of
``ClassificationRule`` objects evaluated top to bottom; the first rule
whose predicate holds decides. The default list ends with an explicit
``unclassified`` rule, so running off the end of the list is a
programming error and raises ``ClassificationError``.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ..diff_logging import LogCategory, get_category_logger
from ..models import UNCLASSIFIED, Classification, ComponentFamily, ComponentRecord
from ..tokens import Origin
from .signals import (
    ComponentSignals,
    DesignSignalExtractor,
    ImplementationSignalExtractor,
    SignalExtractor,
)
from .taxonomy import is_valid_subtype

logger = get_category_logger(LogCategory.CLASSIFIER)


class ClassificationError(RuntimeError):
    """Raised when the rule list cannot produce a valid classification."""


Predicate = Callable[[ComponentSignals], bool]


@dataclass(frozen=True)
class ClassificationRule:
    """One ``(predicate, result)`` entry of the ordered rule list."""

    name: str
    predicate: Predicate
    family: ComponentFamily
    subtype: str

    def matches(self, signals: ComponentSignals) -> bool:
        return self.predicate(signals)

    @property
    def classification(self) -> Classification:
        return Classification(self.family, self.subtype)


def _tag(*tags: str, roles: tuple[str, ...] = ()) -> Predicate:
    return lambda s: s.tag in tags or (s.role is not None and s.role in roles)


def _keywords(*words: str, exclude: tuple[str, ...] = ()) -> Predicate:
    return lambda s: s.has_keyword(*words) and not s.has_keyword(*exclude)


def _composite(*words: str, exclude: tuple[str, ...] = ()) -> Predicate:
    # Molecule and organism names only count for nodes that contain something
    return lambda s: s.child_count > 0 and s.has_keyword(*words) and not s.has_keyword(*exclude)


def _is_button(s: ComponentSignals) -> bool:
    if s.tag == "button" or s.role == "button":
        return True
    return s.tag == "input" and s.input_type in ("button", "submit", "reset")


def _is_control(s: ComponentSignals) -> bool:
    # Clickable leaf no earlier rule claimed; links stay typography
    return s.interactive and not s.is_link and not s.is_text and s.child_count <= 1


def _is_container(s: ComponentSignals) -> bool:
    return s.child_count > 0 or s.has_keyword(
        "container", "wrapper", "section", "layout", "row", "column", "stack"
    )


ATOM = ComponentFamily.ATOM
MOLECULE = ComponentFamily.MOLECULE
ORGANISM = ComponentFamily.ORGANISM
LAYOUT = ComponentFamily.LAYOUT


def default_rules() -> list[ClassificationRule]:
    """The default ordered rule list.

    Order: semantic tags and roles, composite names (organisms before
    molecules), atom names and node kinds, layout behaviour, fallback.
    """
    return [
        # Semantic tags and ARIA roles
        ClassificationRule("button-element", _is_button, ATOM, "buttons"),
        ClassificationRule(
            "input-element",
            _tag(
                "input",
                "textarea",
                "select",
                roles=("textbox", "searchbox", "combobox", "checkbox", "radio", "switch"),
            ),
            ATOM,
            "inputs",
        ),
        ClassificationRule("rule-element", _tag("hr", roles=("separator",)), ATOM, "dividers"),
        ClassificationRule(
            "progress-element", _tag("progress", roles=("progressbar",)), ATOM, "loaders"
        ),
        ClassificationRule("image-element", _tag("svg", "img", "picture", roles=("img",)), ATOM, "icons"),
        ClassificationRule("header-element", _tag("header", roles=("banner",)), ORGANISM, "headers"),
        ClassificationRule("footer-element", _tag("footer", roles=("contentinfo",)), ORGANISM, "footers"),
        ClassificationRule("nav-element", _tag("nav", roles=("navigation",)), MOLECULE, "navigation"),
        ClassificationRule("aside-element", _tag("aside", roles=("complementary",)), ORGANISM, "sidebars"),
        ClassificationRule("table-element", _tag("table", roles=("table", "grid")), ORGANISM, "tables"),
        ClassificationRule("form-element", _tag("form", roles=("form",)), ORGANISM, "forms"),
        ClassificationRule("article-element", _tag("article", roles=("article",)), ORGANISM, "articles"),
        ClassificationRule(
            "dialog-element", _tag("dialog", roles=("dialog", "alertdialog")), MOLECULE, "modals"
        ),
        ClassificationRule("tablist-element", _tag(roles=("tablist",)), MOLECULE, "tabs"),
        ClassificationRule("tab-element", _tag(roles=("tab",)), MOLECULE, "tabs"),
        ClassificationRule(
            "menu-element", _tag(roles=("menu", "menubar", "menuitem")), MOLECULE, "navigation"
        ),
        ClassificationRule("disclosure-element", _tag("details", "summary"), MOLECULE, "accordions"),
        # Organisms by name
        ClassificationRule("header-name", _composite("header", "topbar", "masthead"), ORGANISM, "headers"),
        ClassificationRule("footer-name", _composite("footer"), ORGANISM, "footers"),
        ClassificationRule(
            "sidebar-name", _composite("sidebar", "sidenav", "drawer", "aside"), ORGANISM, "sidebars"
        ),
        ClassificationRule("table-name", _composite("table", "datatable", "datagrid"), ORGANISM, "tables"),
        ClassificationRule(
            "form-name",
            _composite("form", exclude=("formgroup", "formfield", "formrow", "formitem")),
            ORGANISM,
            "forms",
        ),
        ClassificationRule(
            "gallery-name", _composite("gallery", "carousel", "slider", "slideshow"), ORGANISM, "galleries"
        ),
        ClassificationRule("dashboard-name", _composite("dashboard"), ORGANISM, "dashboards"),
        ClassificationRule("article-name", _composite("article", "post", "blog", "story"), ORGANISM, "articles"),
        # Molecules by name
        ClassificationRule(
            "search-name", _composite("search", "searchbox", "searchbar"), MOLECULE, "searchBoxes"
        ),
        ClassificationRule(
            "form-group-name",
            _composite("formgroup", "formfield", "formrow", "formitem", "fieldset", "field"),
            MOLECULE,
            "formGroups",
        ),
        ClassificationRule(
            "navigation-name",
            _composite("nav", "navbar", "navigation", "menu", "breadcrumb", "breadcrumbs"),
            MOLECULE,
            "navigation",
        ),
        ClassificationRule("tabs-name", _composite("tab", "tabs", "tablist", "tabbar"), MOLECULE, "tabs"),
        ClassificationRule(
            "dropdown-name", _composite("dropdown", "select", "combobox", "popover"), MOLECULE, "dropdowns"
        ),
        ClassificationRule("modal-name", _composite("modal", "dialog", "popup", "overlay"), MOLECULE, "modals"),
        ClassificationRule(
            "pagination-name", _composite("pagination", "pager", "paginator"), MOLECULE, "pagination"
        ),
        ClassificationRule(
            "accordion-name", _composite("accordion", "collapse", "collapsible", "disclosure"), MOLECULE, "accordions"
        ),
        ClassificationRule("card-name", _composite("card", "tile", "panel"), MOLECULE, "cards"),
        # Atoms by name and node kind
        ClassificationRule("button-name", _keywords("button", "btn", "cta", "submit"), ATOM, "buttons"),
        ClassificationRule(
            "input-name",
            _keywords("input", "textfield", "textbox", "textarea", "checkbox", "radio", "toggle", "switch"),
            ATOM,
            "inputs",
        ),
        ClassificationRule(
            "icon-name", lambda s: s.is_vector or s.has_keyword("icon", "glyph", "logo"), ATOM, "icons"
        ),
        ClassificationRule("badge-name", _keywords("badge", "chip", "pill", "tag"), ATOM, "badges"),
        ClassificationRule(
            "divider-name", lambda s: s.is_line or s.has_keyword("divider", "separator", "hr"), ATOM, "dividers"
        ),
        ClassificationRule(
            "loader-name", _keywords("loader", "spinner", "loading", "progress", "skeleton"), ATOM, "loaders"
        ),
        ClassificationRule("interactive-control", _is_control, ATOM, "buttons"),
        ClassificationRule(
            "text-node",
            lambda s: s.is_text
            or s.is_link
            or s.has_keyword("heading", "title", "text", "label", "paragraph", "caption", "link"),
            ATOM,
            "typography",
        ),
        # Layout behaviour
        ClassificationRule("flex-layout", lambda s: s.layout == "flex", LAYOUT, "flexbox"),
        ClassificationRule("grid-layout", lambda s: s.layout == "grid", LAYOUT, "grids"),
        ClassificationRule("positioned-layout", lambda s: s.layout == "positioned", LAYOUT, "positioning"),
        ClassificationRule("container", _is_container, LAYOUT, "containers"),
        # Explicit "don't know"
        ClassificationRule(
            "fallback", lambda s: True, UNCLASSIFIED.family, UNCLASSIFIED.subtype
        ),
    ]


class ComponentClassifier:
    """Assigns every component a taxonomy family and subtype.

    Both origins share one rule list; only the signal extraction differs.
    """

    def __init__(
        self,
        rules: Iterable[ClassificationRule] | None = None,
        extractors: dict[Origin, SignalExtractor] | None = None,
    ):
        """Initialize the classifier.

        Args:
            rules: Ordered rules; defaults to ``default_rules()``.
            extractors: Signal extractor per origin.

        Raises:
            ClassificationError: If a rule names a subtype outside the taxonomy.
        """
        self.rules = list(rules) if rules is not None else default_rules()
        for rule in self.rules:
            if not is_valid_subtype(rule.family, rule.subtype):
                raise ClassificationError(
                    f"Rule '{rule.name}' targets unknown subtype "
                    f"{rule.family.value}/{rule.subtype}"
                )

        self.extractors: dict[Origin, SignalExtractor] = extractors or {
            Origin.DESIGN: DesignSignalExtractor(),
            Origin.IMPLEMENTATION: ImplementationSignalExtractor(),
        }

    def signals_for(self, component: ComponentRecord) -> ComponentSignals:
        return self.extractors[component.origin].extract(component)

    def classify(self, component: ComponentRecord) -> Classification:
        """Classify one component; first matching rule wins.

        Raises:
            ClassificationError: If no rule matches.
        """
        signals = self.signals_for(component)
        for rule in self.rules:
            if rule.matches(signals):
                logger.debug(f"Classified {component} as {rule.classification} via {rule.name}")
                return rule.classification
        raise ClassificationError(f"No classification rule matched {component}")

    def classify_all(self, components: list[ComponentRecord]) -> list[ComponentRecord]:
        """Return copies of the components with classifications attached."""
        classified = [c.with_classification(self.classify(c)) for c in components]
        logger.debug(
            f"Classified {len(classified)} components",
            extra={"operation": "classify", "component_count": len(classified)},
        )
        return classified
