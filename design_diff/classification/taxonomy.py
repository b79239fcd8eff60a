"""The closed component taxonomy shared by both sources."""

from ..models import ComponentFamily

TAXONOMY: dict[ComponentFamily, tuple[str, ...]] = {
    ComponentFamily.ATOM: (
        "typography",
        "buttons",
        "icons",
        "inputs",
        "badges",
        "dividers",
        "loaders",
    ),
    ComponentFamily.MOLECULE: (
        "cards",
        "navigation",
        "formGroups",
        "searchBoxes",
        "tabs",
        "dropdowns",
        "modals",
        "pagination",
        "accordions",
    ),
    ComponentFamily.ORGANISM: (
        "headers",
        "footers",
        "sidebars",
        "tables",
        "forms",
        "galleries",
        "dashboards",
        "articles",
    ),
    ComponentFamily.LAYOUT: (
        "flexbox",
        "grids",
        "containers",
        "positioning",
    ),
    ComponentFamily.UNCLASSIFIED: ("unclassified",),
}


def is_valid_subtype(family: ComponentFamily, subtype: str) -> bool:
    """Check that a subtype belongs to the given family."""
    return subtype in TAXONOMY.get(family, ())


def all_subtypes() -> list[str]:
    """Every subtype across all families, in taxonomy order."""
    return [subtype for subtypes in TAXONOMY.values() for subtype in subtypes]
