"""Unit tests for the rule-based component classifier."""

import pytest

from design_diff.classification import (
    ClassificationError,
    ClassificationRule,
    ComponentClassifier,
)
from design_diff.classification.signals import tokenize_name
from design_diff.classification.taxonomy import TAXONOMY, all_subtypes, is_valid_subtype
from design_diff.models import ComponentFamily, ComponentRecord
from design_diff.normalizers import TokenNormalizer
from design_diff.tokens import Origin


def design_node(name: str, node_type: str = "FRAME", children: int = 0, **hints) -> ComponentRecord:
    return ComponentRecord(
        id=name,
        display_name=name,
        origin=Origin.DESIGN,
        role_type=node_type,
        child_count=children,
        hints={"name": name, **hints},
    )


def element(tag: str, children: int = 0, class_name: str = "", **hints) -> ComponentRecord:
    element_id = f"{tag}-{class_name}" if class_name else tag
    return ComponentRecord(
        id=element_id,
        display_name=element_id,
        origin=Origin.IMPLEMENTATION,
        role_type=tag,
        child_count=children,
        hints={"class_name": class_name, **hints},
    )


@pytest.fixture
def classifier() -> ComponentClassifier:
    """Create a classifier with the default rules."""
    return ComponentClassifier()


class TestTaxonomy:
    """Tests for the closed taxonomy."""

    def test_families(self):
        """Test every family is present and subtypes are unique."""
        assert set(TAXONOMY) == set(ComponentFamily)
        assert len(all_subtypes()) == len(set(all_subtypes()))

    def test_is_valid_subtype(self):
        """Test subtype membership is per family."""
        assert is_valid_subtype(ComponentFamily.ATOM, "buttons")
        assert not is_valid_subtype(ComponentFamily.MOLECULE, "buttons")


class TestTokenizeName:
    """Tests for name tokenization."""

    def test_camel_case_and_joins(self):
        """Test camelCase splits and joined neighbours."""
        words = tokenize_name("SearchBox")
        assert {"search", "box", "searchbox"} <= words

    def test_plurals(self):
        """Test naive singulars are added."""
        assert "button" in tokenize_name("primary-buttons")

    def test_whole_words(self):
        """Test a longer word never matches a prefix."""
        assert "tab" not in tokenize_name("Data Table")


class TestImplementationRules:
    """Tests for rendered-element classification."""

    @pytest.mark.parametrize(
        ("record", "bucket"),
        [
            (element("button"), "atom/buttons"),
            (element("div", role="button"), "atom/buttons"),
            (element("input", input_type="submit"), "atom/buttons"),
            (element("input", input_type="text"), "atom/inputs"),
            (element("svg"), "atom/icons"),
            (element("hr"), "atom/dividers"),
            (element("h1"), "atom/typography"),
            (element("a", href="/about"), "atom/typography"),
            (element("nav", children=3), "molecule/navigation"),
            (element("header", children=2), "organism/headers"),
            (element("footer"), "organism/footers"),
            (element("div", children=2, class_name="product-card"), "molecule/cards"),
            (element("div", class_name="status-badge"), "atom/badges"),
            (element("div", display="grid"), "layout/grids"),
            (element("div", display="inline-flex"), "layout/flexbox"),
            (element("div", position="absolute"), "layout/positioning"),
            (element("div", children=3), "layout/containers"),
            (element("div"), "unclassified/unclassified"),
        ],
    )
    def test_rules(self, classifier, record, bucket):
        """Test each rule on a minimal element."""
        assert classifier.classify(record).bucket == bucket

    @pytest.mark.parametrize(
        ("record", "bucket"),
        [
            (element("li", role="tab"), "molecule/tabs"),
            (element("li", role="menuitem"), "molecule/navigation"),
            (element("div", role="switch"), "atom/inputs"),
            (element("summary"), "molecule/accordions"),
            (element("div", role="option"), "atom/buttons"),
            (element("div", class_name="quick-action"), "atom/buttons"),
        ],
    )
    def test_interactive_affordances(self, classifier, record, bucket):
        """Test roles and clickable leaves drive classification."""
        assert classifier.classify(record).bucket == bucket

    def test_interactive_signal(self, classifier):
        """Test the interactive signal is set for controls and not for plain boxes."""
        assert classifier.signals_for(element("div", role="option")).interactive
        assert classifier.signals_for(element("span", class_name="toggle")).interactive
        assert not classifier.signals_for(element("div", class_name="hero")).interactive

    def test_interactive_parents_and_links_are_not_controls(self, classifier):
        """Test only interactive leaves become buttons."""
        assert classifier.classify(element("div", children=3, class_name="action")).bucket == "layout/containers"
        assert classifier.classify(element("a", class_name="action")).bucket == "atom/typography"


class TestDesignRules:
    """Tests for design-node classification."""

    @pytest.mark.parametrize(
        ("record", "bucket"),
        [
            (design_node("Primary Button", "COMPONENT", children=1), "atom/buttons"),
            (design_node("Arrow", "VECTOR"), "atom/icons"),
            (design_node("Rule", "LINE"), "atom/dividers"),
            (design_node("Heading", "TEXT"), "atom/typography"),
            (design_node("Search Bar", children=2), "molecule/searchBoxes"),
            (design_node("Email form field", children=2), "molecule/formGroups"),
            (design_node("Sign up form", children=4), "organism/forms"),
            (design_node("Data Table", children=5), "organism/tables"),
            (design_node("Tabs", children=3), "molecule/tabs"),
            (design_node("Row", layout_mode="HORIZONTAL"), "layout/flexbox"),
            (design_node("Frame 12", has_layout_grid=True), "layout/grids"),
            (design_node("Frame 13", children=2), "layout/containers"),
            (design_node("Action"), "atom/buttons"),
            (design_node("Action Label", "TEXT"), "atom/typography"),
        ],
    )
    def test_rules(self, classifier, record, bucket):
        """Test each rule on a minimal node."""
        assert classifier.classify(record).bucket == bucket

    def test_composite_names_need_children(self, classifier):
        """Test an empty node named like a molecule is not one."""
        assert not classifier.classify(design_node("Search Bar")).is_classified


class TestClassifier:
    """Tests for classifier construction and batch classification."""

    def test_unknown_subtype_rejected(self):
        """Test rules outside the taxonomy fail at construction."""
        rule = ClassificationRule("bad", lambda s: True, ComponentFamily.ATOM, "widgets")
        with pytest.raises(ClassificationError):
            ComponentClassifier(rules=[rule])

    def test_exhausted_rules_raise(self):
        """Test running off the end of the rule list is an error."""
        rule = ClassificationRule("never", lambda s: False, ComponentFamily.ATOM, "buttons")
        classifier = ComponentClassifier(rules=[rule])
        with pytest.raises(ClassificationError):
            classifier.classify(element("div"))

    def test_first_matching_rule_wins(self):
        """Test rule order decides between overlapping rules."""
        rules = [
            ClassificationRule("first", lambda s: True, ComponentFamily.ATOM, "icons"),
            ClassificationRule("second", lambda s: True, ComponentFamily.ATOM, "buttons"),
        ]
        assert ComponentClassifier(rules=rules).classify(element("button")).subtype == "icons"

    def test_classify_all_returns_copies(self, classifier):
        """Test classified copies leave the inputs untouched."""
        records = [element("button"), element("footer")]
        classified = classifier.classify_all(records)

        assert [c.classification.bucket for c in classified] == [
            "atom/buttons",
            "organism/footers",
        ]
        assert all(r.classification is None for r in records)

    def test_fixture_inventories(self, classifier, design_inventory, implementation_inventory):
        """Test both fixture inventories classify consistently."""
        normalizer = TokenNormalizer()
        design = classifier.classify_all(
            normalizer.normalize_inventory(design_inventory, Origin.DESIGN).components
        )
        implementation = classifier.classify_all(
            normalizer.normalize_inventory(implementation_inventory, Origin.IMPLEMENTATION).components
        )

        assert [c.classification.bucket for c in design] == [
            "layout/flexbox",
            "organism/headers",
            "atom/typography",
            "atom/buttons",
            "atom/typography",
            "molecule/cards",
            "atom/typography",
        ]
        assert [c.classification.bucket for c in implementation] == [
            "layout/flexbox",
            "organism/headers",
            "atom/typography",
            "atom/buttons",
            "atom/typography",
            "molecule/cards",
            "atom/typography",
            "organism/footers",
        ]
