"""Unit tests for comparison data models."""

import json

from design_diff.models import (
    UNCLASSIFIED,
    Classification,
    ComparisonResult,
    ComponentFamily,
    ComponentMatch,
    ComponentRecord,
    ConfidenceReport,
    Discrepancy,
    Geometry,
    MatchResult,
    MatchStatus,
    Priority,
    Severity,
)
from design_diff.tokens import ColorValue, Origin, Token, TokenCategory, TokenSource


class TestGeometry:
    """Tests for Geometry."""

    def test_area_and_center(self):
        """Test derived area and center."""
        geometry = Geometry(10, 20, 100, 40)
        assert geometry.area == 4000
        assert geometry.center == (60, 40)

    def test_round_trip(self):
        """Test to_dict and from_dict."""
        geometry = Geometry(1.5, 2.0, 3.0, 4.0)
        assert Geometry.from_dict(geometry.to_dict()) == geometry


class TestClassification:
    """Tests for Classification."""

    def test_bucket(self):
        """Test the bucket key and string form."""
        classification = Classification(ComponentFamily.MOLECULE, "cards")
        assert classification.bucket == "molecule/cards"
        assert str(classification) == "molecule/cards"
        assert classification.is_classified
        assert not UNCLASSIFIED.is_classified


class TestComponentRecord:
    """Tests for ComponentRecord."""

    def test_with_classification_copies(self):
        """Test attaching a classification returns a new record."""
        record = ComponentRecord("2:1", "Primary Button", Origin.DESIGN, "COMPONENT")
        classified = record.with_classification(Classification(ComponentFamily.ATOM, "buttons"))

        assert record.classification is None
        assert classified.is_classified
        assert classified.id == record.id

    def test_round_trip(self):
        """Test serialization keeps every public field."""
        record = ComponentRecord(
            id="btn",
            display_name="button.btn",
            origin=Origin.IMPLEMENTATION,
            role_type="button",
            geometry=Geometry(0, 0, 120, 40),
            style_refs=("color:#007BFFFF", "spacing:8"),
            classification=Classification(ComponentFamily.ATOM, "buttons"),
            child_count=1,
            depth=2,
        )
        data = record.to_dict()
        assert data["displayName"] == "button.btn"
        assert data["styleRefs"] == ["color:#007BFFFF", "spacing:8"]
        assert ComponentRecord.from_dict(data) == record


class TestEnums:
    """Tests for status, severity and priority enums."""

    def test_missing_statuses(self):
        """Test which statuses count as missing."""
        assert MatchStatus.MISSING_IN_DESIGN.is_missing
        assert MatchStatus.MISSING_IN_IMPLEMENTATION.is_missing
        assert not MatchStatus.MATCH.is_missing
        assert not MatchStatus.MISMATCH.is_missing

    def test_base_priority(self):
        """Test severity maps onto a base priority."""
        assert Severity.CRITICAL.base_priority == Priority.HIGH
        assert Severity.MAJOR.base_priority == Priority.MEDIUM
        assert Severity.MINOR.base_priority == Priority.LOW

    def test_boosted(self):
        """Test boosting climbs one level and caps at Urgent."""
        assert Priority.LOW.boosted() == Priority.MEDIUM
        assert Priority.MEDIUM.boosted() == Priority.HIGH
        assert Priority.URGENT.boosted() == Priority.URGENT


class TestResults:
    """Tests for match results and the comparison result."""

    def test_match_result_round_trip(self):
        """Test MatchResult serialization."""
        color = ColorValue(0, 123, 255)
        result = MatchResult(
            token_category=TokenCategory.COLOR,
            status=MatchStatus.MATCH,
            confidence=1.0,
            design_token=Token(TokenCategory.COLOR, color, (TokenSource(Origin.DESIGN, "1:1", "#007bff"),)),
            implementation_token=Token(
                TokenCategory.COLOR, color, (TokenSource(Origin.IMPLEMENTATION, "btn", "#007BFF"),)
            ),
            distance=0.0,
            details={"deltaE": 0.0},
        )
        restored = MatchResult.from_dict(result.to_dict())
        assert restored == result
        assert len(restored.tokens) == 2

    def test_component_match_round_trip(self):
        """Test ComponentMatch serialization and derived classification."""
        record = ComponentRecord(
            "f", "Footer", Origin.IMPLEMENTATION, "footer",
            classification=Classification(ComponentFamily.ORGANISM, "footers"),
        )
        match = ComponentMatch(MatchStatus.MISSING_IN_DESIGN, 0.0, implementation_component=record)

        assert match.classification.subtype == "footers"
        assert ComponentMatch.from_dict(match.to_dict()) == match

    def test_discrepancy_round_trip(self):
        """Test Discrepancy serialization."""
        discrepancy = Discrepancy(
            id=1,
            category="components",
            severity=Severity.MAJOR,
            priority=Priority.HIGH,
            title="Missing component in implementation: Primary Button",
            description="Design buttons component 'Primary Button' has no match.",
            created_at="2024-01-01T00:00:00",
            design_ref="2:1",
        )
        data = discrepancy.to_dict()
        assert data["severity"] == "Major"
        assert data["priority"] == "High"
        assert Discrepancy.from_dict(data) == discrepancy

    def test_result_json_is_sorted(self):
        """Test JSON output has sorted keys and severity grouping."""
        discrepancy = Discrepancy(1, "spacing", Severity.MINOR, Priority.LOW, "t", "d", "2024-01-01T00:00:00")
        result = ComparisonResult(
            discrepancies=[discrepancy],
            confidence=ConfidenceReport(overall=0.5, by_category={"spacing": 0.5}, level="poor"),
        )
        text = result.to_json()

        assert list(json.loads(text)) == sorted(json.loads(text))
        assert result.discrepancies_by_severity() == {
            "Critical": [],
            "Major": [],
            "Minor": [discrepancy],
        }
