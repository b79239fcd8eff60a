"""Data models for design/implementation comparison.

This module defines the core data structures produced by the comparison
pipeline: component records, token and component match results,
discrepancies, confidence reports and the top-level comparison result.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .tokens import Origin, Token, TokenCategory


@dataclass(frozen=True)
class Geometry:
    """Bounding box of a component in pixels."""

    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return max(self.width, 0.0) * max(self.height, 0.0)

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Geometry":
        """Create from dictionary."""
        return cls(
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            width=float(data["width"]),
            height=float(data["height"]),
        )


class ComponentFamily(Enum):
    """Top level of the component taxonomy."""

    ATOM = "atom"
    MOLECULE = "molecule"
    ORGANISM = "organism"
    LAYOUT = "layout"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class Classification:
    """Family and subtype assigned to a component."""

    family: ComponentFamily
    subtype: str

    @property
    def is_classified(self) -> bool:
        return self.family != ComponentFamily.UNCLASSIFIED

    @property
    def bucket(self) -> str:
        """Pairing bucket key, e.g. "atom/buttons"."""
        return f"{self.family.value}/{self.subtype}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"family": self.family.value, "subtype": self.subtype}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Classification":
        """Create from dictionary."""
        return cls(family=ComponentFamily(data["family"]), subtype=data["subtype"])

    def __str__(self) -> str:
        return self.bucket


UNCLASSIFIED = Classification(ComponentFamily.UNCLASSIFIED, "unclassified")


@dataclass(frozen=True)
class ComponentRecord:
    """One structural element from either inventory.

    ``hints`` keeps the source-specific raw signals (layout mode, class
    names, ARIA role, text) that the classifier's signal extractors read.
    Records are immutable; attaching a classification returns a copy.
    """

    id: str
    display_name: str
    origin: Origin
    role_type: str
    geometry: Geometry | None = None
    style_refs: tuple[str, ...] = ()
    classification: Classification | None = None
    child_count: int = 0
    depth: int = 0
    hints: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def is_classified(self) -> bool:
        return self.classification is not None and self.classification.is_classified

    def with_classification(self, classification: Classification) -> "ComponentRecord":
        """Return a copy carrying the given classification."""
        return replace(self, classification=classification)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "displayName": self.display_name,
            "origin": self.origin.value,
            "roleType": self.role_type,
            "geometry": self.geometry.to_dict() if self.geometry else None,
            "styleRefs": list(self.style_refs),
            "classification": (
                self.classification.to_dict() if self.classification else None
            ),
            "childCount": self.child_count,
            "depth": self.depth,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ComponentRecord":
        """Create from dictionary."""
        geometry = data.get("geometry")
        classification = data.get("classification")
        return cls(
            id=data["id"],
            display_name=data.get("displayName", data["id"]),
            origin=Origin(data["origin"]),
            role_type=data.get("roleType", ""),
            geometry=Geometry.from_dict(geometry) if geometry else None,
            style_refs=tuple(data.get("styleRefs", ())),
            classification=(
                Classification.from_dict(classification) if classification else None
            ),
            child_count=data.get("childCount", 0),
            depth=data.get("depth", 0),
        )

    def __str__(self) -> str:
        return f"{self.origin.value}:{self.display_name} ({self.role_type})"


class MatchStatus(Enum):
    """Outcome of pairing a token or component across sources."""

    MATCH = "match"
    MISMATCH = "mismatch"
    MISSING_IN_DESIGN = "missing-in-design"
    MISSING_IN_IMPLEMENTATION = "missing-in-implementation"

    @property
    def is_missing(self) -> bool:
        return self in (MatchStatus.MISSING_IN_DESIGN, MatchStatus.MISSING_IN_IMPLEMENTATION)


@dataclass
class MatchResult:
    """Token-level match between design and implementation."""

    token_category: TokenCategory
    status: MatchStatus
    confidence: float
    design_token: Token | None = None
    implementation_token: Token | None = None
    distance: float | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def tokens(self) -> list[Token]:
        return [t for t in (self.design_token, self.implementation_token) if t]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "tokenCategory": self.token_category.value,
            "status": self.status.value,
            "confidence": round(self.confidence, 4),
            "designToken": self.design_token.to_dict() if self.design_token else None,
            "implementationToken": (
                self.implementation_token.to_dict()
                if self.implementation_token
                else None
            ),
            "distance": round(self.distance, 4) if self.distance is not None else None,
            "details": self.details,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MatchResult":
        """Create from dictionary."""
        design = data.get("designToken")
        implementation = data.get("implementationToken")
        return cls(
            token_category=TokenCategory(data["tokenCategory"]),
            status=MatchStatus(data["status"]),
            confidence=data["confidence"],
            design_token=Token.from_dict(design) if design else None,
            implementation_token=(
                Token.from_dict(implementation) if implementation else None
            ),
            distance=data.get("distance"),
            details=data.get("details", {}),
        )


@dataclass
class ComponentMatch:
    """Structural pairing of a design component with an implementation one."""

    status: MatchStatus
    similarity: float
    design_component: ComponentRecord | None = None
    implementation_component: ComponentRecord | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def components(self) -> list[ComponentRecord]:
        return [
            c for c in (self.design_component, self.implementation_component) if c
        ]

    @property
    def classification(self) -> Classification | None:
        component = self.design_component or self.implementation_component
        return component.classification if component else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "status": self.status.value,
            "similarity": round(self.similarity, 4),
            "designComponent": (
                self.design_component.to_dict() if self.design_component else None
            ),
            "implementationComponent": (
                self.implementation_component.to_dict()
                if self.implementation_component
                else None
            ),
            "details": self.details,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ComponentMatch":
        """Create from dictionary."""
        design = data.get("designComponent")
        implementation = data.get("implementationComponent")
        return cls(
            status=MatchStatus(data["status"]),
            similarity=data["similarity"],
            design_component=ComponentRecord.from_dict(design) if design else None,
            implementation_component=(
                ComponentRecord.from_dict(implementation) if implementation else None
            ),
            details=data.get("details", {}),
        )


class Priority(Enum):
    """Fix priority, lowest to highest."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"

    def boosted(self) -> "Priority":
        """One level up the ladder, capped at Urgent."""
        ladder = list(Priority)
        return ladder[min(ladder.index(self) + 1, len(ladder) - 1)]


class Severity(Enum):
    """Severity levels for discrepancies."""

    CRITICAL = "Critical"
    MAJOR = "Major"
    MINOR = "Minor"

    @property
    def base_priority(self) -> Priority:
        return {
            Severity.CRITICAL: Priority.HIGH,
            Severity.MAJOR: Priority.MEDIUM,
            Severity.MINOR: Priority.LOW,
        }[self]


@dataclass(frozen=True)
class Discrepancy:
    """A single reported difference between design and implementation."""

    id: int
    category: str  # token category value or "components"
    severity: Severity
    priority: Priority
    title: str
    description: str
    created_at: str
    design_ref: str | None = None
    implementation_ref: str | None = None
    expected: str | None = None
    actual: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "category": self.category,
            "severity": self.severity.value,
            "priority": self.priority.value,
            "title": self.title,
            "description": self.description,
            "designRef": self.design_ref,
            "implementationRef": self.implementation_ref,
            "expected": self.expected,
            "actual": self.actual,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Discrepancy":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            category=data["category"],
            severity=Severity(data["severity"]),
            priority=Priority(data["priority"]),
            title=data["title"],
            description=data["description"],
            created_at=data["createdAt"],
            design_ref=data.get("designRef"),
            implementation_ref=data.get("implementationRef"),
            expected=data.get("expected"),
            actual=data.get("actual"),
        )


@dataclass
class ConfidenceReport:
    """Rolled-up confidence; ``overall`` is None when nothing was compared."""

    overall: float | None
    by_category: dict[str, float] = field(default_factory=dict)
    level: str = "unknown"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "overall": round(self.overall, 4) if self.overall is not None else None,
            "byCategory": {k: round(v, 4) for k, v in self.by_category.items()},
            "level": self.level,
        }


@dataclass
class ComparisonSummary:
    """Counts over the comparison result."""

    total_components: int = 0
    matched: int = 0
    mismatched: int = 0
    missing: int = 0
    by_family: dict[str, dict[str, int]] = field(default_factory=dict)
    tokens_by_category: dict[str, dict[str, int]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "totalComponents": self.total_components,
            "matched": self.matched,
            "mismatched": self.mismatched,
            "missing": self.missing,
            "byFamily": self.by_family,
            "tokensByCategory": self.tokens_by_category,
        }


@dataclass
class ComparisonResult:
    """Top-level output of one comparison run."""

    token_matches: list[MatchResult] = field(default_factory=list)
    component_matches: list[ComponentMatch] = field(default_factory=list)
    discrepancies: list[Discrepancy] = field(default_factory=list)
    confidence: ConfidenceReport = field(
        default_factory=lambda: ConfidenceReport(overall=None)
    )
    summary: ComparisonSummary = field(default_factory=ComparisonSummary)

    def discrepancies_by_severity(self) -> dict[str, list[Discrepancy]]:
        """Group discrepancies by severity, most severe first."""
        grouped: dict[str, list[Discrepancy]] = {s.value: [] for s in Severity}
        for discrepancy in self.discrepancies:
            grouped[discrepancy.severity.value].append(discrepancy)
        return grouped

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "tokenMatches": [m.to_dict() for m in self.token_matches],
            "componentMatches": [m.to_dict() for m in self.component_matches],
            "discrepancies": [d.to_dict() for d in self.discrepancies],
            "confidence": self.confidence.to_dict(),
            "summary": self.summary.to_dict(),
        }

    def to_json(self, indent: int | None = None) -> str:
        """Serialize to deterministic JSON (sorted keys)."""
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)
