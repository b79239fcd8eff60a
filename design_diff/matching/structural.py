"""Structural matcher for pairing components across sources.

Components are bucketed by classification; within each bucket a
similarity matrix combining type compatibility, relative size and
position proximity is computed, and pairs at or above the structural
threshold are assigned greedily (highest similarity first).
"""

import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..config import ComparisonConfig
from ..diff_logging import LogCategory, get_category_logger
from ..models import UNCLASSIFIED, ComponentMatch, ComponentRecord, Geometry, MatchStatus

logger = get_category_logger(LogCategory.MATCHER)

CONTAINER_TAGS = frozenset(
    [
        "div",
        "section",
        "article",
        "main",
        "header",
        "footer",
        "nav",
        "aside",
        "form",
        "ul",
        "ol",
        "li",
        "button",
        "a",
        "label",
        "table",
        "dialog",
    ]
)

TEXT_TAGS = frozenset(
    ["p", "span", "h1", "h2", "h3", "h4", "h5", "h6", "label", "a", "strong", "em", "small", "li"]
)

# Design node type -> compatible implementation tags
TYPE_MAPPING: dict[str, frozenset[str]] = {
    "FRAME": CONTAINER_TAGS,
    "COMPONENT": CONTAINER_TAGS,
    "COMPONENT_SET": CONTAINER_TAGS,
    "INSTANCE": CONTAINER_TAGS,
    "GROUP": frozenset(["div", "section", "span", "ul", "ol"]),
    "SECTION": frozenset(["section", "div", "main"]),
    "TEXT": TEXT_TAGS,
    "RECTANGLE": frozenset(["div", "button", "span", "img", "hr"]),
    "ELLIPSE": frozenset(["div", "span", "svg", "img"]),
    "BUTTON": frozenset(["button", "a", "input"]),
    "INPUT": frozenset(["input", "textarea", "select"]),
    "VECTOR": frozenset(["svg", "img", "i", "picture"]),
    "BOOLEAN_OPERATION": frozenset(["svg", "img", "i"]),
    "STAR": frozenset(["svg", "img"]),
    "POLYGON": frozenset(["svg", "img"]),
    "LINE": frozenset(["hr", "div"]),
}

TYPE_WEIGHT = 0.4
SIZE_WEIGHT = 0.3
POSITION_WEIGHT = 0.3

MAPPED_TYPE_SCORE = 1.0
UNMAPPED_TYPE_SCORE = 0.5
NEUTRAL_SIZE_SCORE = 0.5


@dataclass
class _Candidate:
    design_index: int
    implementation_index: int
    similarity: float
    proximity: float
    details: dict[str, Any]


def _frame(components: list[ComponentRecord]) -> tuple[float, float, float, float] | None:
    """Bounding frame (x, y, width, height) of all geometries of one side."""
    boxes = [c.geometry for c in components if c.geometry is not None]
    if not boxes:
        return None
    left = min(b.x for b in boxes)
    top = min(b.y for b in boxes)
    right = max(b.x + b.width for b in boxes)
    bottom = max(b.y + b.height for b in boxes)
    return (left, top, right - left, bottom - top)


def _normalized_center(
    geometry: Geometry | None, frame: tuple[float, float, float, float] | None
) -> tuple[float, float]:
    if geometry is None or frame is None:
        return (math.nan, math.nan)
    fx, fy, fw, fh = frame
    cx, cy = geometry.center
    return (
        (cx - fx) / fw if fw > 0 else 0.5,
        (cy - fy) / fh if fh > 0 else 0.5,
    )


class StructuralMatcher:
    """Pairs classified components using size, type and position similarity.

    Tie-break for equal similarity: higher position proximity, then design
    order, then implementation order.
    """

    def __init__(self, config: ComparisonConfig | None = None):
        """Initialize the matcher.

        Args:
            config: Comparison configuration (structural threshold).
        """
        self.config = config or ComparisonConfig()

    @staticmethod
    def type_score(design: ComponentRecord, implementation: ComponentRecord) -> float:
        """1.0 when the design node type maps onto the implementation tag."""
        tags = TYPE_MAPPING.get(design.role_type.upper(), frozenset())
        if implementation.role_type.lower() in tags:
            return MAPPED_TYPE_SCORE
        return UNMAPPED_TYPE_SCORE

    def similarity_matrix(
        self,
        design: list[ComponentRecord],
        implementation: list[ComponentRecord],
        design_frame: tuple[float, float, float, float] | None = None,
        implementation_frame: tuple[float, float, float, float] | None = None,
    ) -> tuple[np.ndarray, dict[str, np.ndarray]]:
        """Weighted similarity for every design x implementation pair.

        Returns:
            Tuple of (similarity matrix, per-signal score matrices). The
            position matrix holds NaN where either side lacks geometry.
        """
        types = np.array(
            [[self.type_score(d, i) for i in implementation] for d in design], dtype=float
        )

        design_area = np.array(
            [d.geometry.area if d.geometry else math.nan for d in design], dtype=float
        )
        impl_area = np.array(
            [i.geometry.area if i.geometry else math.nan for i in implementation], dtype=float
        )
        missing_area = np.isnan(design_area)[:, None] | np.isnan(impl_area)[None, :]
        largest = np.maximum(design_area[:, None], impl_area[None, :])
        difference = np.abs(design_area[:, None] - impl_area[None, :])
        with np.errstate(invalid="ignore", divide="ignore"):
            ratio = np.where(largest > 0, difference / largest, 0.0)
        sizes = np.where(missing_area, NEUTRAL_SIZE_SCORE, 1.0 - ratio)

        design_centers = np.array(
            [_normalized_center(d.geometry, design_frame) for d in design], dtype=float
        ).reshape(len(design), 2)
        impl_centers = np.array(
            [_normalized_center(i.geometry, implementation_frame) for i in implementation],
            dtype=float,
        ).reshape(len(implementation), 2)
        distance = np.linalg.norm(
            design_centers[:, None, :] - impl_centers[None, :, :], axis=-1
        )
        positions = np.clip(1.0 - distance / math.sqrt(2), 0.0, 1.0)
        has_position = ~np.isnan(distance)

        with_position = (
            TYPE_WEIGHT * types
            + SIZE_WEIGHT * sizes
            + POSITION_WEIGHT * np.nan_to_num(positions)
        )
        without_position = (TYPE_WEIGHT * types + SIZE_WEIGHT * sizes) / (
            TYPE_WEIGHT + SIZE_WEIGHT
        )
        similarity = np.where(has_position, with_position, without_position)
        return similarity, {"type": types, "size": sizes, "position": positions}

    def match_components(
        self,
        design_components: list[ComponentRecord],
        implementation_components: list[ComponentRecord],
    ) -> list[ComponentMatch]:
        """Pair components one-to-one within classification buckets.

        Args:
            design_components: Classified design components.
            implementation_components: Classified implementation components.

        Returns:
            Design components in order (matched or missing in the
            implementation), then unmatched implementation components.
        """
        design_frame = _frame(design_components)
        implementation_frame = _frame(implementation_components)

        buckets: dict[str, tuple[list[int], list[int]]] = defaultdict(lambda: ([], []))
        for index, component in enumerate(design_components):
            buckets[self._bucket(component)][0].append(index)
        for index, component in enumerate(implementation_components):
            buckets[self._bucket(component)][1].append(index)

        candidates: list[_Candidate] = []
        for bucket, (design_indices, impl_indices) in buckets.items():
            if not design_indices or not impl_indices:
                continue
            similarity, scores = self.similarity_matrix(
                [design_components[i] for i in design_indices],
                [implementation_components[j] for j in impl_indices],
                design_frame,
                implementation_frame,
            )
            for row, col in np.argwhere(similarity >= self.config.structural_threshold):
                position = scores["position"][row, col]
                has_position = not math.isnan(position)
                candidates.append(
                    _Candidate(
                        design_index=design_indices[row],
                        implementation_index=impl_indices[col],
                        similarity=float(similarity[row, col]),
                        proximity=float(position) if has_position else 0.0,
                        details={
                            "bucket": bucket,
                            "typeScore": round(float(scores["type"][row, col]), 4),
                            "sizeScore": round(float(scores["size"][row, col]), 4),
                            "positionScore": round(float(position), 4) if has_position else None,
                        },
                    )
                )

        candidates.sort(
            key=lambda c: (-c.similarity, -c.proximity, c.design_index, c.implementation_index)
        )
        assigned: dict[int, _Candidate] = {}
        used_implementation: set[int] = set()
        for candidate in candidates:
            if candidate.design_index in assigned or candidate.implementation_index in used_implementation:
                continue
            assigned[candidate.design_index] = candidate
            used_implementation.add(candidate.implementation_index)

        matches = []
        for index, component in enumerate(design_components):
            candidate = assigned.get(index)
            if candidate is None:
                matches.append(
                    ComponentMatch(
                        status=MatchStatus.MISSING_IN_IMPLEMENTATION,
                        similarity=0.0,
                        design_component=component,
                    )
                )
            else:
                matches.append(
                    ComponentMatch(
                        status=MatchStatus.MATCH,
                        similarity=candidate.similarity,
                        design_component=component,
                        implementation_component=implementation_components[
                            candidate.implementation_index
                        ],
                        details=candidate.details,
                    )
                )
        for index, component in enumerate(implementation_components):
            if index not in used_implementation:
                matches.append(
                    ComponentMatch(
                        status=MatchStatus.MISSING_IN_DESIGN,
                        similarity=0.0,
                        implementation_component=component,
                    )
                )

        logger.debug(
            f"Structural matching paired {len(assigned)} of {len(design_components)} "
            f"design / {len(implementation_components)} implementation components "
            f"across {len(buckets)} buckets",
            extra={
                "operation": "match_components",
                "component_count": len(design_components) + len(implementation_components),
            },
        )
        return matches

    @staticmethod
    def _bucket(component: ComponentRecord) -> str:
        classification = component.classification or UNCLASSIFIED
        return classification.bucket
