"""
Shared fixtures for the design_diff test suite.

Provides test fixtures for:
- A design-tool document (landing page with header, button and card)
- The matching rendered-page inventory (plus an extra footer)
- Engine and configuration instances
"""

import pytest

from design_diff.config import ComparisonConfig
from design_diff.engine import ComparisonEngine

FIXED_TIMESTAMP = "2024-01-01T00:00:00"


def solid(r: int, g: int, b: int, a: float = 1.0) -> dict:
    """Design-tool solid paint from 0-255 channels."""
    return {"type": "SOLID", "color": {"r": r / 255, "g": g / 255, "b": b / 255, "a": a}}


def box(x: float, y: float, width: float, height: float) -> dict:
    return {"x": x, "y": y, "width": width, "height": height}


# ---------------------------------------------------------------------------
# Design inventory
# ---------------------------------------------------------------------------


@pytest.fixture()
def design_inventory() -> dict:
    """Design-tool document for a small landing page."""
    return {
        "document": {
            "id": "0:1",
            "name": "Landing Page",
            "type": "FRAME",
            "layoutMode": "VERTICAL",
            "absoluteBoundingBox": box(0, 0, 1280, 800),
            "fills": [solid(255, 255, 255)],
            "children": [
                {
                    "id": "1:1",
                    "name": "Header",
                    "type": "FRAME",
                    "absoluteBoundingBox": box(0, 0, 1280, 64),
                    "fills": [solid(26, 26, 26)],
                    "children": [
                        {
                            "id": "1:2",
                            "name": "Brand",
                            "type": "TEXT",
                            "absoluteBoundingBox": box(24, 16, 120, 32),
                            "fills": [solid(255, 255, 255)],
                            "style": {"fontFamily": "Inter", "fontSize": 24, "fontWeight": 700},
                        }
                    ],
                },
                {
                    "id": "2:1",
                    "name": "Primary Button",
                    "type": "COMPONENT",
                    "absoluteBoundingBox": box(24, 120, 120, 40),
                    "fills": [solid(0, 123, 255)],
                    "cornerRadius": 4,
                    "paddingTop": 8,
                    "paddingRight": 16,
                    "paddingBottom": 8,
                    "paddingLeft": 16,
                    "effects": [
                        {
                            "type": "DROP_SHADOW",
                            "visible": True,
                            "color": {"r": 0, "g": 0, "b": 0, "a": 0.25},
                            "offset": {"x": 0, "y": 2},
                            "radius": 4,
                            "spread": 0,
                        }
                    ],
                    "children": [
                        {
                            "id": "2:2",
                            "name": "Label",
                            "type": "TEXT",
                            "absoluteBoundingBox": box(36, 128, 96, 24),
                            "fills": [solid(255, 255, 255)],
                            "style": {
                                "fontFamily": "Inter",
                                "fontSize": 16,
                                "fontWeight": 600,
                                "lineHeightPx": 24,
                            },
                        }
                    ],
                },
                {
                    "id": "3:1",
                    "name": "Feature Card",
                    "type": "FRAME",
                    "absoluteBoundingBox": box(24, 200, 360, 240),
                    "fills": [solid(248, 249, 250)],
                    "cornerRadius": 8,
                    "paddingTop": 24,
                    "paddingRight": 24,
                    "paddingBottom": 24,
                    "paddingLeft": 24,
                    "itemSpacing": 16,
                    "children": [
                        {
                            "id": "3:2",
                            "name": "Title",
                            "type": "TEXT",
                            "absoluteBoundingBox": box(48, 224, 200, 28),
                            "fills": [solid(33, 37, 41)],
                            "style": {
                                "fontFamily": "Inter",
                                "fontSize": 20,
                                "fontWeight": 600,
                                "lineHeightPx": 28,
                            },
                        }
                    ],
                },
            ],
        }
    }


# ---------------------------------------------------------------------------
# Implementation inventory
# ---------------------------------------------------------------------------


@pytest.fixture()
def implementation_inventory() -> dict:
    """Rendered-page inventory matching the design, plus a footer."""
    return {
        "elements": [
            {
                "id": "page",
                "tagName": "MAIN",
                "className": "page",
                "boundingRect": box(0, 0, 1280, 800),
                "styles": {
                    "background-color": "rgb(255, 255, 255)",
                    "display": "flex",
                    "margin": "0px",
                },
                "children": [
                    {
                        "id": "site-header",
                        "tagName": "HEADER",
                        "className": "site-header",
                        "boundingRect": box(0, 0, 1280, 64),
                        "styles": {"backgroundColor": "#1a1a1a"},
                        "children": [
                            {
                                "id": "brand",
                                "selector": "header .brand",
                                "tagName": "SPAN",
                                "className": "brand",
                                "text": "Acme",
                                "boundingRect": box(24, 16, 120, 32),
                                "styles": {
                                    "color": "#ffffff",
                                    "fontFamily": "Inter, sans-serif",
                                    "fontSize": "24px",
                                    "fontWeight": "700",
                                    "lineHeight": "normal",
                                },
                            }
                        ],
                    },
                    {
                        "id": "primary-button",
                        "tagName": "BUTTON",
                        "className": "btn btn-primary",
                        "boundingRect": box(24, 120, 120, 40),
                        "styles": {
                            "backgroundColor": "#007bff",
                            "color": "#fff",
                            "fontFamily": "Inter, sans-serif",
                            "fontSize": "16px",
                            "fontWeight": "600",
                            "lineHeight": "24px",
                            "padding": "8px 16px",
                            "borderRadius": "4px",
                            "boxShadow": "0 2px 4px rgba(0, 0, 0, 0.25)",
                        },
                        "children": [
                            {
                                "id": "get-started-label",
                                "tagName": "SPAN",
                                "className": "label",
                                "text": "Get started",
                                "boundingRect": box(36, 128, 96, 24),
                                "styles": {
                                    "color": "rgba(255, 255, 255, 1)",
                                    "fontFamily": "'Inter', sans-serif",
                                    "fontSize": "1rem",
                                    "fontWeight": "semibold",
                                    "lineHeight": "1.5",
                                },
                            }
                        ],
                    },
                    {
                        "id": "feature-card",
                        "tagName": "DIV",
                        "className": "card feature-card",
                        "boundingRect": box(24, 200, 360, 240),
                        "styles": {
                            "backgroundColor": "#f8f9fa",
                            "borderRadius": "8px",
                            "padding": "24px",
                            "gap": "16px",
                        },
                        "children": [
                            {
                                "id": "feature-title",
                                "tagName": "H3",
                                "boundingRect": box(48, 224, 200, 28),
                                "styles": {
                                    "color": "#212529",
                                    "fontFamily": "Inter",
                                    "fontSize": "20px",
                                    "fontWeight": "600",
                                    "lineHeight": "28px",
                                },
                            }
                        ],
                    },
                    {
                        "id": "site-footer",
                        "tagName": "FOOTER",
                        "boundingRect": box(0, 736, 1280, 64),
                        "styles": {"backgroundColor": "#1a1a1a"},
                    },
                ],
            }
        ]
    }


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def config() -> ComparisonConfig:
    """Default comparison configuration."""
    return ComparisonConfig()


@pytest.fixture()
def engine(config: ComparisonConfig) -> ComparisonEngine:
    """Comparison engine with default configuration."""
    return ComparisonEngine(config)


@pytest.fixture()
def fixed_timestamp() -> str:
    """Timestamp that makes comparison output byte-identical."""
    return FIXED_TIMESTAMP
