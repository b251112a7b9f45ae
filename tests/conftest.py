from pathlib import Path
from typing import Any

import pytest

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def w3c_document() -> dict[str, Any]:
    """
    A small W3C token tree covering every conversion path:
    colors, spacing numbers, border width/radius heuristics and a font group.
    """
    return {
        "version": "1.0.0",
        "colour": {
            "button": {
                "primary": {
                    "default": {"$value": "#001e6e", "$type": "color"},
                    "hover": {"$value": "#001e6e", "$type": "color"},
                }
            },
            "status": {"error": {"$value": "#e90932", "$type": "color"}},
        },
        "space": {
            "01": {"$value": 4, "$type": "number"},
            "04": {"$value": 16, "$type": "number"},
        },
        "border": {
            "width": {"default": {"$value": 1, "$type": "number"}},
            "radius": {
                "$default": {"$value": 4, "$type": "number"},
                "round": {"$value": 1000, "$type": "number"},
            },
        },
        "shadow": {"sm": {"$value": "0 1px 2px rgba(0,0,0,0.05)", "$type": "shadow"}},
        "font": {
            "heading": {
                "xl": {
                    "family": {"$value": "Inter", "$type": "text"},
                    "size": {"$value": 24, "$type": "number"},
                    "weight": {"$value": 700, "$type": "number"},
                    "line-height": {"$value": 32, "$type": "number"},
                }
            }
        },
    }


@pytest.fixture
def legacy_document() -> dict[str, Any]:
    return {
        "version": "1.0.0",
        "tokens": {
            "colors": {
                "primary": {"value": "#3b82f6", "type": "color", "description": "Primary"},
            },
            "spacing": {
                "sm": {"value": "0.5rem", "type": "spacing"},
            },
            "typography": {
                "heading": {
                    "value": {
                        "fontFamily": "Inter",
                        "fontSize": "1.5rem",
                        "fontWeight": 700,
                        "lineHeight": "2rem",
                    },
                    "type": "typography",
                }
            },
            "shadows": {
                "soft": {"value": "0 1px 2px rgba(0,0,0,0.05)", "type": "shadow"},
            },
            "radii": {
                "md": {"value": "0.375rem", "type": "borderRadius"},
            },
        },
    }
