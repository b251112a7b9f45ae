"""
Token pipeline data models.

DesignToken and TypographyValue are immutable once constructed. The theme
extension is a plain ordered dict so it serializes straight to JSON.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

TokenType = Literal["color", "spacing", "typography", "shadow", "borderRadius"]

TOKEN_TYPES: tuple[str, ...] = ("color", "spacing", "typography", "shadow", "borderRadius")

FontWeight = str | int | float

ThemeExtension = dict[str, dict[str, Any]]
"""Tailwind ``theme.extend`` shape: category -> key -> value."""

CSSVariables = dict[str, str]


class TokenValidationError(ValueError):
    """Raised when a token document cannot be turned into a valid token list."""


@dataclass(frozen=True)
class TypographyValue:
    """Composite typography value with CSS-syntax fields."""

    font_family: str
    font_size: str
    font_weight: FontWeight
    line_height: str
    letter_spacing: str | None = None


@dataclass(frozen=True)
class DesignToken:
    """A named, typed design value."""

    name: str
    type: TokenType
    value: str | TypographyValue
    description: str | None = None
