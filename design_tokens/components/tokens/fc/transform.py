"""
Token Pipeline Functional Core: Tailwind theme extension.

Maps a validated token list onto the ``theme.extend`` object consumed by
the Tailwind configuration. Category prefixes are stripped from token
names to form theme keys.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from design_tokens.components.tokens.fc.models import (
    DesignToken,
    ThemeExtension,
    TokenValidationError,
    TypographyValue,
)

logger = logging.getLogger(__name__)

THEME_CATEGORIES = ("colors", "spacing", "fontSize", "boxShadow", "borderRadius", "fontFamily")

CATEGORY_BY_TYPE = {
    "color": "colors",
    "spacing": "spacing",
    "typography": "fontSize",
    "shadow": "boxShadow",
    "borderRadius": "borderRadius",
}

PREFIX_BY_TYPE = {
    "color": re.compile(r"^colou?r[-_]"),
    "spacing": re.compile(r"^spacing[-_]"),
    "typography": re.compile(r"^font[-_]"),
    "shadow": re.compile(r"^shadow[-_]"),
    "borderRadius": re.compile(r"^(?:border-?radius|radii)[-_]"),
}

REFERENCE_PATTERN = re.compile(r"\{(.+)\}")


def theme_key(token: DesignToken) -> str:
    """Theme key for a token: category prefix stripped, underscores dashed."""
    key = PREFIX_BY_TYPE[token.type].sub("", token.name).replace("_", "-")
    if token.type == "borderRadius" and key == "$default":
        return "DEFAULT"
    return key


# ═══════════════════════════════════════════════════════════════════════════
# REFERENCE RESOLUTION
# ═══════════════════════════════════════════════════════════════════════════


class ReferenceResolver:
    """
    Resolves ``{group.name}`` references to concrete values.

    A reference is looked up in the fallback table first (keyed by the full
    brace form), then against the token named by the dotted path with dots
    turned into dashes. Unresolvable references are returned unchanged.
    """

    def __init__(
        self,
        tokens: list[DesignToken],
        fallbacks: Mapping[str, str] | None = None,
    ) -> None:
        self._by_name = {token.name: token for token in tokens}
        self._fallbacks = dict(fallbacks or {})

    def resolve(self, value: Any) -> Any:
        return self._resolve(value, frozenset())

    def _resolve(self, value: Any, seen: frozenset[str]) -> Any:
        if not isinstance(value, str):
            return value
        match = REFERENCE_PATTERN.fullmatch(value)
        if match is None:
            return value

        if value in self._fallbacks:
            return self._fallbacks[value]

        path = match.group(1)
        target = self._by_name.get(path.replace(".", "-")) or self._by_name.get(path)
        if target is not None and target.name not in seen and isinstance(target.value, str):
            return self._resolve(target.value, seen | {target.name})

        logger.warning("Could not resolve token reference: %s", value)
        return value


# ═══════════════════════════════════════════════════════════════════════════
# TRANSFORM
# ═══════════════════════════════════════════════════════════════════════════


def _identity(value: Any) -> Any:
    return value


def _font_size_entry(value: TypographyValue, resolve: Any) -> list[Any]:
    options: dict[str, Any] = {
        "lineHeight": resolve(value.line_height),
        "fontWeight": value.font_weight,
    }
    if value.letter_spacing is not None:
        options["letterSpacing"] = resolve(value.letter_spacing)
    return [resolve(value.font_size), options]


def transform_tokens(
    tokens: list[DesignToken],
    resolve_references: bool = True,
    reference_fallbacks: Mapping[str, str] | None = None,
) -> ThemeExtension:
    """
    Build a Tailwind theme extension from validated tokens.

    Args:
        tokens: Output of validate_tokens
        resolve_references: Replace ``{ref}`` values with what they point at
        reference_fallbacks: Fixed values for references by brace form

    Returns:
        Mapping of theme category to key/value pairs; empty categories omitted

    Raises:
        TokenValidationError: If two tokens map to the same theme key
    """
    theme: ThemeExtension = {category: {} for category in THEME_CATEGORIES}

    resolve = (
        ReferenceResolver(tokens, reference_fallbacks).resolve if resolve_references else _identity
    )

    for token in tokens:
        category = CATEGORY_BY_TYPE[token.type]
        key = theme_key(token)
        if key in theme[category]:
            raise TokenValidationError(
                f'Token "{token.name}" collides with an earlier token on {category} key "{key}"'
            )

        if isinstance(token.value, TypographyValue):
            theme[category][key] = _font_size_entry(token.value, resolve)
            family_key = key.split("-")[0] or key
            # First typography token wins the family slot
            theme["fontFamily"].setdefault(family_key, token.value.font_family)
        else:
            theme[category][key] = resolve(token.value)

    return {category: entries for category, entries in theme.items() if entries}
