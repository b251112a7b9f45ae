"""
Token Pipeline Functional Core: document parsing and validation.

Accepts an already-parsed JSON document in either W3C Design Tokens format
or the legacy Figma export format and returns a flat list of validated
DesignToken records. No I/O - every function here is pure.

Parsing happens in two stages. W3C leaves are first converted into raw
candidates; individual font properties (any leaf named
``font-<group>-<family|size|weight|line-height|letter-spacing>``, plus
leftover ``text`` / ``number`` leaves) are held back as FontProperty records
and merged into typography tokens. Only
the final, fully typed list is validated, so a run either returns every
token or raises TokenValidationError.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from design_tokens.components.tokens.fc.models import (
    DesignToken,
    TokenValidationError,
    TypographyValue,
)

logger = logging.getLogger(__name__)

DEFAULT_REM_BASE = 16

LEGACY_CATEGORIES = ("colors", "spacing", "typography", "shadows", "radii")

# ═══════════════════════════════════════════════════════════════════════════
# VALUE GRAMMARS
# ═══════════════════════════════════════════════════════════════════════════

COLOR_PATTERN = re.compile(
    r"#[0-9A-Fa-f]{6}(?:[0-9A-Fa-f]{2})?|(?:rgb|hsl).*|\{[^}]+\}", re.DOTALL
)
SPACING_PATTERN = re.compile(r"\d+(?:\.\d+)?(?:px|rem|em)|\{[^}]+\}")
RADIUS_PATTERN = re.compile(r"\d+(?:\.\d+)?(?:px|rem|em|%)|\{[^}]+\}")

FONT_PROPERTY_PATTERN = re.compile(r"(font-.+)-(family|size|weight|line-height|letter-spacing)")
LEADING_NUMBER_PATTERN = re.compile(r"\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


# ═══════════════════════════════════════════════════════════════════════════
# INTERMEDIATE REPRESENTATION
# ═══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class _RawToken:
    """Token candidate whose value has not been checked yet."""

    name: str
    type: str
    value: Any
    description: str | None = None


@dataclass(frozen=True)
class FontProperty:
    """A single font sub-property awaiting typography grouping."""

    name: str
    kind: str
    value: Any
    description: str | None = None


@dataclass
class _FontGroup:
    name: str
    description: str | None
    font_family: Any = None
    font_size: str | None = None
    font_size_px: float | None = None
    font_weight: Any = None
    line_height_px: float | None = None
    letter_spacing: Any = None
    members: list[str] = field(default_factory=list)


# ═══════════════════════════════════════════════════════════════════════════
# NUMBER FORMATTING
# ═══════════════════════════════════════════════════════════════════════════


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_number(value: float) -> str:
    """Render a number the way JavaScript stringifies it (``1.0`` -> ``"1"``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def to_rem(px: float, rem_base: float = DEFAULT_REM_BASE) -> str:
    """Convert a pixel value to a rem string."""
    return f"{format_number(px / rem_base)}rem"


def _parse_px(value: Any) -> float | None:
    """Leading numeric part of a value, or None when there is none."""
    if _is_number(value):
        return float(value)
    if isinstance(value, str):
        match = LEADING_NUMBER_PATTERN.match(value)
        if match:
            return float(match.group(0))
    return None


# ═══════════════════════════════════════════════════════════════════════════
# FORMAT DETECTION
# ═══════════════════════════════════════════════════════════════════════════


def _is_w3c_leaf(node: Any) -> bool:
    return isinstance(node, Mapping) and "$value" in node and ("$type" in node or "type" in node)


def _contains_w3c_leaf(node: Any) -> bool:
    if _is_w3c_leaf(node):
        return True
    if isinstance(node, Mapping):
        return any(_contains_w3c_leaf(child) for child in node.values())
    if isinstance(node, list):
        return any(_contains_w3c_leaf(child) for child in node)
    return False


def is_w3c_document(data: Mapping[str, Any]) -> bool:
    """True when any node below the top level looks like a W3C token."""
    return any(_contains_w3c_leaf(value) for key, value in data.items() if key != "version")


# ═══════════════════════════════════════════════════════════════════════════
# W3C PARSING
# ═══════════════════════════════════════════════════════════════════════════


def _is_w3c_typography(value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    letter_spacing = value.get("letterSpacing")
    return (
        isinstance(value.get("fontFamily"), str)
        and _is_number(value.get("fontSize"))
        and _is_number(value.get("fontWeight"))
        and _is_number(value.get("lineHeight"))
        and (letter_spacing is None or _is_number(letter_spacing))
    )


def _convert_number_leaf(
    name: str, value: Any, description: str | None, rem_base: float
) -> _RawToken | FontProperty:
    """Classify a ``number`` leaf by the words in its name."""

    def rem_or_raw(v: Any) -> Any:
        return to_rem(v, rem_base) if _is_number(v) else v

    if "space" in name or "margin" in name or "gutter" in name:
        return _RawToken(name, "spacing", rem_or_raw(value), description)
    if "radius" in name:
        return _RawToken(name, "borderRadius", rem_or_raw(value), description)
    if "width" in name and "border" in name:
        px = f"{format_number(value)}px" if _is_number(value) else value
        return _RawToken(name, "spacing", px, description)
    if "size" in name and "font" not in name:
        return _RawToken(name, "spacing", rem_or_raw(value), description)
    return FontProperty(name, "number", value, description)


def convert_w3c_token(
    name: str,
    token_type: Any,
    value: Any,
    description: str | None = None,
    rem_base: float = DEFAULT_REM_BASE,
) -> _RawToken | FontProperty:
    """Map one W3C leaf onto a raw token candidate or a font property."""
    if token_type in ("color", "shadow"):
        return _RawToken(name, token_type, value, description)

    if token_type in ("dimension", "spacing"):
        converted = to_rem(value, rem_base) if _is_number(value) else value
        return _RawToken(name, "spacing", converted, description)

    if token_type == "borderRadius":
        converted = to_rem(value, rem_base) if _is_number(value) else value
        return _RawToken(name, "borderRadius", converted, description)

    if token_type == "typography":
        if not _is_w3c_typography(value):
            # Left for validation to reject with the token name attached
            return _RawToken(name, "typography", value, description)
        letter_spacing = value.get("letterSpacing")
        typography = {
            "fontFamily": value["fontFamily"],
            "fontSize": to_rem(value["fontSize"], rem_base),
            "fontWeight": value["fontWeight"],
            "lineHeight": to_rem(value["lineHeight"], rem_base),
        }
        if letter_spacing:
            typography["letterSpacing"] = f"{format_number(letter_spacing)}em"
        return _RawToken(name, "typography", typography, description)

    if token_type == "text":
        return FontProperty(name, "text", value, description)

    if token_type == "number":
        return _convert_number_leaf(name, value, description, rem_base)

    return _RawToken(name, str(token_type), value, description)


def parse_w3c_tokens(
    data: Mapping[str, Any],
    prefix: str = "",
    rem_base: float = DEFAULT_REM_BASE,
) -> list[_RawToken | FontProperty]:
    """Depth-first walk of a W3C tree; names join the key path with dashes."""
    parsed: list[_RawToken | FontProperty] = []

    for key, node in data.items():
        if key == "version":
            continue

        name = f"{prefix}-{key}" if prefix else str(key)

        if _is_w3c_leaf(node):
            token_type = node.get("$type") or node.get("type")
            if token_type != "typography" and FONT_PROPERTY_PATTERN.fullmatch(name):
                # Grouped from the source value, before any unit conversion
                parsed.append(
                    FontProperty(name, str(token_type), node["$value"], node.get("$description"))
                )
                continue
            parsed.append(
                convert_w3c_token(
                    name, token_type, node["$value"], node.get("$description"), rem_base
                )
            )
        elif isinstance(node, Mapping) and "$value" not in node:
            parsed.extend(parse_w3c_tokens(node, name, rem_base))

    return parsed


# ═══════════════════════════════════════════════════════════════════════════
# TYPOGRAPHY GROUPING
# ═══════════════════════════════════════════════════════════════════════════


def group_typography(
    properties: list[FontProperty], rem_base: float = DEFAULT_REM_BASE
) -> list[_RawToken]:
    """
    Merge font sub-properties into typography tokens.

    ``font-heading-xl-family`` / ``-size`` / ``-weight`` / ``-line-height`` /
    ``-letter-spacing`` become one token named ``font-heading-xl``. Line
    height is the unitless ratio of line height to font size, rounded to
    three decimals. Groups without a family and a size are dropped.
    """
    groups: dict[str, _FontGroup] = {}

    for prop in properties:
        match = FONT_PROPERTY_PATTERN.fullmatch(prop.name)
        if match is None:
            logger.debug("Discarding font property %s: not part of a font group", prop.name)
            continue

        base_name, part = match.groups()
        group = groups.get(base_name)
        if group is None:
            group = groups[base_name] = _FontGroup(name=base_name, description=prop.description)
        group.members.append(prop.name)

        if part == "family":
            group.font_family = prop.value
        elif part == "size":
            size_px = _parse_px(prop.value)
            if size_px is not None:
                group.font_size_px = size_px
                group.font_size = to_rem(size_px, rem_base)
        elif part == "weight":
            group.font_weight = prop.value
        elif part == "line-height":
            group.line_height_px = _parse_px(prop.value)
        elif part == "letter-spacing":
            group.letter_spacing = (
                f"{format_number(prop.value)}em" if _is_number(prop.value) else prop.value
            )

    grouped: list[_RawToken] = []
    for group in groups.values():
        if not group.font_family or not group.font_size:
            logger.debug(
                "Dropping font group %s: needs family and size (have %s)",
                group.name,
                ", ".join(group.members),
            )
            continue

        line_height = "1.5"
        if group.line_height_px and group.font_size_px and group.font_size_px > 0:
            line_height = f"{group.line_height_px / group.font_size_px:.3f}"

        value: dict[str, Any] = {
            "fontFamily": group.font_family,
            "fontSize": group.font_size,
            "fontWeight": group.font_weight or 400,
            "lineHeight": line_height,
        }
        if group.letter_spacing is not None:
            value["letterSpacing"] = group.letter_spacing
        grouped.append(_RawToken(group.name, "typography", value, group.description))

    return grouped


# ═══════════════════════════════════════════════════════════════════════════
# LEGACY PARSING
# ═══════════════════════════════════════════════════════════════════════════


def parse_legacy_tokens(data: Mapping[str, Any]) -> list[_RawToken]:
    """Flatten a legacy Figma export, trusting each entry's declared type."""
    tokens = data["tokens"]
    parsed: list[_RawToken] = []

    for category in LEGACY_CATEGORIES:
        entries = tokens.get(category)
        if not entries:
            continue
        if not isinstance(entries, Mapping):
            raise TokenValidationError(f'Token category "{category}" must be an object')

        for name, entry in entries.items():
            if not isinstance(entry, Mapping):
                raise TokenValidationError(f'Token "{name}" must be an object, got {entry!r}')
            parsed.append(
                _RawToken(
                    name=str(name),
                    type=str(entry.get("type")),
                    value=entry.get("value"),
                    description=entry.get("description"),
                )
            )

    return parsed


# ═══════════════════════════════════════════════════════════════════════════
# VALUE VALIDATION
# ═══════════════════════════════════════════════════════════════════════════


def _typography_value(value: Any) -> TypographyValue | None:
    if not isinstance(value, Mapping):
        return None
    weight = value.get("fontWeight")
    letter_spacing = value.get("letterSpacing")
    if not (
        isinstance(value.get("fontFamily"), str)
        and isinstance(value.get("fontSize"), str)
        and (isinstance(weight, str) or _is_number(weight))
        and isinstance(value.get("lineHeight"), str)
        and (letter_spacing is None or isinstance(letter_spacing, str))
    ):
        return None
    return TypographyValue(
        font_family=value["fontFamily"],
        font_size=value["fontSize"],
        font_weight=weight,
        line_height=value["lineHeight"],
        letter_spacing=letter_spacing,
    )


def _require_string(raw: _RawToken, label: str) -> str:
    if not isinstance(raw.value, str):
        raise TokenValidationError(
            f'{label} token "{raw.name}" must have a string value, got {raw.value!r}'
        )
    return raw.value


def validate_token_value(raw: _RawToken) -> DesignToken:
    """Check a candidate against its type's grammar and build the final token."""
    if raw.type == "color":
        value = _require_string(raw, "Color")
        if not COLOR_PATTERN.fullmatch(value):
            raise TokenValidationError(
                f'Color token "{raw.name}" has invalid color format: {value}'
            )
        return DesignToken(raw.name, "color", value, raw.description)

    if raw.type == "spacing":
        value = _require_string(raw, "Spacing")
        if not SPACING_PATTERN.fullmatch(value):
            raise TokenValidationError(
                f'Spacing token "{raw.name}" has invalid spacing format: {value}'
            )
        return DesignToken(raw.name, "spacing", value, raw.description)

    if raw.type == "typography":
        typography = _typography_value(raw.value)
        if typography is None:
            raise TokenValidationError(
                f'Typography token "{raw.name}" must have a valid typography value object, '
                f"got {raw.value!r}"
            )
        return DesignToken(raw.name, "typography", typography, raw.description)

    if raw.type == "shadow":
        value = _require_string(raw, "Shadow")
        return DesignToken(raw.name, "shadow", value, raw.description)

    if raw.type == "borderRadius":
        value = _require_string(raw, "Border radius")
        if not RADIUS_PATTERN.fullmatch(value):
            raise TokenValidationError(
                f'Border radius token "{raw.name}" has invalid format: {value}'
            )
        return DesignToken(raw.name, "borderRadius", value, raw.description)

    raise TokenValidationError(f'Unknown token type: {raw.type} (token "{raw.name}")')


# ═══════════════════════════════════════════════════════════════════════════
# ENTRY POINT
# ═══════════════════════════════════════════════════════════════════════════


def validate_tokens(data: Any, rem_base: float = DEFAULT_REM_BASE) -> list[DesignToken]:
    """
    Parse and validate a token document.

    Args:
        data: Parsed JSON document (W3C tree or legacy ``{"tokens": ...}``)
        rem_base: Pixel size of 1rem used for unit conversion

    Returns:
        Validated tokens in document order, typography groups last

    Raises:
        TokenValidationError: If the document is malformed or any token is invalid
    """
    if not isinstance(data, Mapping):
        raise TokenValidationError("Token data must be an object")

    raw_tokens: list[_RawToken]
    if is_w3c_document(data):
        parsed = parse_w3c_tokens(data, rem_base=rem_base)
        raw_tokens = [item for item in parsed if isinstance(item, _RawToken)]
        font_properties = [item for item in parsed if isinstance(item, FontProperty)]
        raw_tokens.extend(group_typography(font_properties, rem_base))
    else:
        if not isinstance(data.get("tokens"), Mapping):
            raise TokenValidationError('Token data must have a "tokens" property')
        raw_tokens = parse_legacy_tokens(data)

    if not raw_tokens:
        raise TokenValidationError("No valid tokens found in token data")

    tokens: list[DesignToken] = []
    seen: set[str] = set()
    for raw in raw_tokens:
        if raw.name in seen:
            raise TokenValidationError(f"Duplicate token name: {raw.name}")
        seen.add(raw.name)
        tokens.append(validate_token_value(raw))

    logger.debug("Validated %d tokens", len(tokens))
    return tokens
