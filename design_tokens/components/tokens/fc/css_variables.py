"""
Token Pipeline Functional Core: CSS custom properties.

Every token becomes at least one ``--name: value`` declaration under a
single ``:root`` block. Typography tokens are composite and expand into one
variable per field:

    --{name}-family, --{name}-size, --{name}-weight,
    --{name}-line-height, --{name}-letter-spacing (when set)

Optional shadcn-style semantic aliases (``--primary``, ``--radius``, ...)
can be layered on top; colors are converted to the bare HSL triplet those
components expect.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from design_tokens.components.tokens.fc.models import (
    CSSVariables,
    DesignToken,
    TokenValidationError,
    TypographyValue,
)

logger = logging.getLogger(__name__)

HEX_COLOR_PATTERN = re.compile(r"#([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})")


# ═══════════════════════════════════════════════════════════════════════════
# TOKEN VARIABLES
# ═══════════════════════════════════════════════════════════════════════════


def _typography_declarations(name: str, value: TypographyValue) -> list[tuple[str, str]]:
    declarations = [
        (f"--{name}-family", value.font_family),
        (f"--{name}-size", value.font_size),
        (f"--{name}-weight", str(value.font_weight)),
        (f"--{name}-line-height", value.line_height),
    ]
    if value.letter_spacing is not None:
        declarations.append((f"--{name}-letter-spacing", value.letter_spacing))
    return declarations


def generate_css_variables(tokens: list[DesignToken]) -> CSSVariables:
    """
    Map tokens to CSS custom properties in input order.

    Raises:
        TokenValidationError: If two tokens produce the same variable name
    """
    variables: CSSVariables = {}

    for token in tokens:
        if isinstance(token.value, TypographyValue):
            declarations = _typography_declarations(token.name, token.value)
        else:
            declarations = [(f"--{token.name}", token.value)]

        for variable, value in declarations:
            if variable in variables:
                raise TokenValidationError(
                    f'Token "{token.name}" redefines CSS variable {variable}'
                )
            variables[variable] = value

    return variables


# ═══════════════════════════════════════════════════════════════════════════
# SEMANTIC ALIASES
# ═══════════════════════════════════════════════════════════════════════════


def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert hex color to RGB tuple. Alpha digits are ignored."""
    hex_color = hex_color.lstrip("#")

    if len(hex_color) == 3:
        hex_color = "".join(c * 2 for c in hex_color)

    return (
        int(hex_color[0:2], 16),
        int(hex_color[2:4], 16),
        int(hex_color[4:6], 16),
    )


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def hex_to_hsl(hex_color: str) -> str:
    """
    Convert a hex color to the space-separated HSL form used by shadcn.

    ``#ff0000`` -> ``"0 100% 50%"`` (no ``hsl()`` wrapper).
    """
    r, g, b = (c / 255 for c in _hex_to_rgb(hex_color))

    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2
    hue = 0.0
    saturation = 0.0

    if high != low:
        delta = high - low
        saturation = delta / (2 - high - low) if lightness > 0.5 else delta / (high + low)
        if high == r:
            hue = (g - b) / delta + (6 if g < b else 0)
        elif high == g:
            hue = (b - r) / delta + 2
        else:
            hue = (r - g) / delta + 4
        hue /= 6

    return (
        f"{_round_half_up(hue * 360)} "
        f"{_round_half_up(saturation * 100)}% "
        f"{_round_half_up(lightness * 100)}%"
    )


def generate_semantic_variables(
    tokens: list[DesignToken],
    aliases: Mapping[str, str],
    radius_token: str | None = "border-radius-DEFAULT",
    radius_fallback: str | None = "0.5rem",
    font_token: str | None = None,
    font_fallback: str | None = None,
    spacing_aliases: Mapping[str, str] | None = None,
) -> CSSVariables:
    """
    Build semantic alias variables from named tokens.

    Args:
        tokens: Validated tokens
        aliases: Semantic variable name (without ``--``) -> color token name
        radius_token: Border radius token that feeds ``--radius``
        radius_fallback: ``--radius`` when radius_token is missing
        font_token: Token whose font family feeds ``--font-sans``/``--font-heading``
        font_fallback: Family used when font_token is missing
        spacing_aliases: Semantic variable name -> spacing token name

    Returns:
        Alias variables; aliases pointing at missing or non-hex colors are skipped
    """
    by_name = {token.name: token for token in tokens}
    variables: CSSVariables = {}

    for semantic, token_name in aliases.items():
        token = by_name.get(token_name)
        if token is None or token.type != "color":
            logger.warning("Semantic alias --%s: no color token named %s", semantic, token_name)
            continue
        if not isinstance(token.value, str) or not HEX_COLOR_PATTERN.fullmatch(token.value):
            logger.warning("Semantic alias --%s: %s is not a hex color", semantic, token.value)
            continue
        variables[f"--{semantic}"] = hex_to_hsl(token.value)

    radius = radius_fallback
    token = by_name.get(radius_token) if radius_token else None
    if token is not None and token.type == "borderRadius" and isinstance(token.value, str):
        radius = token.value
    if radius:
        variables["--radius"] = radius

    for semantic, token_name in (spacing_aliases or {}).items():
        token = by_name.get(token_name)
        if token is None or token.type != "spacing" or not isinstance(token.value, str):
            logger.warning("Semantic alias --%s: no spacing token named %s", semantic, token_name)
            continue
        variables[f"--{semantic}"] = token.value

    family: str | None = font_fallback
    font = by_name.get(font_token) if font_token else None
    if font is not None:
        family = font.value.font_family if isinstance(font.value, TypographyValue) else font.value
    if family:
        variables["--font-sans"] = f'"{family}", sans-serif'
        variables["--font-heading"] = f'"{family}", sans-serif'

    return variables


# ═══════════════════════════════════════════════════════════════════════════
# STYLESHEET
# ═══════════════════════════════════════════════════════════════════════════


def generate_css_string(variables: Mapping[str, str]) -> str:
    """Wrap variables in a single ``:root`` block, one declaration per line."""
    lines = [":root {"]
    lines.extend(f"  {name}: {value};" for name, value in variables.items())
    lines.append("}")
    return "\n".join(lines)
