"""
Token Pipeline Functional Core: pure parsing, transform and emit functions.

No I/O operations - every function is deterministic in its input document.
"""

from design_tokens.components.tokens.fc.css_variables import (
    generate_css_string,
    generate_css_variables,
    generate_semantic_variables,
    hex_to_hsl,
)
from design_tokens.components.tokens.fc.models import (
    CSSVariables,
    DesignToken,
    ThemeExtension,
    TokenType,
    TokenValidationError,
    TypographyValue,
)
from design_tokens.components.tokens.fc.transform import (
    ReferenceResolver,
    theme_key,
    transform_tokens,
)
from design_tokens.components.tokens.fc.validators import (
    DEFAULT_REM_BASE,
    format_number,
    group_typography,
    is_w3c_document,
    to_rem,
    validate_tokens,
)

__all__ = [
    # Models
    "CSSVariables",
    "DesignToken",
    "ThemeExtension",
    "TokenType",
    "TokenValidationError",
    "TypographyValue",
    # Validator
    "DEFAULT_REM_BASE",
    "format_number",
    "group_typography",
    "is_w3c_document",
    "to_rem",
    "validate_tokens",
    # Transformer
    "ReferenceResolver",
    "theme_key",
    "transform_tokens",
    # CSS emitter
    "generate_css_string",
    "generate_css_variables",
    "generate_semantic_variables",
    "hex_to_hsl",
]
