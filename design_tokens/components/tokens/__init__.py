"""
Token Pipeline: design token export -> Tailwind theme extension + CSS variables.

Functional core (fc/) validates and transforms token documents; the shell
(shell/) reads the source file and writes the generated artifacts.
"""

from design_tokens.components.tokens.fc import (
    CSSVariables,
    DesignToken,
    ThemeExtension,
    TokenValidationError,
    TypographyValue,
    generate_css_string,
    generate_css_variables,
    generate_semantic_variables,
    transform_tokens,
    validate_tokens,
)
from design_tokens.components.tokens.shell import (
    BuildResult,
    build,
    load_source,
    render_theme_module,
    run_pipeline,
)

__all__ = [
    # Models
    "CSSVariables",
    "DesignToken",
    "ThemeExtension",
    "TokenValidationError",
    "TypographyValue",
    # Pipeline
    "validate_tokens",
    "transform_tokens",
    "generate_css_variables",
    "generate_semantic_variables",
    "generate_css_string",
    # Shell
    "BuildResult",
    "build",
    "load_source",
    "render_theme_module",
    "run_pipeline",
]
