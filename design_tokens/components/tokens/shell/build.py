"""
Token build orchestration.

Shell Layer - handles I/O and wires configuration into the pure pipeline.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from design_tokens.adapters.fs.filestore import FileSystemStore
from design_tokens.components.tokens.fc import (
    DesignToken,
    ThemeExtension,
    TokenValidationError,
    generate_css_string,
    generate_css_variables,
    generate_semantic_variables,
    transform_tokens,
    validate_tokens,
)
from design_tokens.rules.models import Rules

logger = logging.getLogger(__name__)

THEME_MODULE_HEADER = (
    "// This file is auto-generated. Do not edit manually.\n"
    "import type { TailwindThemeExtension } from './types';\n"
)


@dataclass(frozen=True)
class PipelineOutput:
    """Everything a build produces, before it is written."""

    tokens: list[DesignToken]
    theme: ThemeExtension
    css: str


@dataclass(frozen=True)
class BuildResult:
    """Outcome of a build."""

    token_count: int
    theme_path: Path | None = None
    css_path: Path | None = None


def load_source(path: Path) -> Any:
    """Read and parse the JSON token source."""
    if not path.exists():
        raise FileNotFoundError(f"Token source not found at: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in token source {path}: {e}") from e


def render_theme_module(theme: ThemeExtension) -> str:
    """Render the generated TypeScript module exporting ``designTokens``."""
    body = json.dumps(theme, indent=2, ensure_ascii=False)
    return (
        f"{THEME_MODULE_HEADER}\n"
        f"export const designTokens: TailwindThemeExtension = {body};\n"
    )


def run_pipeline(data: Any, rules: Rules) -> PipelineOutput:
    """Validate, transform and emit. Raises TokenValidationError on bad input."""
    tokens = validate_tokens(data, rem_base=rules.pipeline.rem_base)
    logger.info("Found %d valid tokens", len(tokens))

    theme = transform_tokens(
        tokens,
        resolve_references=rules.transform.resolve_references,
        reference_fallbacks=rules.transform.reference_fallbacks,
    )

    variables = generate_css_variables(tokens)
    if rules.css.semantic_enabled:
        semantic = generate_semantic_variables(
            tokens,
            rules.css.semantic_aliases,
            radius_token=rules.css.radius_token,
            radius_fallback=rules.css.radius_fallback,
            font_token=rules.css.font_token,
            font_fallback=rules.css.font_fallback,
            spacing_aliases=rules.css.spacing_aliases,
        )
        for name in semantic:
            if name in variables:
                raise TokenValidationError(
                    f"Semantic variable {name} collides with a token variable"
                )
        variables.update(semantic)

    return PipelineOutput(tokens=tokens, theme=theme, css=generate_css_string(variables))


def build(
    rules: Rules,
    source: Path | None = None,
    out_dir: Path | None = None,
    check_only: bool = False,
) -> BuildResult:
    """
    Build design token artifacts.

    Args:
        rules: Pipeline configuration
        source: Token JSON path, overriding rules.pipeline.source
        out_dir: Output directory, overriding rules.pipeline.out_dir
        check_only: Validate without writing anything

    Returns:
        BuildResult with the token count and the paths written
    """
    source_path = source or Path(rules.pipeline.source)
    logger.info("Building design tokens from %s", source_path)

    output = run_pipeline(load_source(source_path), rules)
    if check_only:
        return BuildResult(token_count=len(output.tokens))

    store = FileSystemStore(str(out_dir or Path(rules.pipeline.out_dir)))
    written = store.write_all(
        {
            rules.pipeline.theme_filename: render_theme_module(output.theme),
            rules.pipeline.css_filename: output.css + "\n",
        }
    )
    for path in written.values():
        logger.info("Generated %s", path)

    return BuildResult(
        token_count=len(output.tokens),
        theme_path=written[rules.pipeline.theme_filename],
        css_path=written[rules.pipeline.css_filename],
    )
