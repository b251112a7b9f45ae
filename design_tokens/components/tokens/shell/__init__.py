"""
Token Pipeline Imperative Shell: file I/O around the functional core.

Reads one JSON token source, runs validate -> transform -> emit, and writes
the generated theme module and stylesheet. All outputs are computed before
anything is written, so a failed run leaves the output directory untouched.
"""

from design_tokens.components.tokens.shell.build import (
    BuildResult,
    PipelineOutput,
    build,
    load_source,
    render_theme_module,
    run_pipeline,
)

__all__ = [
    "BuildResult",
    "PipelineOutput",
    "build",
    "load_source",
    "render_theme_module",
    "run_pipeline",
]
