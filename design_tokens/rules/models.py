from pydantic import BaseModel, ConfigDict, Field


class PipelineRules(BaseModel):
    source: str = "tokens.json"
    out_dir: str = "out"
    theme_filename: str = "tokens.ts"
    css_filename: str = "variables.css"
    rem_base: float = Field(default=16, gt=0)

    model_config = ConfigDict(extra="forbid")

class TransformRules(BaseModel):
    resolve_references: bool = True
    reference_fallbacks: dict[str, str] = Field(
        default_factory=lambda: {
            "{font.letter-spacing.0}": "0",
            "{border.width.none}": "0",
            "{border.radius.none}": "0",
            "{space.0}": "0",
            "{color.status.error}": "#e90932",
        }
    )

    model_config = ConfigDict(extra="forbid")

class CssRules(BaseModel):
    semantic_aliases: dict[str, str] = Field(default_factory=dict)
    spacing_aliases: dict[str, str] = Field(default_factory=dict)
    radius_token: str | None = "border-radius-DEFAULT"
    radius_fallback: str | None = "0.5rem"
    font_token: str | None = "font-family-heading"
    font_fallback: str | None = "Albert Sans"

    model_config = ConfigDict(extra="forbid")

    @property
    def semantic_enabled(self) -> bool:
        return bool(self.semantic_aliases or self.spacing_aliases)

class Rules(BaseModel):
    pipeline: PipelineRules = Field(default_factory=PipelineRules)
    transform: TransformRules = Field(default_factory=TransformRules)
    css: CssRules = Field(default_factory=CssRules)

    model_config = ConfigDict(extra="forbid")
