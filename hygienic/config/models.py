"""Configuration model for the import consolidator."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_BARREL_ROOT = "@/shared/components/ui"


class ConsolidatorConfig(BaseModel):
    """User configuration with validation."""

    # Barrel modules whose exports make up the component registry
    barrel_paths: list[str] = Field(
        default_factory=lambda: ["src/shared/components/ui/index.ts"]
    )
    # Import path of the barrel; sub-paths of it are consolidated into it
    barrel_root: str = Field(default=DEFAULT_BARREL_ROOT)

    # File discovery
    extensions: list[str] = Field(default_factory=lambda: [".tsx"])
    default_excludes: list[str] = Field(
        default_factory=lambda: ["node_modules", ".git", "dist", "build"]
    )

    # Behaviour
    sort_imports: bool = Field(default=False)
    cache_enabled: bool = Field(default=True)

    # Component names accepted even when no barrel exports them
    ui_components: list[str] = Field(default_factory=list)

    @field_validator("barrel_paths", "extensions", "default_excludes", "ui_components")
    @classmethod
    def validate_string_lists(cls, v: Any) -> list[str]:
        if not isinstance(v, list):
            raise ValueError("Value must be a list")
        for item in v:
            if not isinstance(item, str):
                raise ValueError("All list items must be strings")
        return v

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        return [ext if ext.startswith(".") else f".{ext}" for ext in v if ext]

    @field_validator("barrel_root")
    @classmethod
    def normalize_barrel_root(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("barrel_root cannot be empty")
        return v
