from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from redeck.domain.constants import (
    CLOZE_TYPE_NAME,
    DEFAULT_CLOZE_EMPHASIS,
    DEFAULT_CLOZE_PLACEHOLDER,
    DEFAULT_QA_SEPARATOR,
    QA_TYPE_NAME,
)

ItemTypeName = Literal["qa", "cloze"]


def config_files() -> list[Path]:
    return [
        Path.home() / ".config/redeck/config.toml",
        Path.home() / ".redeck.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for redeck.
    Supports loading from:
    1. Environment variables (REDECK_*)
    2. Config file (~/.config/redeck/config.toml or ~/.redeck.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="REDECK_",
        extra="ignore",
    )

    # Type inference order (first match wins)
    item_types: Annotated[list[ItemTypeName], NoDecode] = Field(
        default_factory=lambda: [QA_TYPE_NAME, CLOZE_TYPE_NAME]
    )

    # Item type rendering
    qa_separator: str = DEFAULT_QA_SEPARATOR
    cloze_placeholder: str = DEFAULT_CLOZE_PLACEHOLDER
    cloze_emphasis: str = DEFAULT_CLOZE_EMPHASIS

    verbose: int = 1

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing file wins
        toml_file = next((f for f in config_files() if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("item_types", mode="before")
    @classmethod
    def split_item_types(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [name.strip() for name in v.split(",") if name.strip()]
        return v

    @field_validator("item_types")
    @classmethod
    def check_item_types(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("at least one item type is required")
        if len(set(v)) != len(v):
            raise ValueError(f"duplicate item types in {v}")
        return v

    @field_validator("qa_separator")
    @classmethod
    def check_separator(cls, v: str) -> str:
        if not v.strip() or "\n" in v or v != v.strip():
            raise ValueError("separator must be a single non-blank line without padding")
        return v


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/redeck/config.toml (if exists)
    3. Environment variables (REDECK_*)
    4. cli_overrides (passed from Typer), non-None values only
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
