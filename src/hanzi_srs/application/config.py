from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from hanzi_srs.domain.constants import DEFAULT_DAILY_NEW_LIMIT, DEFAULT_DAILY_REVIEW_LIMIT
from hanzi_srs.domain.models import DEFAULT_PARAMETERS, Parameters


def config_file_path() -> Path:
    return Path.home() / ".config/hanzi-srs/config.toml"


class AppConfig(BaseSettings):
    """
    Configuration model for hanzi-srs.
    Supports loading from:
    1. Environment variables (HANZI_SRS_*)
    2. Config file (~/.config/hanzi-srs/config.toml)
    3. Manual overrides (CLI)

    Scheduler scalars left unset fall back to the parameter file, then to
    the built-in defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="HANZI_SRS_",
        extra="ignore",
    )

    # Scheduler
    request_retention: float | None = Field(default=None, gt=0.0, lt=1.0)
    maximum_interval: int | None = Field(default=None, ge=1)
    weights: list[float] | None = None
    parameters_file: Path | None = None

    # Deck
    daily_new_limit: int = Field(default=DEFAULT_DAILY_NEW_LIMIT, ge=0)
    daily_review_limit: int = Field(default=DEFAULT_DAILY_REVIEW_LIMIT, ge=0)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

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

        toml_file = config_file_path()
        if toml_file.exists():
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("parameters_file", mode="before")
    @classmethod
    def resolve_parameters_file(cls, v: Any) -> Path | None:
        if v is None or v == "":
            return None
        return Path(v).expanduser().resolve()

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    def to_parameters(self) -> Parameters:
        """
        Build the scheduler's Parameters bundle.

        Precedence per value: inline setting, then parameter file, then default.
        """
        base = DEFAULT_PARAMETERS
        if self.parameters_file is not None:
            from hanzi_srs.infrastructure.parameters_file import load_parameters

            base = load_parameters(self.parameters_file)

        return Parameters(
            request_retention=(
                self.request_retention
                if self.request_retention is not None
                else base.request_retention
            ),
            maximum_interval=(
                self.maximum_interval if self.maximum_interval is not None else base.maximum_interval
            ),
            w=tuple(self.weights) if self.weights is not None else base.w,
        )


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/hanzi-srs/config.toml (if exists)
    3. Environment variables (HANZI_SRS_*)
    4. cli_overrides (passed from Typer)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
