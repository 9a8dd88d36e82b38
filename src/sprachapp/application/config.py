import logging
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from sprachapp.domain.constants import DOWNLOAD_STEP_DELAY

CONFIG_FILE = Path(".config/sprachapp/config.toml")


class AppConfig(BaseSettings):
    """
    Configuration model for sprachapp.
    Supports loading from:
    1. Environment variables (SPRACHAPP_*)
    2. Config file (~/.config/sprachapp/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="SPRACHAPP_",
        extra="ignore",
    )

    # Paths
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".local/share/sprachapp")
    packs_file: Path | None = None  # custom pack YAML, bundled packs if unset

    # Behaviour
    username: str = "User"
    download_step_delay: float = Field(default=DOWNLOAD_STEP_DELAY, ge=0)
    verbose: int = Field(default=0, ge=0)  # 1 = info, 2+ = debug

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

        # Resolved per call so tests can point HOME elsewhere
        toml_file = Path.home() / CONFIG_FILE
        if toml_file.exists():
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("data_dir", "packs_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        if v is None:
            return None
        return Path(v).expanduser().resolve()

    @property
    def log_level(self) -> int:
        if self.verbose == 0:
            return logging.WARNING
        return logging.INFO if self.verbose == 1 else logging.DEBUG

    @property
    def state_file(self) -> Path:
        from sprachapp.consts import STORAGE_KEY

        return self.data_dir / f"{STORAGE_KEY}.json"


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/sprachapp/config.toml (if exists)
    3. Environment variables (SPRACHAPP_*)
    4. cli_overrides (passed from Typer)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
