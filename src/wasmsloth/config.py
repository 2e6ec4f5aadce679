"""
Application settings and configuration.

Settings are fixed for the life of the process. Only values passed to
``Settings(...)`` apply; environment variables and dotenv files are never
read.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(frozen=True)

    # Identifying label attached to every generated rule
    source_label_name: str = "source"
    source_label_value: str = "wasm-sloth"

    # Name of the single module an extension is stored under
    plugin_module_name: str = "plugin.py"

    # Name the entry point is registered under in the host namespace
    export_name: str = "generateSLOFromRaw"

    # SLO period used for budget and burn rate calculations
    slo_period: str = "30d"

    version: str = "v0.1.0"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
