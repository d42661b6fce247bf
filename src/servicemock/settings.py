from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "LoggingSettings",
    "ResponseSettings",
    "Settings",
    "print_config",
    "reload_settings",
    "settings",
]


class LoggingSettings(BaseModel):
    """
    Logging settings for the application
    """

    disabled: bool = False
    clear_loggers: bool = True
    console_log_level: str = "WARNING"
    log_file: str | None = None
    log_file_level: str | None = None


class ResponseSettings(BaseModel):
    """
    Defaults applied when building mock responses from definitions
    """

    default_status: int = Field(default=200, ge=100, le=599)
    default_delay: int = Field(default=0, ge=0)
    resource_root: Path | None = None
    encoding: str = "utf-8"
    json_indent: int = Field(default=2, ge=0)
    request_timeout: float = 30.0


class Settings(BaseSettings):
    """
    All the settings are powered by pydantic_settings and could be
    populated from the .env file.

    The format to populate the settings is next

    ```sh
    export SERVICEMOCK__RESPONSES__DEFAULT_STATUS=404
    ```
    """

    model_config = SettingsConfigDict(
        env_prefix="SERVICEMOCK__",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
        env_file=".env",
    )

    logging: LoggingSettings = LoggingSettings()
    responses: ResponseSettings = ResponseSettings()

    def generate_env_file(self) -> str:
        """
        Render the current settings as environment variable assignments,
        one line per field of each settings section
        """
        prefix = self.model_config.get("env_prefix", "")
        delimiter = self.model_config.get("env_nested_delimiter") or "__"
        lines = []
        for section, section_settings in self:
            for key, value in section_settings:
                tag = f"{prefix}{section.upper()}{delimiter}{key.upper()}"
                if value is None or value == "":
                    lines.append(f"{tag}=")
                else:
                    lines.append(f'{tag}="{value}"')

        return "\n".join(lines) + "\n"


settings = Settings()


def reload_settings():
    """
    Reload the settings from the environment variables
    """
    new_settings = Settings()
    settings.__dict__.update(new_settings.__dict__)


def print_config():
    """
    Print the current configuration settings
    """
    print(f"Settings: \n{settings.generate_env_file()}")  # noqa: T201
