"""Application configuration via a JSON config file and environment variables."""
import json
import logging
from pathlib import Path

from pydantic_settings import (
    BaseSettings,
    InitSettingsSource,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

PACKAGE_DIR = Path(__file__).resolve().parent.parent
CONFIG_FILE = "set.json"

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Settings loaded from set.json, environment variables or .env file.

    The JSON file wins over the environment so a deployment can ship its
    credentials next to the app without touching the process environment.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        json_file=CONFIG_FILE,
        json_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "Wedding Invitation"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Google Sheets (service account)
    google_sheet_id: str = ""
    google_sheet_name: str = "myuser2"
    google_project_id: str = ""
    google_client_email: str = ""
    google_private_key: str = ""
    google_private_key_id: str = ""

    # Reconnect supervisor
    reconnect_interval_seconds: int = 30
    reconnect_max_interval_seconds: int = 300

    # Responses
    timestamp_format: str = "%d/%m/%Y, %H.%M.%S"

    # Files
    static_dir: Path = PACKAGE_DIR / "static"
    log_dir: Path = Path.home() / ".logs" / "invitation"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            config_file_source(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )


def config_file_source(settings_cls: type[BaseSettings]) -> PydanticBaseSettingsSource:
    """
    Settings source for the JSON config file.

    An unreadable or malformed file is logged and contributes nothing, so
    the environment still configures the app.
    """
    try:
        return JsonConfigSettingsSource(settings_cls)
    except (ValueError, OSError) as e:
        logger.error(f"Error loading {CONFIG_FILE}, using environment variables: {e}")
        return InitSettingsSource(settings_cls, {})


def config_file_loaded() -> bool:
    """Whether the JSON config file parsed to a non-empty object."""
    try:
        data = json.loads(Path(CONFIG_FILE).read_text(encoding="utf-8"))
    except (ValueError, OSError):
        return False
    return isinstance(data, dict) and bool(data)


settings = Settings()
