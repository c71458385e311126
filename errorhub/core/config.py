"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here, no scattered magic strings.
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name used in notifications and the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        environment: Deployment environment name. "production" disables
            error simulation and the simulation admin routes.
        catalog_path: YAML file holding error definitions and the
            hard fallback definition.
        translations_dir: Directory of ``<locale>.yaml`` message files.
        simulation_enabled: Force simulation on/off. None derives it
            from the environment.

    Notification and persistence settings mirror the handler they feed.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "ErrorHub"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    environment: str = "production"

    # Catalog and translations
    catalog_path: Path = RESOURCES_DIR / "errors.yaml"
    translations_dir: Path = RESOURCES_DIR / "lang"
    locale: str = "en"
    fallback_locale: str = "en"

    # Simulation
    simulation_enabled: Optional[bool] = None

    # Persistence of error records
    database_url: Optional[str] = None
    database_logging_enabled: bool = True
    database_include_trace: bool = True
    database_max_trace_length: int = 10_000

    # Email notifications
    email_notifications_enabled: bool = True
    email_recipient: Optional[str] = None
    email_from_address: str = "noreply@example.com"
    email_from_name: str = "Error Monitoring System"
    email_subject_prefix: str = "[ERROR] "
    smtp_host: str = "localhost"
    smtp_port: int = 25
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_tls: bool = False
    smtp_timeout: float = 10.0

    # Secondary channel (Slack incoming webhook)
    slack_notifications_enabled: bool = False
    slack_webhook_url: Optional[str] = None
    slack_channel: str = "#errors"
    slack_username: str = "Error Bot"
    slack_icon_emoji: str = ":warning:"
    slack_timeout: float = 10.0

    # UI surfacing
    ui_default_display_mode: str = "inline"
    show_error_codes: bool = False

    # HTTP
    rate_limit_default: str = "60/minute"
    rate_limit_admin: str = "20/minute"
    rate_limit_enabled: bool = True

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    def is_simulation_enabled(self) -> bool:
        """Return the effective simulation switch.

        Priority:
        1. Explicit `SIMULATION_ENABLED`.
        2. Enabled everywhere except production.
        """
        if self.simulation_enabled is not None:
            return self.simulation_enabled
        return not self.is_production


settings = Settings()
