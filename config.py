"""Application configuration."""
import os
from dataclasses import dataclass


@dataclass
class PowerSchoolApiConfig:
    """PowerSchool API configuration."""

    base_url: str = "http://localhost:8080"
    access_token: str = ""  # OAuth token issued for the plugin
    timeout: int = 60

    @classmethod
    def from_env(cls) -> "PowerSchoolApiConfig":
        """Load config from environment variables."""
        return cls(
            base_url=os.getenv("PS_API_URL", "http://localhost:8080"),
            access_token=os.getenv("PS_ACCESS_TOKEN", ""),
            timeout=int(os.getenv("PS_API_TIMEOUT", "60")),
        )


@dataclass
class AppConfig:
    """Application configuration."""

    powerschool_api: PowerSchoolApiConfig = None

    def __post_init__(self):
        """Fill in defaults."""
        if self.powerschool_api is None:
            self.powerschool_api = PowerSchoolApiConfig.from_env()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load config from environment variables."""
        return cls(
            powerschool_api=PowerSchoolApiConfig.from_env(),
        )


# Global instance
app_config = AppConfig()
