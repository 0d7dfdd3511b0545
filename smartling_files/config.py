from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

DEFAULT_SERVICE_URL = "https://api.smartling.com/files-api/v2/projects/"
DEFAULT_AUTH_URL = "https://api.smartling.com/auth-api/v2"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SMARTLING_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials
    project_id: Optional[str] = None
    user_identifier: Optional[str] = None
    user_secret: Optional[str] = None

    # Endpoints
    base_url: str = DEFAULT_SERVICE_URL
    auth_url: str = DEFAULT_AUTH_URL

    # HTTP settings
    timeout: float = 30.0

    # Example driver
    log_level: str = "INFO"

    def missing_credentials(self) -> List[str]:
        """Names of the credential settings that are not set."""
        required = {
            "project_id": self.project_id,
            "user_identifier": self.user_identifier,
            "user_secret": self.user_secret,
        }
        return [name for name, value in required.items() if not value]
