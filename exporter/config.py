from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from exporter.errors import ConfigError
from exporter.models.schemas import Credentials


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="", alias="APP_NAME")
    sid: str = Field(default="", alias="SID")
    token: str = Field(default="", alias="TOKEN")

    verify_base_url: str = Field(default="https://verify.twilio.com/v2/", alias="VERIFY_BASE_URL")
    verify_timeout_seconds: float = Field(default=5.0, gt=0, alias="VERIFY_TIMEOUT_SECONDS")
    verify_date_created_after: str = Field(default="", alias="VERIFY_DATE_CREATED_AFTER")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: Literal["json", "console"] = Field(default="json", alias="LOG_FORMAT")

    @property
    def missing_credentials(self) -> list[str]:
        required = {"APP_NAME": self.app_name, "SID": self.sid, "TOKEN": self.token}
        return [name for name, value in required.items() if not value]

    def credentials(self) -> Credentials:
        missing = self.missing_credentials
        if missing:
            raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")
        return Credentials(app_identifier=self.app_name, account_sid=self.sid, auth_token=self.token)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
