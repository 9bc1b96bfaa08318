# portfolio/core/settings.py
from dataclasses import dataclass
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Dict, Optional


@dataclass(frozen=True)
class DeliveryConfig:
    recipient: Optional[str] = None
    sender: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    region: str = "us-west-2"
    timeout_seconds: float = 10.0

    def presence(self) -> Dict[str, bool]:
        """Which required values are set, safe to log."""
        return {
            "AWS_ACCESS_KEY_ID": bool(self.access_key_id),
            "AWS_SECRET_ACCESS_KEY": bool(self.secret_access_key),
            "EMAIL": bool(self.recipient),
            "FROM_EMAIL": bool(self.sender),
        }

    @property
    def is_complete(self) -> bool:
        return all(self.presence().values())


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    api_title: str = Field(default="Portfolio API", alias="API_TITLE")
    cors_origins: str = Field(default="http://localhost:5173", alias="CORS_ORIGINS")

    # Operator inbox that receives contact messages
    contact_email: Optional[str] = Field(default=None, alias="EMAIL")
    # Verified SES sender identity
    from_email: Optional[str] = Field(default=None, alias="FROM_EMAIL")

    aws_access_key_id: Optional[str] = Field(default=None, alias="AWS_ACCESS_KEY_ID")
    aws_secret_access_key: Optional[str] = Field(default=None, alias="AWS_SECRET_ACCESS_KEY")
    aws_region: str = Field(default="us-west-2", alias="AWS_REGION")

    ses_timeout_seconds: float = Field(default=10.0, gt=0, alias="SES_TIMEOUT_SECONDS")

    def delivery_config(self) -> DeliveryConfig:
        return DeliveryConfig(
            recipient=self.contact_email,
            sender=self.from_email,
            access_key_id=self.aws_access_key_id,
            secret_access_key=self.aws_secret_access_key,
            region=self.aws_region,
            timeout_seconds=self.ses_timeout_seconds,
        )

settings = Settings()
delivery_config = settings.delivery_config()


def get_delivery_config() -> DeliveryConfig:
    return delivery_config
