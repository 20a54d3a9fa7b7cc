import base64
import os
import re
from typing import Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


ACTION_PATH = "/api/callAction"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class ConfigurationError(ValueError):
    pass


def parse_device_id(value: Optional[str]) -> Optional[int]:
    """Parse the leading base-10 integer of a QuickApp id.

    Returns None when there are no leading digits; it is sent as JSON null.
    """
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def _stringify(value):
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class DestinationConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    hc3_url: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("hc3_url", "HC3_URL", "hc3Url")
    )
    hc3_user: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("hc3_user", "HC3_USER")
    )
    hc3_password: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("hc3_password", "HC3_PASSWORD")
    )
    quickapp_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("quickapp_id", "QUICKAPP_ID")
    )
    timeout: int = Field(
        default=10, validation_alias=AliasChoices("timeout", "HC3_TIMEOUT")
    )  # seconds

    @field_validator("quickapp_id", mode="before")
    @classmethod
    def normalize_quickapp_id(cls, value):
        return _stringify(value)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "DestinationConfig":
        """Build a destination from an environment mapping (os.environ by default)."""
        if env is None:
            env = os.environ
        return cls.model_validate(dict(env))

    def missing_fields(self):
        return [
            name
            for name in ("hc3_url", "hc3_user", "hc3_password", "quickapp_id")
            if not getattr(self, name)
        ]

    def require_complete(self) -> None:
        if self.missing_fields():
            raise ConfigurationError("Missing environment variables")

    @property
    def action_url(self) -> str:
        return f"{self.hc3_url}{ACTION_PATH}"

    @property
    def authorization(self) -> str:
        credentials = f"{self.hc3_user}:{self.hc3_password}".encode("utf-8")
        return f"Basic {base64.b64encode(credentials).decode('ascii')}"

    @property
    def device_id(self) -> Optional[int]:
        return parse_device_id(self.quickapp_id)


class ProxyServerConfig(BaseSettings):
    model_config = SettingsConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    # Inline defaults are for local testing only
    hc3_url: str = Field(
        default="http://192.168.1.100",
        validation_alias=AliasChoices("hc3_url", "HC3_URL", "hc3Url"),
    )
    hc3_user: str = "admin"
    hc3_password: str = "your-password"
    quickapp_id: str = "123"
    hc3_timeout: int = 10  # seconds

    @field_validator("quickapp_id", mode="before")
    @classmethod
    def normalize_quickapp_id(cls, value):
        return _stringify(value)

    @property
    def destination(self) -> DestinationConfig:
        return DestinationConfig(
            hc3_url=self.hc3_url,
            hc3_user=self.hc3_user,
            hc3_password=self.hc3_password,
            quickapp_id=self.quickapp_id,
            timeout=self.hc3_timeout,
        )
