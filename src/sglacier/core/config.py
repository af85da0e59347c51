# sglacier/src/sglacier/core/config.py

from enum import Enum
from typing import Optional

import keyring
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    receipts_file: str = Field(default="glacier_receipts.json")
    vault_name: str = Field(default="glacier_archive")

    # AWS access
    aws_region: Optional[str] = Field(default=None)
    aws_account_id: str = Field(default="-")
    aws_access_key_id: Optional[str] = Field(default=None)
    aws_secret_access_key: Optional[str] = Field(default=None)

    job_output_prefix: str = Field(default="job_output.")
    log_level: LogLevel = Field(default=LogLevel.INFO)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SGLACIER_",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    def get_secure_value(self, key: str, default=None):
        attr_name = key.lower()
        try:
            secure = keyring.get_password("sglacier", key)
            return secure or getattr(self, attr_name, default)
        except Exception:
            return getattr(self, attr_name, default)


class RunOptions(BaseModel):
    """Options for a single command invocation, threaded into every command."""
    receipts_file: str
    vault: str
    collection_name: Optional[str] = None
    dry_run: bool = False
    force: bool = False
    test_debug: bool = False
    job_output_prefix: str = "job_output."

    @classmethod
    def from_settings(cls, settings: Settings, **overrides) -> "RunOptions":
        values = {
            "receipts_file": settings.receipts_file,
            "vault": settings.vault_name,
            "job_output_prefix": settings.job_output_prefix,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)


def get_settings() -> Settings:
    return Settings()
