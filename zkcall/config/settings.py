"""
Settings Module
===============

Pydantic-based configuration with environment variable loading.

Version: 0.1.0
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class NetworkMode(str, Enum):
    """Contract client operation mode."""

    MOCK = "mock"
    RPC = "rpc"


class NetworkSettings(BaseSettings):
    """Chain network configuration."""

    model_config = SettingsConfigDict(
        env_prefix="NETWORK_",
        populate_by_name=True,
        env_file=".env",
        extra="ignore",
    )

    mode: NetworkMode = NetworkMode.MOCK
    name: str = "sepolia"

    rpc_url: str = Field(
        default="",
        validation_alias=AliasChoices("NETWORK_RPC_URL", "SEPOLIA_RPC_URL"),
    )
    private_key: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("NETWORK_PRIVATE_KEY", "PRIVATE_KEY"),
    )
    chain_id: int | None = None

    # Transaction submission
    receipt_timeout_seconds: float = Field(default=120.0, gt=0)
    gas_limit: int | None = Field(default=None, gt=0)

    @property
    def has_signer(self) -> bool:
        """Check if a signing key is configured."""
        return bool(self.private_key.get_secret_value())


class VerifierSettings(BaseSettings):
    """Verifier contract and proof artifact locations."""

    model_config = SettingsConfigDict(
        env_prefix="VERIFIER_",
        env_file=".env",
        extra="ignore",
    )

    contract_name: str = "Groth16Verifier"
    address: str = ""
    artifacts_dir: Path = Path("artifacts")

    proof_path: Path = Path("proof.json")
    public_path: Path = Path("public.json")

    # Reject coordinates/signals outside the BN254 fields before submission
    strict_field_check: bool = False


class Settings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables with sensible defaults.
    Obtain the cached instance with `get_settings()`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: Environment = Environment.DEVELOPMENT
    log_level: LogLevel = LogLevel.INFO
    # Defaults to JSON output in production
    json_logs: bool | None = Field(default=None, validate_default=True)

    network: NetworkSettings = Field(default_factory=NetworkSettings)
    verifier: VerifierSettings = Field(default_factory=VerifierSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Ensure log level is uppercase."""
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @field_validator("json_logs")
    @classmethod
    def default_json_logs(cls, v: bool | None, info: ValidationInfo) -> bool:
        """Use JSON logs in production unless set explicitly."""
        if v is None:
            return info.data.get("environment") == Environment.PRODUCTION
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings singleton.
    """
    return Settings()
