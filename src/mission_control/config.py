"""Configuration management for Mission Control using Pydantic Settings."""

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MissionControlConfig(BaseSettings):
    """Faucet bot configuration loaded from environment variables.

    Every field without a default is required; a missing value raises
    ``pydantic.ValidationError`` and the service refuses to start.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # Slack
    slack_bot_token: SecretStr = Field(alias="SLACK_BOT_TOKEN")
    slack_app_token: SecretStr = Field(alias="SLACK_APP_TOKEN")
    slack_channel: str = Field(alias="SLACK_CHANNEL", min_length=1)

    # Ledger
    rpc_url: str = Field(alias="RPC_URL", min_length=1)
    account_key: SecretStr = Field(alias="ACCOUNT_KEY")
    block_explorer_url: str | None = Field(default=None, alias="BLOCK_EXPLORER_URL")

    # Token distribution
    token_count: int = Field(default=10, alias="TOKEN_COUNT", gt=0)
    token_symbol: str = Field(default="DEV", alias="TOKEN_SYMBOL")
    cooldown_minutes: int = Field(default=60, alias="FAUCET_COOLDOWN_MINUTES", gt=0)

    # Observability
    metrics_port: int = Field(default=8080, alias="MISSION_CONTROL_METRICS_PORT", ge=1, le=65535)
    log_level: str = Field(default="INFO", alias="MISSION_CONTROL_LOG_LEVEL")
    log_format: str = Field(default="json", alias="MISSION_CONTROL_LOG_FORMAT")

    @field_validator("slack_bot_token", "slack_app_token", "account_key")
    @classmethod
    def _require_secret(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("must not be empty")
        return value
