"""Application configuration using pydantic-settings.

Holds the 1-Click API endpoint, the optional service-operated NEAR account,
delegated signer (Privy) credentials and session storage options.
"""

from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug mode")
    dry_run: bool = Field(
        default=False, description="Simulate deposits instead of broadcasting transactions"
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")

    # ======================
    # 1-Click settlement service
    # ======================
    oneclick_api_url: str = Field(
        default="https://1click.chaindefuser.com", description="1-Click API base URL"
    )
    oneclick_jwt: Optional[str] = Field(default=None, description="Optional 1-Click bearer token")
    oneclick_referral: str = Field(default="intentswap", description="Referral tag sent with quotes")
    quote_waiting_time_ms: int = Field(default=5000, description="Solver wait time per quote")
    default_slippage_bps: int = Field(default=100, description="Default slippage (100 = 1%)")
    quote_deadline_seconds: int = Field(default=180, description="Quote validity window")
    token_cache_ttl_seconds: int = Field(default=300, description="Token catalog TTL")

    # ======================
    # NEAR
    # ======================
    near_rpc_url: str = Field(
        default="https://rpc.mainnet.fastnear.com", description="NEAR JSON-RPC endpoint"
    )
    sender_near_account: Optional[str] = Field(
        default=None, description="Service-operated NEAR account id"
    )
    sender_private_key: Optional[str] = Field(
        default=None, description="ed25519:<base58> key for the service account"
    )
    near_fee_reserve: Decimal = Field(
        default=Decimal("0.05"), description="NEAR kept back for gas on native transfers"
    )

    # ======================
    # Delegated signer (Privy)
    # ======================
    privy_api_url: str = Field(default="https://api.privy.io", description="Privy API base URL")
    privy_app_id: str = Field(default="", description="Privy app id")
    privy_app_secret: str = Field(default="", description="Privy app secret")
    privy_authorization_id: str = Field(default="", description="Privy authorization key id")
    privy_authorization_secret: str = Field(
        default="", description="Privy authorization private key"
    )

    # ======================
    # Sessions
    # ======================
    session_store: str = Field(default="memory", description="Session store: memory or database")
    session_pool_max: int = Field(default=500, description="Maximum live conversations")
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/intentswap.db",
        description="Database URL for the durable session store",
    )

    # ======================
    # Status polling
    # ======================
    status_poll_max_attempts: int = Field(default=60, description="Maximum status polls")
    status_poll_interval_seconds: float = Field(default=5.0, description="Seconds between polls")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def has_service_account(self) -> bool:
        """Check if the service-operated NEAR account is configured."""
        return bool(self.sender_near_account and self.sender_private_key)

    @property
    def has_delegated_signer(self) -> bool:
        """Check if Privy credentials are configured."""
        return bool(
            self.privy_app_id
            and self.privy_app_secret
            and self.privy_authorization_id
            and self.privy_authorization_secret
        )

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "dry_run": self.dry_run,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "oneclick": {
                "url": self.oneclick_api_url,
                "jwt": "***" if self.oneclick_jwt else "(not set)",
                "slippage_bps": self.default_slippage_bps,
                "deadline_seconds": self.quote_deadline_seconds,
            },
            "near": {
                "rpc": self.near_rpc_url,
                "service_account": self.sender_near_account or "(not set)",
                "private_key": "***" if self.sender_private_key else "(not set)",
                "fee_reserve": str(self.near_fee_reserve),
            },
            "privy": {
                "configured": self.has_delegated_signer,
            },
            "sessions": {
                "store": self.session_store,
                "max": self.session_pool_max,
                "database_url": self._redact_url(self.database_url),
            },
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact sensitive parts of database URL."""
        if "://" in url and "@" in url:
            proto, rest = url.split("://", 1)
            if "@" in rest:
                creds, host = rest.rsplit("@", 1)
                if ":" in creds:
                    user, _ = creds.split(":", 1)
                    return f"{proto}://{user}:***@{host}"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
