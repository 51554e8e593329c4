"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from dataclasses import dataclass
from functools import lru_cache

from eth_utils import to_checksum_address
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from asset_indexer.config.constants import (
    BLOCKCHAIN_MAX_RETRIES,
    BLOCKCHAIN_TIMEOUT,
    INDEXER_BATCH_SIZE,
    INDEXER_POLL_INTERVAL,
)


@dataclass(frozen=True)
class ContractAddresses:
    """Checksummed addresses of the watched contracts (None = not deployed)."""

    fund_token: str | None = None
    certificate_nft: str | None = None
    kyc_registry: str | None = None
    oracle: str | None = None

    def any_configured(self) -> bool:
        """Check if at least one contract is watched."""
        return any(
            (
                self.fund_token,
                self.certificate_nft,
                self.kyc_registry,
                self.oracle,
            )
        )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str
    database_echo: bool = False

    # Blockchain RPC
    rpc_url: str
    rpc_timeout: float = Field(
        default=BLOCKCHAIN_TIMEOUT,
        gt=0,
        description="Timeout per RPC attempt in seconds",
    )
    rpc_max_retries: int = Field(
        default=BLOCKCHAIN_MAX_RETRIES,
        ge=1,
        description="Attempts per RPC call before giving up",
    )

    # Watched contracts (each optional, absence disables that scan)
    fund_token_address: str | None = None
    certificate_nft_address: str | None = None
    kyc_registry_address: str | None = None
    oracle_address: str | None = None

    # Indexer
    indexer_batch_size: int = Field(
        default=INDEXER_BATCH_SIZE,
        ge=1,
        description="Number of blocks processed per batch",
    )
    indexer_poll_interval: float = Field(
        default=INDEXER_POLL_INTERVAL,
        gt=0,
        description="Seconds between scan cycles",
    )

    # Application
    environment: str = "production"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "fund_token_address",
        "certificate_nft_address",
        "kyc_registry_address",
        "oracle_address",
        mode="before",
    )
    @classmethod
    def validate_eth_address(cls, v: str | None) -> str | None:
        """Validate Ethereum address format and normalise to checksum."""
        if v is None:
            return None
        v = str(v).strip()
        if not v:
            return None
        if not v.startswith("0x") or len(v) != 42:
            raise ValueError(
                f"Invalid Ethereum address: {v}. "
                "Must start with 0x and be 42 characters long."
            )
        try:
            int(v[2:], 16)
        except ValueError as exc:
            raise ValueError(f"Invalid Ethereum address format: {v}") from exc
        return to_checksum_address(v)

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL."""
        if not v.startswith(
            ("postgresql://", "postgresql+asyncpg://", "sqlite+aiosqlite://")
        ):
            raise ValueError(
                "DATABASE_URL must start with postgresql://, "
                "postgresql+asyncpg:// or sqlite+aiosqlite://"
            )
        # Plain postgresql:// URLs are served through the asyncpg driver
        if v.startswith("postgresql://"):
            v = "postgresql+asyncpg://" + v[len("postgresql://"):]
        return v

    @field_validator("rpc_url")
    @classmethod
    def validate_rpc_url(cls, v: str) -> str:
        """Validate RPC endpoint URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("RPC_URL must be an http(s) endpoint")
        return v

    @model_validator(mode="after")
    def validate_contracts(self) -> "Settings":
        """Refuse to start with nothing to index."""
        if not self.contract_addresses().any_configured():
            raise ValueError(
                "At least one of FUND_TOKEN_ADDRESS, CERTIFICATE_NFT_ADDRESS, "
                "KYC_REGISTRY_ADDRESS or ORACLE_ADDRESS must be set."
            )
        return self

    def contract_addresses(self) -> ContractAddresses:
        """Collect the watched contract addresses."""
        return ContractAddresses(
            fund_token=self.fund_token_address,
            certificate_nft=self.certificate_nft_address,
            kyc_registry=self.kyc_registry_address,
            oracle=self.oracle_address,
        )


@dataclass(frozen=True)
class IndexerConfig:
    """Plain configuration handed to the scan loop."""

    contracts: ContractAddresses
    batch_size: int = INDEXER_BATCH_SIZE
    poll_interval: float = INDEXER_POLL_INTERVAL

    @classmethod
    def from_settings(cls, settings: Settings) -> "IndexerConfig":
        return cls(
            contracts=settings.contract_addresses(),
            batch_size=settings.indexer_batch_size,
            poll_interval=settings.indexer_poll_interval,
        )


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
