from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_CONFIG = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


class AppSettings(BaseSettings):
    """General application settings."""

    model_config = _ENV_CONFIG

    name: str = Field("Contract ABI Resolver", validation_alias="APP_NAME")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")


class LoaderSettings(BaseSettings):
    """Construction-time options for the ABI loaders and signature lookups."""

    model_config = _ENV_CONFIG

    etherscan_api_key: Optional[str] = Field(default=None, validation_alias="ETHERSCAN_API_KEY")
    etherscan_base_url: Optional[str] = Field(
        default=None,
        validation_alias="ETHERSCAN_BASE_URL",
        description="Override for Etherscan forks, e.g. https://api.arbiscan.io/api",
    )
    etherscan_chain_id: Optional[int] = Field(default=None, validation_alias="ETHERSCAN_CHAIN_ID")
    sourcify_chain_id: Optional[int] = Field(default=None, validation_alias="SOURCIFY_CHAIN_ID")
    blockscout_api_key: Optional[str] = Field(default=None, validation_alias="BLOCKSCOUT_API_KEY")
    blockscout_base_url: Optional[str] = Field(default=None, validation_alias="BLOCKSCOUT_BASE_URL")
    # Seconds, applied to the shared HTTP session created by the CLI
    request_timeout: int = Field(default=30, gt=0, validation_alias="REQUEST_TIMEOUT")


class ChainSettings(BaseSettings):
    """Ethereum node used for storage reads when resolving proxies."""

    model_config = _ENV_CONFIG

    provider_uri: str = Field(
        default="https://eth.llamarpc.com",
        validation_alias="PROVIDER_URI",
        description="Ethereum Node JSON-RPC URL",
    )
    rpc_timeout: int = Field(default=60, gt=0, validation_alias="RPC_TIMEOUT")


class Settings(BaseSettings):
    """Composes all sub-settings; each one reads its own variables from the environment / .env."""

    model_config = _ENV_CONFIG

    app: AppSettings = Field(default_factory=AppSettings)
    loaders: LoaderSettings = Field(default_factory=LoaderSettings)
    chain: ChainSettings = Field(default_factory=ChainSettings)


# Singleton instance
settings = Settings()
