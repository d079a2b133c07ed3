from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Solana RPC (read-only: getAccountInfo, getSlot, getBlockTime)
    solana_rpc_url: str = "https://api.mainnet-beta.solana.com"
    rpc_max_rps: float = Field(default=5.0, gt=0)  # public endpoint limit
    rpc_timeout_sec: float = 15.0
    rpc_commitment: str = "confirmed"

    # Quoting
    default_slippage_bps: int = Field(default=100, ge=0, le=10_000)  # 1%

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False


settings = Settings()
