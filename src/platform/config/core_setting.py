from pathlib import Path
from typing import List

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'CineChain'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # Ledger (EVM JSON-RPC)
    LEDGER_RPC_URL: str = 'https://ethereum-sepolia-rpc.publicnode.com'
    LEDGER_CONTRACT_ADDRESS: str = '0x39709544a252Ef467282e57Ea74d06d724d8Dc09'
    LEDGER_CHAIN_ID: int = 11155111  # Sepolia
    LEDGER_REQUEST_TIMEOUT: float = 15.0  # seconds
    LEDGER_RECEIPT_TIMEOUT: float = 180.0  # seconds to wait for a refund to be mined
    LEDGER_FAN_OUT_LIMIT: int = 16  # max concurrent per-id reads during enumeration

    # Wallet (empty key means no wallet connected)
    WALLET_PRIVATE_KEY: SecretStr = SecretStr('')

    # Catalog service (TMDB compatible)
    CATALOG_API_BASE_URL: str = 'https://api.themoviedb.org/3'
    CATALOG_API_KEY: SecretStr = SecretStr('')
    CATALOG_IMAGE_BASE_URL: str = 'https://image.tmdb.org/t/p/w500'
    CATALOG_BACKDROP_BASE_URL: str = 'https://image.tmdb.org/t/p/w780'
    CATALOG_PROFILE_BASE_URL: str = 'https://image.tmdb.org/t/p/w185'
    CATALOG_REQUEST_TIMEOUT: float = 10.0  # seconds

    # Kvrocks Configuration (Redis protocol + Kvrocks storage)
    KVROCKS_HOST: str = 'localhost'
    KVROCKS_PORT: int = 6666
    KVROCKS_DB: int = 0
    KVROCKS_PASSWORD: str = ''
    KVROCKS_KEY_PREFIX: str = ''
    REDIS_DECODE_RESPONSES: bool = True

    # Kvrocks Connection Pool Configuration
    KVROCKS_POOL_MAX_CONNECTIONS: int = 20  # Max connections in pool
    KVROCKS_POOL_SOCKET_TIMEOUT: int = 5  # Socket read/write timeout (seconds)
    KVROCKS_POOL_SOCKET_CONNECT_TIMEOUT: int = 5  # Connection timeout (seconds)
    KVROCKS_POOL_SOCKET_KEEPALIVE: bool = True  # Enable TCP keepalive
    KVROCKS_POOL_HEALTH_CHECK_INTERVAL: int = 30  # Health check interval (seconds)

    # Home read model
    READ_MODEL_CACHE_KEY: str = 'cineCryptoCache_v1'
    READ_MODEL_CACHE_TTL_SECONDS: int = 3600

    # Display
    SEATS_PER_ROW: int = 10  # canonical seat layout shared by seatmap and tickets
    DISPLAY_TIMEZONE: str = 'Asia/Jakarta'


settings = Settings()  # type: ignore
