from typing import Optional

from aiohttp import ClientTimeout
from web3 import AsyncHTTPProvider, AsyncWeb3

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class LedgerClient:
    """
    Async JSON-RPC connection to the ledger node.

    Usage:
        await ledger_client.initialize()  # In startup
        w3 = ledger_client.get_client()  # In gateways
    """

    def __init__(self) -> None:
        self._client: Optional[AsyncWeb3] = None

    async def initialize(self) -> AsyncWeb3:
        """Create the provider (idempotent). Connectivity is not required at startup."""
        if self._client is not None:
            return self._client

        provider = AsyncHTTPProvider(
            settings.LEDGER_RPC_URL,
            request_kwargs={'timeout': ClientTimeout(total=settings.LEDGER_REQUEST_TIMEOUT)},
        )
        self._client = AsyncWeb3(provider)

        # The node being down only degrades reads; it must not block the API from booting
        if await self._client.is_connected():
            Logger.base.info(f'⛓️  Ledger RPC reachable at {settings.LEDGER_RPC_URL}')
        else:
            Logger.base.warning(f'⚠️  Ledger RPC not reachable at {settings.LEDGER_RPC_URL}')
        return self._client

    def get_client(self) -> AsyncWeb3:
        if self._client is None:
            raise RuntimeError(
                'Ledger client not initialized. '
                'Call await ledger_client.initialize() during startup.'
            )
        return self._client

    async def disconnect(self) -> None:
        if self._client is not None:
            await self._client.provider.disconnect()
            self._client = None


# Global singleton
ledger_client = LedgerClient()
