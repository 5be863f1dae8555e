"""
Production FastAPI Application

Wires DI, opens the ledger RPC provider and the Kvrocks pool, and closes
them again on shutdown.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.ledger.web3_client import ledger_client
from src.platform.logging.loguru_io import Logger
from src.platform.state.kvrocks_client import kvrocks_client


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🚀 [CineChain] Starting up...')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [CineChain] Dependency injection wired')

    await ledger_client.initialize()
    Logger.base.info('⛓️ [CineChain] Ledger RPC provider ready')

    # Kvrocks holds the home read-model cache (fail-fast)
    await kvrocks_client.initialize()
    Logger.base.info('📡 [CineChain] Kvrocks initialized')

    if container.wallet_signer_provider().get_signer() is None:
        Logger.base.warning('👛 [CineChain] No wallet configured, purchases and refunds are disabled')

    Logger.base.info('✅ [CineChain] Ready to serve requests')

    yield

    Logger.base.info('🛑 [CineChain] Shutting down...')

    await container.catalog_gateway().aclose()
    Logger.base.info('🎞️ [CineChain] Catalog HTTP client closed')

    await kvrocks_client.disconnect()
    Logger.base.info('📡 [CineChain] Kvrocks disconnected')

    await ledger_client.disconnect()
    Logger.base.info('⛓️ [CineChain] Ledger RPC provider closed')

    container.unwire()

    Logger.base.info('👋 [CineChain] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
