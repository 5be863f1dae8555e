"""Application layer interfaces (Ports)"""

from src.service.cinema.app.interface.i_catalog_gateway import ICatalogGateway
from src.service.cinema.app.interface.i_ledger_gateway import ILedgerGateway
from src.service.cinema.app.interface.i_read_model_cache_store import IReadModelCacheStore
from src.service.cinema.app.interface.i_wallet_signer import IWalletSigner, IWalletSignerProvider

__all__ = [
    'ICatalogGateway',
    'ILedgerGateway',
    'IReadModelCacheStore',
    'IWalletSigner',
    'IWalletSignerProvider',
]
