"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.service.cinema.app.service.identity_reconciler import IdentityReconciler
from src.service.cinema.app.service.in_flight_guard import InFlightGuard
from src.service.cinema.app.service.pending_scan_registry import PendingScanRegistry
from src.service.cinema.app.service.showtime_aggregator import ShowtimeAggregator
from src.service.cinema.driven_adapter.catalog.catalog_gateway_impl import CatalogGatewayImpl
from src.service.cinema.driven_adapter.ledger.ledger_gateway_impl import LedgerGatewayImpl
from src.service.cinema.driven_adapter.ledger.local_wallet_signer_impl import (
    LocalWalletSignerProvider,
)
from src.service.cinema.driven_adapter.state.read_model_cache_store_impl import (
    ReadModelCacheStoreImpl,
)


class Container(containers.DeclarativeContainer):
    # Gateways (own the RPC connection, the HTTP client and the catalog memo)
    ledger_gateway = providers.Singleton(LedgerGatewayImpl)
    catalog_gateway = providers.Singleton(CatalogGatewayImpl)
    wallet_signer_provider = providers.Singleton(LocalWalletSignerProvider)

    # State
    read_model_cache_store = providers.Singleton(ReadModelCacheStoreImpl)
    pending_scan_registry = providers.Singleton(PendingScanRegistry)
    in_flight_guard = providers.Singleton(InFlightGuard)

    # Application services
    identity_reconciler = providers.Singleton(
        IdentityReconciler,
        ledger_gateway=ledger_gateway,
        catalog_gateway=catalog_gateway,
    )
    showtime_aggregator = providers.Singleton(
        ShowtimeAggregator,
        ledger_gateway=ledger_gateway,
    )


container = Container()
