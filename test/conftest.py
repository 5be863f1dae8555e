"""
Test Configuration and Fixtures

Environment setup MUST happen before any application import: settings, the
Kvrocks key prefix and the log sink are all read at import time.
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    os.environ['KVROCKS_KEY_PREFIX'] = 'test_' if worker_id == 'master' else f'test_{worker_id}_'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Unit tests never talk to a real wallet or catalog
    os.environ['WALLET_PRIVATE_KEY'] = ''
    os.environ.setdefault('CATALOG_API_KEY', 'test-key')


_early_setup_test_environment()

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402

from src.service.cinema.app.interface.i_catalog_gateway import ICatalogGateway  # noqa: E402
from src.service.cinema.app.interface.i_ledger_gateway import ILedgerGateway  # noqa: E402
from src.service.cinema.app.interface.i_wallet_signer import IWalletSigner  # noqa: E402


@pytest.fixture
def ledger_gateway() -> AsyncMock:
    """Ledger gateway double; every method is an AsyncMock"""
    return AsyncMock(spec=ILedgerGateway)


@pytest.fixture
def catalog_gateway() -> AsyncMock:
    """Catalog gateway double; every method is an AsyncMock"""
    gateway = AsyncMock(spec=ICatalogGateway)
    gateway.search_by_title.return_value = None
    gateway.fetch_by_id.return_value = None
    gateway.list_popular.return_value = []
    gateway.list_upcoming.return_value = []
    gateway.list_genres.return_value = []
    return gateway


@pytest.fixture
def wallet_signer() -> MagicMock:
    signer = MagicMock(spec=IWalletSigner)
    signer.address = '0x00000000000000000000000000000000000000A1'
    signer.sign_transaction.return_value = b'\x01signed'
    return signer

