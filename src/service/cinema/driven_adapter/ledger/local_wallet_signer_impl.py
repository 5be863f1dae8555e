"""
Wallet signer backed by an eth-account LocalAccount.

The "connected wallet" of this service is the key configured in
WALLET_PRIVATE_KEY; an empty setting means no wallet is connected.
"""

from typing import Any, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from pydantic import SecretStr

from src.platform.config.core_setting import settings
from src.service.cinema.app.interface.i_wallet_signer import IWalletSigner, IWalletSignerProvider


class LocalWalletSigner(IWalletSigner):
    def __init__(self, account: LocalAccount) -> None:
        self._account = account

    @property
    def address(self) -> str:
        return self._account.address

    def sign_transaction(self, transaction: dict[str, Any]) -> bytes:
        signed = self._account.sign_transaction(transaction)
        return bytes(signed.raw_transaction)

    def __repr__(self) -> str:
        return f'LocalWalletSigner(address={self.address})'


class LocalWalletSignerProvider(IWalletSignerProvider):
    def __init__(self, *, private_key: SecretStr = settings.WALLET_PRIVATE_KEY) -> None:
        self._private_key = private_key
        self._signer: Optional[LocalWalletSigner] = None

    def get_signer(self) -> Optional[IWalletSigner]:
        if self._signer is not None:
            return self._signer

        key = self._private_key.get_secret_value().strip()
        if not key:
            return None

        self._signer = LocalWalletSigner(Account.from_key(key))
        return self._signer
