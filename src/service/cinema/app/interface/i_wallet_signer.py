from abc import ABC, abstractmethod
from typing import Any, Optional


class IWalletSigner(ABC):
    """Credential of the connected wallet, able to authorize a ledger write."""

    @property
    @abstractmethod
    def address(self) -> str:
        pass

    @abstractmethod
    def sign_transaction(self, transaction: dict[str, Any]) -> bytes:
        """Return the raw signed transaction, ready to broadcast"""
        pass


class IWalletSignerProvider(ABC):
    @abstractmethod
    def get_signer(self) -> Optional[IWalletSigner]:
        """Synchronous and network-free; None means no wallet is connected"""
        pass
