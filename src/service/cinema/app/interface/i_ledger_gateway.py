"""
Ledger Gateway Interface

Typed access to the cinema contract. Reads are idempotent view calls; writes
are signed state-changing transactions that attach an exact wei value.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.cinema.app.interface.i_wallet_signer import IWalletSigner
from src.service.cinema.domain.entity.movie_entity import OnChainMovie
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.entity.ticket_entity import Ticket


class ILedgerGateway(ABC):
    """
    Errors:
        GatewayUnavailable: RPC transport failure on any call
        TransactionRejected: revert on a write, carrying the revert reason verbatim
    """

    # Reads

    @abstractmethod
    async def next_movie_id(self) -> int:
        pass

    @abstractmethod
    async def movie_by_id(self, movie_id: int) -> Optional[OnChainMovie]:
        """None when the id holds no record"""
        pass

    @abstractmethod
    async def next_showtime_id(self) -> int:
        pass

    @abstractmethod
    async def showtime_by_id(self, showtime_id: int) -> Optional[Showtime]:
        """None when the id holds no record (movie id zero)"""
        pass

    @abstractmethod
    async def seat_bitmap(self, showtime_id: int) -> List[int]:
        pass

    @abstractmethod
    async def ticket_ids_by_owner(self, owner: str) -> List[int]:
        pass

    @abstractmethod
    async def ticket_by_id(self, ticket_id: int) -> Ticket:
        pass

    # Enumeration (ids 1..next-1, concurrent, in id order, sparse records skipped)

    @abstractmethod
    async def list_movies(self) -> List[OnChainMovie]:
        pass

    @abstractmethod
    async def list_showtimes(self) -> List[Showtime]:
        pass

    # Writes (return the transaction hash once the node accepted it)

    @abstractmethod
    async def buy_seat(
        self, *, signer: IWalletSigner, showtime_id: int, seat_id: int, value_wei: int
    ) -> str:
        pass

    @abstractmethod
    async def buy_seats(
        self, *, signer: IWalletSigner, showtime_id: int, seat_ids: List[int], value_wei: int
    ) -> str:
        pass

    @abstractmethod
    async def refund_ticket(self, *, signer: IWalletSigner, ticket_id: int) -> str:
        pass

    @abstractmethod
    async def wait_for_confirmation(self, tx_hash: str) -> None:
        """Block until mined. Raises TransactionRejected when the receipt reports a revert."""
        pass
