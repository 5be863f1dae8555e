from typing import List, Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.cinema.domain.enum.transaction_state import (
    ConfirmationPolicy,
    TransactionKind,
    TransactionState,
)


_ALLOWED_TRANSITIONS: dict[TransactionState, frozenset[TransactionState]] = {
    TransactionState.IDLE: frozenset({TransactionState.ACQUIRING_SIGNER}),
    TransactionState.ACQUIRING_SIGNER: frozenset({TransactionState.SUBMITTING}),
    TransactionState.SUBMITTING: frozenset(
        {TransactionState.SUBMITTED, TransactionState.CONFIRMED}
    ),
    TransactionState.SUBMITTED: frozenset({TransactionState.DONE}),
    TransactionState.CONFIRMED: frozenset({TransactionState.DONE}),
    TransactionState.DONE: frozenset(),
    TransactionState.FAILED: frozenset(),
}


@attrs.define
class TransactionAttempt:
    """
    One purchase or refund attempt.

    Idle -> AcquiringSigner -> Submitting -> Submitted | Confirmed -> Done,
    or -> Failed from any non-terminal state.
    """

    kind: TransactionKind
    target: str
    policy: ConfirmationPolicy
    value_wei: int = 0
    state: TransactionState = TransactionState.IDLE
    tx_hash: Optional[str] = None
    failure_reason: Optional[str] = None
    history: List[TransactionState] = attrs.field(factory=lambda: [TransactionState.IDLE])

    def advance(self, next_state: TransactionState) -> None:
        if next_state is TransactionState.FAILED:
            raise DomainError('Use fail() to move an attempt to FAILED')
        if next_state not in _ALLOWED_TRANSITIONS[self.state]:
            raise DomainError(
                f'Invalid transaction transition {self.state.value} -> {next_state.value}'
            )
        self.state = next_state
        self.history.append(next_state)

    def fail(self, reason: str) -> None:
        if self.state.is_terminal:
            raise DomainError(f'Transaction already finished as {self.state.value}')
        self.state = TransactionState.FAILED
        self.failure_reason = reason
        self.history.append(TransactionState.FAILED)

    @property
    def is_confirmed(self) -> bool:
        return TransactionState.CONFIRMED in self.history
