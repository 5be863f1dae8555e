from enum import StrEnum


class TransactionState(StrEnum):
    IDLE = 'idle'
    ACQUIRING_SIGNER = 'acquiring_signer'
    SUBMITTING = 'submitting'
    SUBMITTED = 'submitted'  # accepted by the network, not yet mined
    CONFIRMED = 'confirmed'  # mined with a successful receipt
    DONE = 'done'
    FAILED = 'failed'

    @property
    def is_terminal(self) -> bool:
        return self in (TransactionState.DONE, TransactionState.FAILED)


class TransactionKind(StrEnum):
    BUY_SEAT = 'buy_seat'
    BUY_SEATS = 'buy_seats'
    REFUND = 'refund'


class ConfirmationPolicy(StrEnum):
    FIRE_AND_ACKNOWLEDGE = 'fire_and_acknowledge'
    WAIT_FOR_CONFIRMATION = 'wait_for_confirmation'
