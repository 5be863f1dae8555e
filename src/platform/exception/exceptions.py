class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class GatewayUnavailable(CustomBaseError):
    """Ledger RPC or catalog HTTP transport failure. Retryable by the user."""

    def __init__(self, message: str = 'Service temporarily unavailable, please try again') -> None:
        super().__init__(message, 503)


class WalletNotConnected(CustomBaseError):
    def __init__(self, message: str = 'Connect a wallet to continue') -> None:
        super().__init__(message, 401)


class TransactionRejected(CustomBaseError):
    """On-chain revert. `reason` is the chain-provided revert string, untouched."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason, 422)


class TransactionFailed(CustomBaseError):
    def __init__(self, message: str = 'Transaction failed, please try again') -> None:
        super().__init__(message, 502)


class TransactionInProgress(ConflictError):
    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f'A transaction for {target} is already in progress')
