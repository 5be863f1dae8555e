from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import (
    CustomBaseError,
    GatewayUnavailable,
    TransactionRejected,
    WalletNotConnected,
)

ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc))
    return JSONResponse(status_code=error.status_code, content={'detail': error.message})


async def gateway_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    # Clients render a "try again" state; nothing was cached or written
    error = exc if isinstance(exc, GatewayUnavailable) else GatewayUnavailable()
    return JSONResponse(
        status_code=error.status_code,
        content={'detail': error.message, 'retryable': True},
    )


async def transaction_rejected_handler(request: Request, exc: Exception) -> JSONResponse:
    reason = exc.reason if isinstance(exc, TransactionRejected) else str(exc)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={'detail': reason, 'reason': reason},
    )


async def wallet_not_connected_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, WalletNotConnected) else WalletNotConnected()
    return JSONResponse(
        status_code=error.status_code,
        content={'detail': error.message, 'action': 'connect_wallet'},
    )


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={'detail': str(exc)})


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': error.errors()},
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'detail': 'Internal server error'},
    )


# Starlette resolves handlers by MRO, so subclasses win over CustomBaseError
EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    GatewayUnavailable: gateway_unavailable_handler,
    TransactionRejected: transaction_rejected_handler,
    WalletNotConnected: wallet_not_connected_handler,
    CustomBaseError: custom_error_handler,
    ValueError: value_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: general_500_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
