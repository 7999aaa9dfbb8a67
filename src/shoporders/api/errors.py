"""Exception handlers rendering rejections in the error payload clients match on.

    {"statusCode": 404, "error": "Not Found",
     "message": [{"messages": [{"id": "order.place.error.order-not-found", ...}]}]}
"""

from http import HTTPStatus

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from shoporders.shared.errors import ShopOrdersError

logger = structlog.get_logger(__name__)


def error_response(exc: ShopOrdersError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "statusCode": exc.status_code,
            "error": HTTPStatus(exc.status_code).phrase,
            "message": exc.to_payload(),
        },
    )


async def shop_orders_error_handler(request: Request, exc: ShopOrdersError) -> JSONResponse:
    logger.warning(
        "Request rejected",
        error_id=exc.error_id,
        status_code=exc.status_code,
        path=request.url.path,
        reason=exc.message,
    )
    return error_response(exc)


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain rejection handler alongside protean's own handlers."""
    register_exception_handlers(app)
    app.add_exception_handler(ShopOrdersError, shop_orders_error_handler)
