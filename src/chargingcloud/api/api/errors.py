# chargingcloud/api/api/errors.py
"""
Exception handlers: core errors and request validation errors become
``{"description": "..."}`` responses.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from chargingcloud.api.core.errors import ChargingCloudError

logger = logging.getLogger(__name__)


def _describe(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request!"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"Invalid request: {location}: {first.get('msg', 'invalid value')}"


async def handle_charging_cloud_error(request: Request, exc: ChargingCloudError) -> JSONResponse:
    logger.debug("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.description)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(status_code=400, content={"description": _describe(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ChargingCloudError, handle_charging_cloud_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
