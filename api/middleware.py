"""
Global middleware and request-body decoding.
"""

from __future__ import annotations

import logging
import time
from typing import Type, TypeVar

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from config.settings import config
from utils.errors import ValidationError

logger = logging.getLogger(__name__)

RequestModel = TypeVar("RequestModel", bound=BaseModel)


def register_middleware(app: FastAPI) -> None:
    """Attach app-level middleware: CORS headers, preflight, timing."""

    @app.middleware("http")
    async def cors_and_timer(request: Request, call_next):
        start = time.perf_counter()
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.exception("Unhandled error on %s %s", request.method, request.url.path)
                response = JSONResponse(
                    status_code=500,
                    content={"error": f"internal server error: {exc}"},
                )
        response.headers.update(config.cors_headers())
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.debug("%s %s — %d in %.3fs", request.method, request.url.path, response.status_code, elapsed)
        return response


async def decode_body(request: Request, model: Type[RequestModel]) -> RequestModel:
    """
    Parse the JSON request body into *model*.

    A JSON ``null`` body decodes to the model with every field defaulted.

    Runs inside the route, after authentication and authorization, so a
    caller without a valid token never learns whether its body was valid.
    """
    try:
        payload = await request.json()
        if payload is None:
            payload = {}
        return model.model_validate(payload)
    except (ValueError, SchemaError) as exc:
        logger.debug("Rejected request body for %s: %s", model.__name__, exc)
        raise ValidationError("invalid request format") from exc
