"""FastAPI app serving TOTP codes for caller-supplied secrets."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from . import __version__
from .config import get_settings
from .engine import compute
from .errors import MalformedRequest, MissingInput, TotpApiError
from .models import HealthResponse, TotpRequest, TotpResponse

ROBOTS_TXT = "User-agent: *\nDisallow: /\n"
ROBOTS_TAG = "noindex, nofollow, noarchive, nosnippet, noimageindex"

logger = logging.getLogger(__name__)

app = FastAPI(title="TOTP API", version=__version__)


def get_clock() -> Callable[[], float]:
    """Clock used to timestamp requests; overridden in tests."""
    return time.time


@app.middleware("http")
async def allow_any_origin(request: Request, call_next: Any) -> Any:
    response = await call_next(request)
    response.headers["Access-Control-Allow-Origin"] = (
        get_settings().cors_allow_origin
    )
    return response


@app.exception_handler(TotpApiError)
async def totp_error_handler(request: Request, exc: TotpApiError) -> JSONResponse:
    logger.info(
        "totp.request.rejected",
        extra={
            "method": request.method,
            "error_type": type(exc).__name__,
            "status_code": exc.status_code,
        },
    )
    body = TotpResponse(success=False, error=exc.message)
    return JSONResponse(
        status_code=exc.status_code, content=body.model_dump(exclude_none=True)
    )


def _generate(secret: str, clock: Callable[[], float], method: str) -> TotpResponse:
    if not secret:
        raise MissingInput()
    result = compute(secret, clock())
    logger.info(
        "totp.request.ok",
        extra={"method": method, "remaining": result.remaining},
    )
    return TotpResponse(success=True, code=result.code, remaining=result.remaining)


@app.get(
    "/api/totp", response_model=TotpResponse, response_model_exclude_none=True
)
async def totp_from_query(
    secret: str = "", clock: Callable[[], float] = Depends(get_clock)
) -> TotpResponse:
    """Return the current code for the ``secret`` query parameter."""
    return _generate(secret, clock, "GET")


@app.post(
    "/api/totp", response_model=TotpResponse, response_model_exclude_none=True
)
async def totp_from_body(
    request: Request, clock: Callable[[], float] = Depends(get_clock)
) -> TotpResponse:
    """Return the current code for the ``secret`` field of a JSON body.

    The body is parsed by hand so that any decoding problem is reported with
    the API's own envelope instead of FastAPI's validation error format.
    """
    raw_body: bytes = await request.body()
    try:
        data = json.loads(raw_body)
        payload = TotpRequest.model_validate({} if data is None else data)
    except (ValueError, ValidationError) as exc:
        raise MalformedRequest() from exc
    return _generate(payload.secret, clock, "POST")


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()


@app.get("/robots.txt", response_class=PlainTextResponse)
async def robots() -> PlainTextResponse:
    """Ask crawlers to stay away from every path."""
    return PlainTextResponse(ROBOTS_TXT, headers={"X-Robots-Tag": ROBOTS_TAG})
