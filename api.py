"""
Money Parser — FastAPI Server
=============================

RESTful API for extracting amounts and currencies from free text.

Endpoints:
    POST /parse             Parse one monetary expression
    POST /parse-all         Find every monetary expression in a text
    GET  /health            Health check / readiness probe

Environment:
    MONEY_PARSER_DEFAULT_CURRENCY   Fallback currency when a request omits one
    MONEY_PARSER_LOG_LEVEL          Logging level (default INFO)

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production

Docs:
    http://localhost:8000/docs             # Swagger UI (auto-generated)
    http://localhost:8000/redoc            # ReDoc (alternative)
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from money_parser import __version__
from money_parser.exceptions import MoneyError, MoneyParseError
from money_parser.extractor import parse_all
from money_parser.models import ParseContext, SpanResult
from money_parser.name_index import get_name_index
from money_parser.pipeline import parse_money
from money_parser.registry import CurrencyRegistry, get_registry

# ─── Load .env ───────────────────────────────────────────────────────

load_dotenv()

logging.basicConfig(
    level=os.getenv("MONEY_PARSER_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ─── Application Lifespan (pre-warm registry + name index) ──────────

_registry: CurrencyRegistry | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the currency registry and build the name index on startup."""
    global _registry  # noqa: PLW0603
    _registry = get_registry()
    get_name_index()
    logger.info("Money Parser API ready (%d currencies)", len(_registry))
    yield
    _registry = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="Money Parser API",
    description=(
        "Extract monetary amounts and ISO-4217 currencies from natural-language text. "
        "Handles symbols, codes, currency names, worded numbers, fractions, slang, "
        "regional number formats and negative notations."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class ParseRequest(BaseModel):
    """Request body for the /parse endpoint."""

    text: str = Field(
        ...,
        description="A single monetary expression.",
        json_schema_extra={"example": "a dollar and 23 cents"},
    )
    default_currency: Optional[str] = Field(
        default=None,
        description="ISO-4217 code applied when the text names no currency.",
        json_schema_extra={"example": "EUR"},
    )


class ParseAllRequest(BaseModel):
    """Request body for the /parse-all endpoint."""

    text: str = Field(
        ...,
        description="Free text that may contain several monetary expressions.",
        json_schema_extra={"example": "I have $100 and he has €50"},
    )


class ParseResponse(ParseContext):
    """API-facing parse result (inherits all fields from ParseContext)."""

    model_config = {"json_schema_extra": {"example": {
        "original": "a dollar and 23 cents",
        "currency": "USD",
        "amount": 1.23,
        "currency_was_default": None,
        "is_negative": None,
        "matches": {"currency_source": "name", "parser": "contextual_phrase", "minor_units": 123},
    }}}


class SpanOut(SpanResult):
    """API-facing span (inherits all fields from SpanResult)."""


class ParseAllResponse(BaseModel):
    count: int
    results: list[SpanOut]


class HealthResponse(BaseModel):
    status: str
    version: str
    currencies_loaded: int


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_registry() -> CurrencyRegistry:
    if _registry is None:
        raise HTTPException(status_code=503, detail="Currency registry not initialised")
    return _registry


def _error_detail(error: MoneyError) -> dict:
    detail = {"code": error.code, "message": str(error)}
    if isinstance(error, MoneyParseError):
        detail["input"] = error.input_text
    return detail


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/parse",
    summary="Parse one monetary expression",
    tags=["Parsing"],
    responses={
        422: {"description": "Invalid default currency, invalid minor unit, or amount overflow"},
        503: {"description": "Currency registry not yet initialised"},
    },
)
def parse_expression(request: ParseRequest) -> ParseResponse:
    """Parse a single expression such as `($1,234.56)` or `quarter million dollars`.

    Returns:
    - **currency**: ISO-4217 code, or `null` if none was found
    - **amount**: numeric value (negative for `-5` / `(5)` notations)
    - **currency_was_default**: `true` when the default currency was applied
    - **matches**: which parser matched and how the currency was found
    """
    _get_registry()
    default_currency = request.default_currency or os.getenv("MONEY_PARSER_DEFAULT_CURRENCY") or None
    try:
        ctx = parse_money(request.text, default_currency)
    except MoneyError as e:
        raise HTTPException(status_code=422, detail=_error_detail(e)) from e
    return ParseResponse.model_validate(ctx.model_dump())


@app.post(
    "/parse-all",
    summary="Find every monetary expression in a text",
    tags=["Parsing"],
    responses={
        422: {"description": "An amount exceeds the safe-integer range"},
        503: {"description": "Currency registry not yet initialised"},
    },
)
def parse_all_expressions(request: ParseAllRequest) -> ParseAllResponse:
    """Return non-overlapping spans, sorted by their start offset."""
    _get_registry()
    try:
        spans = parse_all(request.text)
    except MoneyError as e:
        raise HTTPException(status_code=422, detail=_error_detail(e)) from e
    return ParseAllResponse(
        count=len(spans),
        results=[SpanOut.model_validate(span.model_dump()) for span in spans],
    )


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Currency registry not yet initialised"}},
)
def health_check() -> HealthResponse:
    """Returns service status and configuration info."""
    registry = _get_registry()
    return HealthResponse(
        status="healthy",
        version=__version__,
        currencies_loaded=len(registry),
    )
