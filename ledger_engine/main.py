"""
Double-Entry Ledger — FastAPI Application.

This is the entry point for the application.
All routers are registered here.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ledger_engine.config import get_settings
from ledger_engine.logging_config import configure_logging, get_logger
from ledger_engine.api.accounts import router as accounts_router
from ledger_engine.api.transactions import router as transactions_router
from ledger_engine.api.reports import router as reports_router

settings = get_settings()
configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)

logger = get_logger("main")

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Double-entry ledger with running balances and financial reports",
)


@app.exception_handler(RequestValidationError)
async def invalid_input_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and parameters are client errors of kind InvalidInput."""
    logger.info("invalid input", extra={"path": request.url.path})
    return JSONResponse(
        status_code=400,
        content={
            "detail": {
                "kind": "InvalidInput",
                "message": "Request body or parameters are malformed",
                "errors": jsonable_errors(exc),
            }
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


# Register routers
app.include_router(accounts_router)
app.include_router(transactions_router)
app.include_router(reports_router)
