from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging

from .config import settings
from .errors import (
    InvalidInput,
    InvalidTransition,
    MaterialNotFound,
    QuoteError,
    QuoteLocked,
    TaskNotFound,
)
from .routers import quotes

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("quotecraft")

# Each error type keeps its own status so clients can tell them apart
ERROR_STATUS = {
    InvalidInput: 422,
    InvalidTransition: 409,
    QuoteLocked: 423,
    TaskNotFound: 404,
    MaterialNotFound: 404,
}

app = FastAPI(
    title="Quotecraft",
    description="Construction quote pricing and status lifecycle",
    version="1.0.0",
)

app.include_router(quotes.router, prefix="/api")


@app.exception_handler(QuoteError)
def handle_quote_error(request: Request, exc: QuoteError):
    status_code = ERROR_STATUS.get(type(exc), 400)
    if isinstance(exc, InvalidInput):
        logger.warning("Rejected input on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.APP_NAME}
