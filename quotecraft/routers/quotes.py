from fastapi import APIRouter, Depends

from .. import quote_service, schemas
from ..config import Settings, settings
from ..lifecycle import status_table
from ..money import format_money
from ..pricing_engine import compute_summary

router = APIRouter(prefix="/quotes", tags=["quotes"])


def get_settings() -> Settings:
    return settings


# --- Endpoints ---
# Stateless: the caller sends the whole quote and stores whatever comes back.

@router.post("/summary")
def quote_summary(quote: schemas.QuoteIn, cfg: Settings = Depends(get_settings)):
    return _summary_dict(compute_summary(quote.to_domain()), cfg)


@router.post("/new")
def new_quote(data: schemas.QuoteCreate, cfg: Settings = Depends(get_settings)):
    quote = quote_service.create_quote(
        data.id,
        tasks=[t.to_domain() for t in data.tasks],
        complexity_pct=data.complexity_pct,
        markup_pct=data.markup_pct,
        tax_pct=data.tax_pct,
        title=data.title,
        settings=cfg,
    )
    return _quote_response(quote, cfg)


@router.post("/transition")
def transition_quote(req: schemas.TransitionRequest):
    quote = quote_service.change_status(req.quote.to_domain(), req.status)
    return schemas.quote_to_dict(quote)


@router.post("/update")
def update_quote(req: schemas.UpdateRequest, cfg: Settings = Depends(get_settings)):
    changes = req.changes
    quote = quote_service.update_quote(
        req.quote.to_domain(),
        status=changes.status,
        complexity_pct=changes.complexity_pct,
        markup_pct=changes.markup_pct,
        tax_pct=changes.tax_pct,
        tasks=None if changes.tasks is None else [t.to_domain() for t in changes.tasks],
    )
    return _quote_response(quote, cfg)


@router.get("/statuses")
def list_statuses():
    return status_table()


def _summary_dict(summary, cfg: Settings) -> dict:
    data = summary.as_dict()
    data["grand_total_display"] = format_money(summary.grand_total, cfg.CURRENCY_SYMBOL)
    return data


def _quote_response(quote, cfg: Settings) -> dict:
    return {
        "quote": schemas.quote_to_dict(quote),
        "summary": _summary_dict(compute_summary(quote), cfg),
    }
