"""
Quote commands - the layer that composes pricing and the lifecycle.

Every command takes a Quote and returns a new one; nothing is mutated and
nothing is stored. Financial edits (tasks, materials, percentages) are
checked against the quote's current status before anything else, so a
locked quote stays locked even when the same call also asks for a status
change.
"""

import logging
from dataclasses import replace
from typing import Optional

from .config import Settings, settings as default_settings
from .errors import InvalidInput, MaterialNotFound, TaskNotFound
from .lifecycle import INITIAL_STATUS, ensure_editable, require_transition
from .pricing_engine import compute_summary
from .quote import LineItem, MaterialMode, Quote, QuoteSummary, Task

logger = logging.getLogger(__name__)


def create_quote(quote_id: str, tasks=(), complexity_pct=None, markup_pct=None,
                 tax_pct=None, title: str = "",
                 settings: Optional[Settings] = None) -> Quote:
    """New DRAFT quote; missing percentages come from the given settings."""
    cfg = settings or default_settings
    return Quote(
        id=quote_id,
        status=INITIAL_STATUS,
        tasks=tuple(tasks),
        complexity_pct=cfg.DEFAULT_COMPLEXITY_PCT if complexity_pct is None else complexity_pct,
        markup_pct=cfg.DEFAULT_MARKUP_PCT if markup_pct is None else markup_pct,
        tax_pct=cfg.DEFAULT_TAX_PCT if tax_pct is None else tax_pct,
        title=title,
    )


def new_task(task_id: str, price=None, description: str = "", materials=(),
             settings: Optional[Settings] = None) -> Task:
    cfg = settings or default_settings
    return Task(
        id=task_id,
        price=cfg.DEFAULT_TASK_PRICE if price is None else price,
        description=description,
        materials=tuple(materials),
    )


def new_material(name: str = "", quantity=1, unit_price=None, product_id=None,
                 settings: Optional[Settings] = None) -> LineItem:
    cfg = settings or default_settings
    return LineItem(
        quantity=quantity,
        unit_price=cfg.DEFAULT_MATERIAL_PRICE if unit_price is None else unit_price,
        name=name,
        product_id=product_id,
    )


def summarize(quote: Quote) -> QuoteSummary:
    return compute_summary(quote)


# --- Status ---

def change_status(quote: Quote, requested) -> Quote:
    new_status = require_transition(quote.status, requested)
    logger.info("Quote %s: %s -> %s", quote.id, quote.status.value, new_status.value)
    return replace(quote, status=new_status)


def update_quote(quote: Quote, status=None, complexity_pct=None, markup_pct=None,
                 tax_pct=None, tasks=None) -> Quote:
    """
    Apply a combined edit.

    The financial part is checked against the current status first; the
    status part is applied last.
    """
    financial = {
        "complexity_pct": complexity_pct,
        "markup_pct": markup_pct,
        "tax_pct": tax_pct,
        "tasks": None if tasks is None else tuple(tasks),
    }
    financial = {k: v for k, v in financial.items() if v is not None}

    updated = quote
    if financial:
        ensure_editable(quote.status, field=", ".join(sorted(financial)))
        updated = replace(updated, **financial)
    if status is not None:
        updated = change_status(updated, status)
    return updated


# --- Tasks ---

def add_task(quote: Quote, task: Task) -> Quote:
    ensure_editable(quote.status, field="tasks")
    return replace(quote, tasks=quote.tasks + (task,))


def update_task(quote: Quote, task_id, **changes) -> Quote:
    ensure_editable(quote.status, field="tasks")
    index = _task_index(quote, task_id)
    tasks = list(quote.tasks)
    tasks[index] = replace(tasks[index], **changes)
    return replace(quote, tasks=tuple(tasks))


def remove_task(quote: Quote, task_id) -> Quote:
    ensure_editable(quote.status, field="tasks")
    index = _task_index(quote, task_id)
    return replace(quote, tasks=quote.tasks[:index] + quote.tasks[index + 1:])


def set_lump_sum(quote: Quote, task_id, amount) -> Quote:
    """Switch a task to a single materials estimate."""
    return update_task(quote, task_id, material_mode=MaterialMode.LUMPSUM,
                       lump_sum_materials=amount)


def set_itemized(quote: Quote, task_id) -> Quote:
    return update_task(quote, task_id, material_mode=MaterialMode.ITEMIZED,
                       lump_sum_materials=None)


# --- Materials ---

def add_material(quote: Quote, task_id, item: LineItem) -> Quote:
    """Append an itemized row. Lump-sum tasks take no new rows."""
    ensure_editable(quote.status, field="materials")
    index = _task_index(quote, task_id)
    task = quote.tasks[index]
    if task.material_mode != MaterialMode.ITEMIZED:
        logger.warning("Rejected material for %s task %s", task.material_mode, task.id)
        raise InvalidInput("material_mode", task.material_mode,
                           reason="cannot take materials on a lumpsum task")
    return _replace_task(quote, index, replace(task, materials=task.materials + (item,)))


def update_material(quote: Quote, task_id, index: int, **changes) -> Quote:
    ensure_editable(quote.status, field="materials")
    task_index = _task_index(quote, task_id)
    task = quote.tasks[task_index]
    _check_material_index(task, index)
    materials = list(task.materials)
    materials[index] = replace(materials[index], **changes)
    return _replace_task(quote, task_index, replace(task, materials=tuple(materials)))


def remove_material(quote: Quote, task_id, index: int) -> Quote:
    ensure_editable(quote.status, field="materials")
    task_index = _task_index(quote, task_id)
    task = quote.tasks[task_index]
    _check_material_index(task, index)
    materials = task.materials[:index] + task.materials[index + 1:]
    return _replace_task(quote, task_index, replace(task, materials=materials))


def _task_index(quote: Quote, task_id) -> int:
    for i, task in enumerate(quote.tasks):
        if task.id == task_id:
            return i
    raise TaskNotFound(task_id)


def _check_material_index(task: Task, index: int) -> None:
    if not 0 <= index < len(task.materials):
        raise MaterialNotFound(task.id, index)


def _replace_task(quote: Quote, index: int, task: Task) -> Quote:
    tasks = list(quote.tasks)
    tasks[index] = task
    return replace(quote, tasks=tuple(tasks))
