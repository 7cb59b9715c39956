"""
Quote Pricing Engine.

Turns a quote's tasks and materials plus its three percentages into a
QuoteSummary. Pure math: no I/O, no settings lookups, no caching.

    subtotal          = round2(sum of task prices + task materials totals)
    complexity_amount = round2(subtotal * complexity_pct / 100)
    markup_base       = subtotal + complexity_amount
    markup_amount     = round2(markup_base * markup_pct / 100)
    tax_base          = markup_base + markup_amount
    tax_amount        = round2(tax_base * tax_pct / 100)
    grand_total       = round2(tax_base + tax_amount)

The stages cascade in that order. Every input is validated before any
arithmetic, so a failure never leaves a partial summary behind.
"""

import logging
from decimal import Decimal, localcontext

from .errors import InvalidInput
from .money import MONEY_PRECISION, apply_percentage, round2, sum_money, to_decimal
from .quote import MaterialMode, Quote, QuoteSummary, Task, TaskTotals

logger = logging.getLogger(__name__)


class PricingEngine:
    """
    Computes quote summaries.

    Stateless; one shared instance is fine from any number of threads.
    """

    def compute_summary(self, quote: Quote) -> QuoteSummary:
        with localcontext() as ctx:
            ctx.prec = MONEY_PRECISION
            return self._summarize(quote)

    def task_totals(self, task: Task) -> TaskTotals:
        """Price, materials total and combined total for a single task."""
        with localcontext() as ctx:
            ctx.prec = MONEY_PRECISION
            return self._calculate_task_totals(task, "task")

    def line_total(self, item, path: str = "material") -> Decimal:
        """round2(quantity x unit_price). Unit price is used exactly, not pre-rounded."""
        quantity = to_decimal(item.quantity, f"{path}.quantity")
        unit_price = to_decimal(item.unit_price, f"{path}.unit_price")
        with localcontext() as ctx:
            ctx.prec = MONEY_PRECISION
            return round2(quantity * unit_price)

    def _summarize(self, quote: Quote) -> QuoteSummary:
        complexity_pct = to_decimal(quote.complexity_pct, "complexity_pct")
        markup_pct = to_decimal(quote.markup_pct, "markup_pct")
        tax_pct = to_decimal(quote.tax_pct, "tax_pct")

        task_totals = [
            self._calculate_task_totals(task, f"tasks[{i}]")
            for i, task in enumerate(quote.tasks)
        ]

        # --- Subtotals ---
        subtotal_tasks = sum_money(t.price for t in task_totals)
        subtotal_materials = sum_money(t.materials_total for t in task_totals)
        subtotal = round2(subtotal_tasks + subtotal_materials)

        # --- Cascading adjustments ---
        complexity_amount = apply_percentage(subtotal, complexity_pct)
        markup_base = subtotal + complexity_amount
        markup_amount = apply_percentage(markup_base, markup_pct)
        tax_base = markup_base + markup_amount
        tax_amount = apply_percentage(tax_base, tax_pct)
        grand_total = round2(tax_base + tax_amount)

        summary = QuoteSummary(
            subtotal_tasks=subtotal_tasks,
            subtotal_materials=subtotal_materials,
            subtotal=subtotal,
            complexity_amount=complexity_amount,
            markup_base=round2(markup_base),
            markup_amount=markup_amount,
            tax_base=round2(tax_base),
            tax_amount=tax_amount,
            grand_total=grand_total,
            complexity_pct=complexity_pct,
            markup_pct=markup_pct,
            tax_pct=tax_pct,
            tasks=tuple(task_totals),
        )
        logger.debug("Quote %s priced: grand_total=%s", quote.id, grand_total)
        return summary

    def _calculate_task_totals(self, task: Task, path: str) -> TaskTotals:
        price = round2(to_decimal(task.price, f"{path}.price"))
        materials_total = self._calculate_materials_total(task, path)
        return TaskTotals(
            task_id=task.id,
            price=price,
            materials_total=materials_total,
            total=round2(price + materials_total),
        )

    def _calculate_materials_total(self, task: Task, path: str) -> Decimal:
        """
        Lump-sum tasks use their single estimate and ignore itemized rows
        for the total, though every row must still be valid; itemized tasks
        sum each row's rounded line total.
        """
        line_totals = [
            self.line_total(item, f"{path}.materials[{j}]")
            for j, item in enumerate(task.materials)
        ]
        if task.material_mode == MaterialMode.LUMPSUM:
            return round2(to_decimal(task.lump_sum_materials, f"{path}.lump_sum_materials"))
        if task.material_mode != MaterialMode.ITEMIZED:
            raise InvalidInput(
                f"{path}.material_mode", task.material_mode,
                reason=f"must be one of {', '.join(MaterialMode.ALL)}",
            )
        return sum_money(line_totals)


_engine = PricingEngine()


def compute_summary(quote: Quote) -> QuoteSummary:
    """Module-level shortcut for PricingEngine().compute_summary(quote)."""
    return _engine.compute_summary(quote)
