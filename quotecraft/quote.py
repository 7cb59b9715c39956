"""
Immutable quote values consumed and produced by the engines.

Inputs (LineItem, Task, Quote) hold numbers as the caller supplied them;
the pricing engine validates and converts them. QuoteSummary is always
derived and holds Decimal money quantized to the cent.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Optional, Tuple

from .lifecycle import QuoteStatus


class MaterialMode:
    ITEMIZED = "itemized"
    LUMPSUM = "lumpsum"

    ALL = (ITEMIZED, LUMPSUM)


@dataclass(frozen=True)
class LineItem:
    """One material row: quantity x unit_price."""
    quantity: object
    unit_price: object
    name: str = ""
    product_id: Optional[str] = None


@dataclass(frozen=True)
class Task:
    id: str
    price: object = 0
    materials: Tuple[LineItem, ...] = ()
    description: str = ""
    material_mode: str = MaterialMode.ITEMIZED
    lump_sum_materials: object = None

    def __post_init__(self):
        # lists from callers are frozen into tuples
        if not isinstance(self.materials, tuple):
            object.__setattr__(self, "materials", tuple(self.materials))


@dataclass(frozen=True)
class Quote:
    id: str
    status: QuoteStatus = QuoteStatus.DRAFT
    tasks: Tuple[Task, ...] = ()
    complexity_pct: object = 0
    markup_pct: object = 0
    tax_pct: object = 0
    title: str = ""

    def __post_init__(self):
        if not isinstance(self.status, QuoteStatus):
            object.__setattr__(self, "status", QuoteStatus(self.status))
        if not isinstance(self.tasks, tuple):
            object.__setattr__(self, "tasks", tuple(self.tasks))

    def find_task(self, task_id) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def evolve(self, **changes) -> "Quote":
        return replace(self, **changes)


@dataclass(frozen=True)
class TaskTotals:
    task_id: str
    price: Decimal
    materials_total: Decimal
    total: Decimal


@dataclass(frozen=True)
class QuoteSummary:
    subtotal_tasks: Decimal
    subtotal_materials: Decimal
    subtotal: Decimal
    complexity_amount: Decimal
    markup_base: Decimal
    markup_amount: Decimal
    tax_base: Decimal
    tax_amount: Decimal
    grand_total: Decimal
    complexity_pct: Decimal
    markup_pct: Decimal
    tax_pct: Decimal
    tasks: Tuple[TaskTotals, ...] = field(default=())

    MONEY_FIELDS = (
        "subtotal_tasks",
        "subtotal_materials",
        "subtotal",
        "complexity_amount",
        "markup_base",
        "markup_amount",
        "tax_base",
        "tax_amount",
        "grand_total",
    )

    def as_dict(self) -> dict:
        """Money as 2-dp strings; percentages echoed as given."""
        data = {name: f"{getattr(self, name):.2f}" for name in self.MONEY_FIELDS}
        data["complexity_pct"] = str(self.complexity_pct)
        data["markup_pct"] = str(self.markup_pct)
        data["tax_pct"] = str(self.tax_pct)
        data["tasks"] = [
            {
                "task_id": t.task_id,
                "price": f"{t.price:.2f}",
                "materials_total": f"{t.materials_total:.2f}",
                "total": f"{t.total:.2f}",
            }
            for t in self.tasks
        ]
        return data
