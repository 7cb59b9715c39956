from pydantic import BaseModel
from typing import Optional, List

from .lifecycle import QuoteStatus
from .quote import LineItem, MaterialMode, Quote, Task


# Numbers stay plain floats here: negatives and non-finite values are let
# through so the pricing engine reports them as InvalidInput.

class LineItemIn(BaseModel):
    name: str = ""
    product_id: Optional[str] = None
    quantity: float = 1.0
    unit_price: float = 0.0

    def to_domain(self) -> LineItem:
        return LineItem(
            quantity=self.quantity,
            unit_price=self.unit_price,
            name=self.name,
            product_id=self.product_id,
        )


class TaskIn(BaseModel):
    id: str
    description: str = ""
    price: float = 0.0
    material_mode: str = MaterialMode.ITEMIZED
    lump_sum_materials: Optional[float] = None
    materials: List[LineItemIn] = []

    def to_domain(self) -> Task:
        return Task(
            id=self.id,
            price=self.price,
            description=self.description,
            material_mode=self.material_mode,
            lump_sum_materials=self.lump_sum_materials,
            materials=tuple(m.to_domain() for m in self.materials),
        )


class QuoteIn(BaseModel):
    id: str
    title: str = ""
    status: QuoteStatus = QuoteStatus.DRAFT
    complexity_pct: float = 0.0
    markup_pct: float = 0.0
    tax_pct: float = 0.0
    tasks: List[TaskIn] = []

    def to_domain(self) -> Quote:
        return Quote(
            id=self.id,
            title=self.title,
            status=self.status,
            complexity_pct=self.complexity_pct,
            markup_pct=self.markup_pct,
            tax_pct=self.tax_pct,
            tasks=tuple(t.to_domain() for t in self.tasks),
        )


class QuoteCreate(BaseModel):
    id: str
    title: str = ""
    complexity_pct: Optional[float] = None
    markup_pct: Optional[float] = None
    tax_pct: Optional[float] = None
    tasks: List[TaskIn] = []


class TransitionRequest(BaseModel):
    quote: QuoteIn
    status: QuoteStatus


class QuoteChanges(BaseModel):
    status: Optional[QuoteStatus] = None
    complexity_pct: Optional[float] = None
    markup_pct: Optional[float] = None
    tax_pct: Optional[float] = None
    tasks: Optional[List[TaskIn]] = None


class UpdateRequest(BaseModel):
    quote: QuoteIn
    changes: QuoteChanges


def quote_to_dict(quote: Quote) -> dict:
    """Plain JSON-ready form of a domain Quote (numbers as given)."""
    return {
        "id": quote.id,
        "title": quote.title,
        "status": quote.status.value,
        "complexity_pct": _plain(quote.complexity_pct),
        "markup_pct": _plain(quote.markup_pct),
        "tax_pct": _plain(quote.tax_pct),
        "tasks": [
            {
                "id": t.id,
                "description": t.description,
                "price": _plain(t.price),
                "material_mode": t.material_mode,
                "lump_sum_materials": _plain(t.lump_sum_materials),
                "materials": [
                    {
                        "name": m.name,
                        "product_id": m.product_id,
                        "quantity": _plain(m.quantity),
                        "unit_price": _plain(m.unit_price),
                    }
                    for m in t.materials
                ],
            }
            for t in quote.tasks
        ],
    }


def _plain(value):
    if value is None or isinstance(value, (int, float, str)):
        return value
    return float(value)
