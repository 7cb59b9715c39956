"""Construction quote pricing engine and status lifecycle."""

from .errors import InvalidInput, InvalidTransition, QuoteError, QuoteLocked
from .lifecycle import QuoteStatus, can_transition, fields_mutable
from .money import round2
from .pricing_engine import PricingEngine, compute_summary
from .quote import LineItem, Quote, QuoteSummary, Task

__version__ = "1.0.0"
