"""
Quote status lifecycle.

DRAFT -> SENT -> ACCEPTED | REJECTED. Everything status-keyed (label,
badge color, allowed next states, field mutability) lives in one table,
_STATUS_RULES, checked for exhaustiveness at import time.

Re-requesting the current status is an InvalidTransition: status changes
are monotonic. Callers that want idempotent re-submission must special-case
the no-op themselves.
"""

import enum
import logging
from typing import FrozenSet, List, NamedTuple

from .errors import InvalidTransition, QuoteLocked

logger = logging.getLogger(__name__)


class QuoteStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    SENT = "SENT"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class FieldMutability(NamedTuple):
    tasks_and_pricing: bool
    status_only: bool


class StatusRule(NamedTuple):
    label: str
    color: str
    next_states: FrozenSet[QuoteStatus]
    mutability: FieldMutability


_STATUS_RULES = {
    QuoteStatus.DRAFT: StatusRule(
        label="Draft",
        color="default",
        next_states=frozenset({QuoteStatus.SENT}),
        mutability=FieldMutability(tasks_and_pricing=True, status_only=False),
    ),
    QuoteStatus.SENT: StatusRule(
        label="Sent",
        color="primary",
        next_states=frozenset({QuoteStatus.ACCEPTED, QuoteStatus.REJECTED}),
        mutability=FieldMutability(tasks_and_pricing=False, status_only=True),
    ),
    QuoteStatus.ACCEPTED: StatusRule(
        label="Accepted",
        color="success",
        next_states=frozenset(),
        mutability=FieldMutability(tasks_and_pricing=False, status_only=False),
    ),
    QuoteStatus.REJECTED: StatusRule(
        label="Rejected",
        color="danger",
        next_states=frozenset(),
        mutability=FieldMutability(tasks_and_pricing=False, status_only=False),
    ),
}

INITIAL_STATUS = QuoteStatus.DRAFT
TERMINAL_STATUSES = frozenset(s for s, rule in _STATUS_RULES.items() if not rule.next_states)

_missing = set(QuoteStatus) - set(_STATUS_RULES)
if _missing:
    raise RuntimeError(f"No lifecycle rule for: {sorted(s.value for s in _missing)}")


def _rule(status) -> StatusRule:
    return _STATUS_RULES[QuoteStatus(status)]


def can_transition(current, requested) -> bool:
    """True iff the table allows current -> requested. Never true for a self-loop."""
    return QuoteStatus(requested) in _rule(current).next_states


def allowed_transitions(current) -> List[QuoteStatus]:
    """Next states in enum declaration order."""
    nxt = _rule(current).next_states
    return [s for s in QuoteStatus if s in nxt]


def require_transition(current, requested) -> QuoteStatus:
    """Return the requested status or raise InvalidTransition."""
    current = QuoteStatus(current)
    requested = QuoteStatus(requested)
    if not can_transition(current, requested):
        logger.warning("Rejected status change %s -> %s", current.value, requested.value)
        raise InvalidTransition(current, requested)
    return requested


def fields_mutable(current) -> FieldMutability:
    """Which groups of quote fields may change while in this status."""
    return _rule(current).mutability


def ensure_editable(current, field: str = "tasks") -> None:
    """Raise QuoteLocked unless tasks/materials/percentages may change."""
    if not fields_mutable(current).tasks_and_pricing:
        status = QuoteStatus(current)
        logger.warning("Blocked change to %s on %s quote", field, status.value)
        raise QuoteLocked(status, field)


def is_terminal(status) -> bool:
    """True for ACCEPTED and REJECTED."""
    return QuoteStatus(status) in TERMINAL_STATUSES


def status_label(status) -> str:
    """Display name, e.g. "Draft"."""
    return _rule(status).label


def status_color(status) -> str:
    """UI badge colour name, e.g. "success" for ACCEPTED."""
    return _rule(status).color


def status_table() -> list:
    """Every status with its presentation and lifecycle data, in declaration order."""
    rows = []
    for status in QuoteStatus:
        rule = _STATUS_RULES[status]
        rows.append({
            "status": status.value,
            "label": rule.label,
            "color": rule.color,
            "next": [s.value for s in allowed_transitions(status)],
            "tasks_and_pricing": rule.mutability.tasks_and_pricing,
            "status_only": rule.mutability.status_only,
            "terminal": status in TERMINAL_STATUSES,
        })
    return rows
