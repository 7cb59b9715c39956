"""
Error taxonomy for quote pricing and the status lifecycle.

Each failure is a distinct type carrying structured attributes, so the
calling layer can render field-specific or status-specific messages
without parsing strings.
"""


class QuoteError(Exception):
    """Base for every failure raised by quotecraft."""

    code = "quote_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def details(self) -> dict:
        return {}

    def to_dict(self) -> dict:
        payload = {"error": self.code, "message": self.message}
        payload.update(self.details())
        return payload


class InvalidInput(QuoteError):
    """A quantity, price or percentage is negative, non-finite or not a number."""

    code = "invalid_input"

    def __init__(self, field: str, value, reason: str = "must be a finite number >= 0"):
        self.field = field
        self.value = value
        super().__init__(f"{field} {reason} (got {value!r})")

    def details(self) -> dict:
        return {"field": self.field, "value": repr(self.value)}


class InvalidTransition(QuoteError):
    """The lifecycle table does not permit current -> requested."""

    code = "invalid_transition"

    def __init__(self, current, requested):
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot change quote status from {_status_value(current)} "
            f"to {_status_value(requested)}"
        )

    def details(self) -> dict:
        return {
            "current": _status_value(self.current),
            "requested": _status_value(self.requested),
        }


class QuoteLocked(QuoteError):
    """Tasks, materials or percentages were changed outside DRAFT."""

    code = "quote_locked"

    def __init__(self, status, field: str = "tasks"):
        self.status = status
        self.field = field
        super().__init__(
            f"Quote is {_status_value(status)}; {field} can only be changed while DRAFT"
        )

    def details(self) -> dict:
        return {"status": _status_value(self.status), "field": self.field}


class TaskNotFound(QuoteError, LookupError):
    code = "task_not_found"

    def __init__(self, task_id):
        self.task_id = task_id
        super().__init__(f"Task {task_id!r} not found on quote")

    def details(self) -> dict:
        return {"task_id": self.task_id}


class MaterialNotFound(QuoteError, LookupError):
    code = "material_not_found"

    def __init__(self, task_id, index: int):
        self.task_id = task_id
        self.index = index
        super().__init__(f"Task {task_id!r} has no material at position {index}")

    def details(self) -> dict:
        return {"task_id": self.task_id, "index": self.index}


def _status_value(status) -> str:
    return getattr(status, "value", status)
