"""Todo domain errors.

Errors are exceptions so value-object constructors can raise them, but the
rest of the codebase passes them around inside ``Err`` results. Each error
carries a ``kind`` tag that presentation adapters map to a response code.
"""


class TodoError(Exception):
    """Base class for every error the todo core reports."""

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class ValidationError(TodoError):
    """Malformed or out-of-range input for a named field."""

    kind = "validation"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.reason = message


class InvalidEnumValueError(ValidationError):
    """A string that is not one of an enumeration's canonical values."""

    def __init__(self, field: str, value: str, allowed: list[str]) -> None:
        super().__init__(
            field,
            f"invalid {field} value {value!r} (expected one of: {', '.join(allowed)})",
        )
        self.value = value
        self.allowed = allowed


class BusinessRuleError(TodoError):
    """Well-formed request that violates a state-machine rule."""

    kind = "business_rule"

    def __init__(self, rule: str, message: str) -> None:
        super().__init__(f"business rule violated ({rule}): {message}")
        self.rule = rule
        self.reason = message


class NotFoundError(TodoError):
    """No todo exists with the requested id."""

    kind = "not_found"

    def __init__(self, todo_id: str) -> None:
        super().__init__(f"todo not found: {todo_id}")
        self.todo_id = todo_id


class AlreadyExistsError(TodoError):
    """A todo with the same id is already stored."""

    kind = "conflict"

    def __init__(self, todo_id: str) -> None:
        super().__init__(f"todo already exists: {todo_id}")
        self.todo_id = todo_id


class InfrastructureError(TodoError):
    """Persistence or dispatch failure, tagged with the failing operation."""

    kind = "infrastructure"

    def __init__(self, operation: str, cause: Exception | str) -> None:
        super().__init__(f"{operation}: {cause}")
        self.operation = operation
        self.cause = cause


def cannot_complete_cancelled() -> BusinessRuleError:
    return BusinessRuleError("cannot_complete_cancelled", "cannot complete a cancelled task")


def cannot_modify_completed() -> BusinessRuleError:
    return BusinessRuleError("cannot_modify_completed", "cannot modify a completed task")
