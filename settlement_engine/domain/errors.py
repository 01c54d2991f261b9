"""Error taxonomy for settlement and vote operations.

Every error is terminal for the operation that raised it and is surfaced to
the caller unchanged. Messages name the entity and identifier involved.
"""


class SettlementEngineError(Exception):
    """Base class for all domain errors raised by the engine."""


class NotFoundError(SettlementEngineError):
    """A referenced expense, vote, settlement, detail, or user is absent."""

    def __init__(self, entity: str, identifier) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found: {identifier}")


class AccessDeniedError(SettlementEngineError):
    """The acting user may not perform the operation."""


class ConflictError(SettlementEngineError):
    """The operation conflicts with the current state of an aggregate."""


class ValidationError(SettlementEngineError):
    """Caller input is missing, malformed, or references unknown users."""


__all__ = [
    "SettlementEngineError",
    "NotFoundError",
    "AccessDeniedError",
    "ConflictError",
    "ValidationError",
]
