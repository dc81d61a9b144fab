"""Error hierarchy for the Stellar Nexus rules engine.

Services raise these for rejected player actions. Every error carries a
stable ``code`` for programmatic handling, a ``details`` dict for logs, and a
``retryable`` hint. Adapters translate the category into a user-facing
message and never show ``details`` to players.

Categories:
    - :class:`NotFoundError`: a referenced user, ship, item, recipe or guild is missing
    - :class:`InsufficientResourceError`: the player cannot pay or lacks materials
    - :class:`StateConflictError`: the action is invalid in the current state
    - :class:`InvalidRequestError`: the request itself is malformed
    - :class:`TransientError`: storage hiccup; the action can be retried
"""

from __future__ import annotations

import re
from typing import Any

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _default_code(cls: type) -> str:
    name = cls.__name__.removesuffix("Error")
    return _CAMEL_BOUNDARY.sub("_", name).upper()


class GameError(RuntimeError):
    """Base class for all rule violations raised by the engine."""

    retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        code: str | None = None,
    ) -> None:
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.code = code or _default_code(type(self))
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serializable form used by logs."""
        return {
            "error_type": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "retryable": self.retryable,
        }

    def __str__(self) -> str:
        details = f" | {self.details}" if self.details else ""
        return f"[{self.code}] {self.message}{details}"


# --- Not found ------------------------------------------------------------------


class NotFoundError(GameError):
    """A referenced entity does not exist (or is not owned by the caller)."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(
            f"{entity} {identifier!r} not found",
            details={"entity": entity, "identifier": identifier},
        )


class NoActiveShipError(NotFoundError):
    def __init__(self, user_id: int) -> None:
        super().__init__("active ship", user_id)
        self.message = f"user {user_id} has no active ship"


# --- Insufficient resources -----------------------------------------------------


class InsufficientResourceError(GameError):
    """The player lacks a currency or item required for the action."""

    resource: str = "resources"

    def __init__(self, required: int, current: int, *, resource: str | None = None) -> None:
        if resource is not None:
            self.resource = resource
        self.required = required
        self.current = current
        super().__init__(
            f"Insufficient {self.resource}: need {required:,}, have {current:,}",
            details={"resource": self.resource, "required": required, "current": current},
        )


class InsufficientCreditsError(InsufficientResourceError):
    resource = "credits"


class InsufficientNexiumError(InsufficientResourceError):
    resource = "nexium"


class InsufficientQuantityError(InsufficientResourceError):
    resource = "quantity"


class InsufficientAvailabilityError(InsufficientResourceError):
    resource = "market availability"


class InsufficientMaterialsError(InsufficientResourceError):
    """Raised when a recipe cannot be fully covered by the user's inventory."""

    resource = "materials"

    def __init__(self, missing: dict[str, tuple[int, int]]) -> None:
        # missing: name -> (required, held)
        self.missing = missing
        required = sum(req for req, _ in missing.values())
        current = sum(held for _, held in missing.values())
        super().__init__(required, current)
        self.message = "Insufficient materials: " + ", ".join(
            f"{name} (need {req}, have {held})" for name, (req, held) in sorted(missing.items())
        )
        self.details["missing"] = {
            name: {"required": req, "current": held} for name, (req, held) in missing.items()
        }


# --- State conflicts ------------------------------------------------------------


class StateConflictError(GameError):
    """The action is not allowed in the entity's current state."""


class AlreadyRegisteredError(StateConflictError):
    pass


class MaxTierError(StateConflictError):
    pass


class FullHealthError(StateConflictError):
    pass


class CannotSelfAttackError(StateConflictError):
    pass


class AlreadyInGuildError(StateConflictError):
    pass


class GuildFullError(StateConflictError):
    pass


class NotInGuildError(StateConflictError):
    pass


class AlreadyInAllianceError(StateConflictError):
    pass


# --- Everything else ------------------------------------------------------------


class InvalidRequestError(GameError):
    """Malformed input: unknown archetype, unknown type, non-positive amounts."""


class TransientError(GameError):
    """Storage failure that may succeed if retried."""

    retryable = True
