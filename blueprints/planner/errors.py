# blueprints/planner/errors.py
from __future__ import annotations
from typing import Any

from sqlalchemy.exc import IntegrityError


class PlannerError(Exception):
    """Client-input failure raised by the planner services."""
    code = "PLANNER_ERROR"
    http_status = 400

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details:
            payload["details"] = self.details
        return payload


class ReferenceNotFound(PlannerError):
    code = "REFERENCE_NOT_FOUND"


class ChallengeAlreadyAssigned(PlannerError):
    code = "UNIQUE_CONSTRAINT"
    http_status = 409


class RowNotFound(PlannerError):
    code = "NOT_FOUND"
    http_status = 404

    def __init__(self, entity: str, id: int):
        super().__init__(f"{entity} {id} not found", entity=entity, id=id)


def from_integrity_error(ex: IntegrityError) -> PlannerError:
    # sqlite: "UNIQUE constraint failed: ..." / "FOREIGN KEY constraint failed"
    # postgres: "duplicate key value violates unique constraint ..." / "... violates foreign key constraint ..."
    msg = str(ex.orig) if getattr(ex, "orig", None) else str(ex)
    lowered = msg.lower()
    if "unique" in lowered or "duplicate" in lowered:
        return ChallengeAlreadyAssigned("Challenge already has an assignment", constraint=msg)
    if "check constraint" in lowered:
        return PlannerError("Value out of range", constraint=msg)
    return ReferenceNotFound("Referenced row does not exist", constraint=msg)
