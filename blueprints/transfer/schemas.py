from __future__ import annotations
from typing import List
from pydantic import BaseModel, Field

from blueprints.planner.schemas import (
    AssignmentOut, ChallengeOut, ClientOut, PersonOut, ProjectOut,
)

class Snapshot(BaseModel):
    """Whole-store dump; the same shape the dashboard returns.

    Missing collections load as empty. ``static_lists`` (``staticLists`` in
    older exports) is informational and ignored on import.
    """
    people: List[PersonOut] = Field(default_factory=list)
    clients: List[ClientOut] = Field(default_factory=list)
    projects: List[ProjectOut] = Field(default_factory=list)
    challenges: List[ChallengeOut] = Field(default_factory=list)
    assignments: List[AssignmentOut] = Field(default_factory=list)
