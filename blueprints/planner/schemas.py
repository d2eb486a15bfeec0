from __future__ import annotations
from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from models import Level, Priority, Trade

# ---------- People ----------
class PersonIn(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    trade: Trade
    level: Level

class PersonOut(PersonIn):
    model_config = ConfigDict(from_attributes=True)
    id: int

# ---------- Clients ----------
class ClientIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    location: str = Field(min_length=1, max_length=255)
    since: str = Field(min_length=1, max_length=50)
    priority: Priority

class ClientOut(ClientIn):
    model_config = ConfigDict(from_attributes=True)
    id: int

# ---------- Projects ----------
class ProjectIn(BaseModel):
    client_id: int
    name: str = Field(min_length=1, max_length=255)
    start_date: date
    end_date: Optional[date] = None
    budget_eur: float = Field(ge=0, default=0)

    @field_validator("end_date", mode="before")
    @classmethod
    def _blank_is_open_ended(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def check_range(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must be >= start_date")
        return self

class ProjectOut(ProjectIn):
    model_config = ConfigDict(from_attributes=True)
    id: int

# ---------- Challenges ----------
class ChallengeIn(BaseModel):
    project_id: int
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(default="", max_length=5000)

class ChallengeOut(ChallengeIn):
    model_config = ConfigDict(from_attributes=True)
    id: int

# ---------- Assignments ----------
# quantity is derived by the workload engine and is never read from input
class AssignmentIn(BaseModel):
    project_id: int
    challenge_id: int
    person_id: int
    is_owner: bool = False
    is_leader: bool = False

class AssignmentOut(AssignmentIn):
    model_config = ConfigDict(from_attributes=True)
    id: int
    quantity: int = Field(ge=0, le=100)
