from datetime import date
from enum import Enum as PyEnum

from sqlalchemy import (
    Enum, ForeignKey, UniqueConstraint, CheckConstraint, Index, Boolean, Date,
    Float, Integer, String, Text
)
from sqlalchemy.orm import relationship, Mapped, mapped_column

from extensions import db

# ---------- Enums ----------
class Priority(PyEnum):
    PRIO_1 = "Prio 1"
    PRIO_2 = "Prio 2"
    PRIO_3 = "Prio 3"
    PRIO_4 = "Prio 4"

class Trade(PyEnum):
    UX = "UX"
    UI = "UI"
    FE_DEV = "FE-DEV"
    BE_DEV = "BE-DEV"
    PM = "PM"
    TPM = "TPM"
    COPY = "COPY"
    CREATIVE = "CREATIVE"
    CONSULTANT = "CONSULTANT"
    OTHER = "OTHER"

class Level(PyEnum):
    JUNIOR = "JUNIOR"
    MIDWEIGHT = "MIDWEIGHT"
    SENIOR = "SENIOR"
    DIRECTOR = "DIRECTOR"
    C_LEVEL = "C-LEVEL"


def _values(enum_cls):
    return [m.value for m in enum_cls]

# stored as their display values ("Prio 1", "FE-DEV", ...), not member names
def _enum_column(enum_cls, name: str):
    return Enum(enum_cls, name=name, native_enum=False, length=20,
                values_callable=_values, validate_strings=True)

STATIC_LISTS = {
    "priorities": _values(Priority),
    "trades": _values(Trade),
    "levels": _values(Level),
}


# ---------- Core Entities ----------
class Client(db.Model):
    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    since: Mapped[str] = mapped_column(String(50), nullable=False)  # free-form period, e.g. "2019"
    priority: Mapped[Priority] = mapped_column(_enum_column(Priority, "priority"), nullable=False)

    projects = relationship("Project", back_populates="client",
                            cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Client {self.name}>"


class Project(db.Model):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(primary_key=True)
    client_id: Mapped[int] = mapped_column(ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    budget_eur: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    client = relationship("Client", back_populates="projects")
    challenges = relationship("Challenge", back_populates="project",
                              cascade="all, delete-orphan", passive_deletes=True)
    assignments = relationship("Assignment", back_populates="project",
                               cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Project {self.name}>"


class Challenge(db.Model):
    __tablename__ = "challenges"

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    project = relationship("Project", back_populates="challenges")
    assignment = relationship("Assignment", back_populates="challenge", uselist=False,
                              cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Challenge {self.title}>"


class Person(db.Model):
    __tablename__ = "people"

    id: Mapped[int] = mapped_column(primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    trade: Mapped[Trade] = mapped_column(_enum_column(Trade, "trade"), nullable=False)
    level: Mapped[Level] = mapped_column(_enum_column(Level, "level"), nullable=False)

    assignments = relationship("Assignment", back_populates="person", order_by="Assignment.id",
                               cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        Index("ix_people_last_first", "last_name", "first_name"),
    )

    def __repr__(self):
        return f"<Person {self.first_name} {self.last_name}>"


class Assignment(db.Model):
    __tablename__ = "assignments"

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    challenge_id: Mapped[int] = mapped_column(ForeignKey("challenges.id", ondelete="CASCADE"), nullable=False)
    person_id: Mapped[int] = mapped_column(ForeignKey("people.id", ondelete="CASCADE"), nullable=False, index=True)
    is_owner: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_leader: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # percent of the person's capacity; derived, see blueprints.planner.workload
    quantity: Mapped[int] = mapped_column(Integer, default=100, nullable=False)

    project = relationship("Project", back_populates="assignments")
    challenge = relationship("Challenge", back_populates="assignment")
    person = relationship("Person", back_populates="assignments")

    __table_args__ = (
        UniqueConstraint("challenge_id", name="uq_assignments_challenge"),
        CheckConstraint("quantity >= 0 AND quantity <= 100", name="ck_assignments_quantity_range"),
    )

    def __repr__(self):
        return f"<Assignment challenge={self.challenge_id} person={self.person_id} {self.quantity}%>"


__all__ = [
    "Priority", "Trade", "Level", "STATIC_LISTS",
    "Client", "Project", "Challenge", "Person", "Assignment",
]
