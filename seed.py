"""
Idempotent seed script.
Usage:
  python seed.py --reset   # drop and recreate all tables, then load demo data
  python seed.py           # add whatever demo rows are missing
"""
from datetime import date
import argparse

from app import create_app
from extensions import db
from models import Assignment, Challenge, Client, Level, Person, Priority, Project, Trade
from blueprints.planner import services as svc
from blueprints.planner.schemas import AssignmentIn

DEMO_PEOPLE = [
    ("Ada", "Lovelace", Trade.BE_DEV, Level.SENIOR),
    ("Grace", "Hopper", Trade.TPM, Level.DIRECTOR),
    ("Dieter", "Rams", Trade.UI, Level.C_LEVEL),
    ("Jakob", "Nielsen", Trade.UX, Level.MIDWEIGHT),
]

DEMO_CLIENTS = [
    # name, location, since, priority, [(project, start, end, budget, [challenges])]
    ("Acme Corp", "Berlin", "2019", Priority.PRIO_1, [
        ("Checkout Revamp", date(2025, 1, 6), date(2025, 6, 30), 120000.0,
         ["Payment provider switch", "Cart redesign"]),
        ("Loyalty App", date(2025, 3, 1), None, 80000.0,
         ["Points ledger"]),
    ]),
    ("Globex", "Hamburg", "2022", Priority.PRIO_3, [
        ("Intranet Relaunch", date(2025, 2, 1), date(2025, 9, 30), 45000.0,
         ["Content migration", "Search"]),
    ]),
]

# challenge title -> (first name, last name, owner, leader)
DEMO_ASSIGNMENTS = {
    "Payment provider switch": ("Ada", "Lovelace", True, False),
    "Cart redesign": ("Dieter", "Rams", False, True),
    "Points ledger": ("Ada", "Lovelace", False, False),
    "Content migration": ("Grace", "Hopper", True, True),
    "Search": ("Ada", "Lovelace", False, False),
}

def first_or_create(model, defaults=None, **criteria):
    row = db.session.query(model).filter_by(**criteria).first()
    if row:
        return row, False
    row = model(**criteria, **(defaults or {}))
    db.session.add(row)
    db.session.flush()
    return row, True

def seed_demo() -> None:
    people = {}
    for first, last, trade, level in DEMO_PEOPLE:
        p, _ = first_or_create(Person, {"trade": trade, "level": level}, first_name=first, last_name=last)
        people[(first, last)] = p

    challenges = {}
    for name, location, since, prio, projects in DEMO_CLIENTS:
        c, _ = first_or_create(Client, {"location": location, "since": since, "priority": prio}, name=name)
        for pname, start, end, budget, titles in projects:
            pr, _ = first_or_create(Project, {"start_date": start, "end_date": end, "budget_eur": budget},
                                    client_id=c.id, name=pname)
            for title in titles:
                ch, _ = first_or_create(Challenge, {"description": f"{title} for {pname}"},
                                        project_id=pr.id, title=title)
                challenges[title] = ch
    db.session.commit()

    # assignments go through the service so quantities come out right
    for title, (first, last, owner, leader) in DEMO_ASSIGNMENTS.items():
        ch = challenges[title]
        if db.session.query(Assignment).filter_by(challenge_id=ch.id).first():
            continue
        svc.create_assignment(db.session, AssignmentIn(
            project_id=ch.project_id,
            challenge_id=ch.id,
            person_id=people[(first, last)].id,
            is_owner=owner,
            is_leader=leader,
        ))

def main():
    parser = argparse.ArgumentParser(description="Seed the resource planner database")
    parser.add_argument("--reset", action="store_true", help="drop and recreate all tables first")
    parser.add_argument("--config", default=None, help="config name (dev|prod)")
    args = parser.parse_args()

    app = create_app(args.config)
    with app.app_context():
        if args.reset:
            db.drop_all()
        db.create_all()
        seed_demo()
        print("Demo data ready")

if __name__ == "__main__":
    main()
