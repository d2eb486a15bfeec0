# scripts/dev_db_init.py
# Usage:
#   python scripts/dev_db_init.py
# Applies the Alembic migrations to the configured database and loads demo data.
from __future__ import annotations
import sys
from pathlib import Path

# --- ensure project root on sys.path ---
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flask_migrate import upgrade  # noqa: E402

from app import create_app  # noqa: E402
from seed import seed_demo  # noqa: E402

if __name__ == "__main__":
    app = create_app("dev")
    with app.app_context():
        upgrade(directory=str(ROOT / "migrations"))
        seed_demo()
        print("DB migrated and seeded")
