from logging.config import fileConfig
from pathlib import Path
import os
import sys

from alembic import context

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

from app import create_app            # noqa: E402
from extensions import db             # noqa: E402
import models                         # noqa: E402,F401

app = create_app(os.getenv("FLASK_CONFIG", "prod"))
app.app_context().push()

if not config.get_main_option("sqlalchemy.url"):
    url = db.engine.url.render_as_string(hide_password=False)
    config.set_main_option("sqlalchemy.url", url.replace("%", "%%"))

target_metadata = db.metadata

def _configure(**kwargs):
    # batch mode: SQLite rebuilds the table for constraint changes
    context.configure(
        target_metadata=target_metadata,
        render_as_batch=True,
        compare_type=True,
        **kwargs,
    )
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_offline():
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

def run_migrations_online():
    with db.engine.connect() as connection:
        _configure(connection=connection)

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
