from __future__ import annotations
import os
from pathlib import Path
from flask import Flask
from config import config_map
from extensions import db, migrate
from sqlalchemy import inspect

def _seed_from_config(app):
    if not app.config.get("SEED_DEMO_DATA"):
        return
    with app.app_context():
        # tables may not exist yet (before `flask db upgrade`)
        if not inspect(db.engine).has_table("people"):
            return
        from models import Person
        # demo data only fills an empty store; later deletions stay deleted
        if db.session.query(Person.id).first() is not None:
            return
        from seed import seed_demo  # local import to avoid cycles
        seed_demo()

def _ensure_sqlite_dir(uri: str) -> None:
    if not uri.startswith("sqlite:///") or uri.endswith(":memory:"):
        return
    path = Path(uri[len("sqlite:///"):])
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass

def register_blueprints(app: Flask) -> None:
    from blueprints.core import bp as core_bp
    from blueprints.planner import bp as planner_bp
    from blueprints.transfer import bp as transfer_bp

    # core without prefix -> '/health' at the root
    app.register_blueprint(core_bp)
    app.register_blueprint(planner_bp, url_prefix="/api")
    app.register_blueprint(transfer_bp, url_prefix="/api")

def create_app(config_name: str | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    cfg_name = config_name or os.getenv("FLASK_CONFIG", "default")
    app.config.from_object(config_map[cfg_name])
    _ensure_sqlite_dir(app.config["SQLALCHEMY_DATABASE_URI"])

    db.init_app(app)
    migrate.init_app(app, db)
    register_blueprints(app)
    _seed_from_config(app)
    return app
