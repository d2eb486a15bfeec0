from flask import Blueprint

# url_prefix is set in app.register_blueprint(..., url_prefix="/api")
bp = Blueprint("planner", __name__)
from . import routes  # noqa: E402,F401
