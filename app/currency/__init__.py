"""Currency blueprint relaying rate queries to the upstream API."""

from __future__ import annotations

from flask_smorest import Blueprint

blp = Blueprint("Currency", __name__, description="Exchange rate relay endpoints")

from . import routes  # noqa: E402,F401
