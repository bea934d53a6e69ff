"""CLI entry points."""

from __future__ import annotations

from flask import Flask

from .rates import historical_rates, latest_rates


def register_cli(app: Flask) -> None:
    """Register CLI commands on the given Flask app."""

    app.cli.add_command(latest_rates)
    app.cli.add_command(historical_rates)
