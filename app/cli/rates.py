"""CLI commands querying the upstream through the configured gateway."""

from __future__ import annotations

import json

import click
from flask import current_app
from flask.cli import with_appcontext

from app.currency.schemas import ExchangeRatesResponseSchema
from app.errors import UpstreamError
from app.services import DEFAULT_PAGE_SIZE, HistoricalRatesRequest, get_gateway


def _echo_json(payload) -> None:
    click.echo(json.dumps(payload, indent=2))


@click.command("latest-rates")
@click.option("--base", default="EUR", show_default=True, help="Base currency")
@with_appcontext
def latest_rates(base: str) -> None:
    """Print the latest rates for BASE."""

    try:
        payload = get_gateway(current_app).get_latest_rates(base)
    except UpstreamError as exc:
        raise click.ClickException(f"Upstream returned {exc.status_code}: {exc.message}") from exc
    _echo_json(payload)


@click.command("historical-rates")
@click.option("--base", default="USD", show_default=True, help="Target currency")
@click.option("--start", "start_date", type=click.DateTime(formats=["%Y-%m-%d"]), required=True)
@click.option("--end", "end_date", type=click.DateTime(formats=["%Y-%m-%d"]), required=True)
@click.option("--page", default=1, show_default=True)
@click.option("--page-size", type=int, default=None, help="Defaults to HISTORICAL_DEFAULT_PAGE_SIZE")
@with_appcontext
def historical_rates(base, start_date, end_date, page: int, page_size: int | None) -> None:
    """Print one page of historical rates between START and END."""

    if page_size is None:
        page_size = int(current_app.config.get("HISTORICAL_DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE))
    query = HistoricalRatesRequest(base=base, start_date=start_date.date(), end_date=end_date.date())
    try:
        result = get_gateway(current_app).get_historical_rates(query, page=page, page_size=page_size)
    except UpstreamError as exc:
        raise click.ClickException(f"Upstream returned {exc.status_code}: {exc.message}") from exc
    _echo_json(ExchangeRatesResponseSchema().dump(result))
