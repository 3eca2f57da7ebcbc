import asyncio
import json
from pathlib import Path
from typing import List, Optional

import typer

from firewatch.config import settings
from firewatch.domain.change_detection import detect_changes
from firewatch.domain.models import FireObservation, MapBounds, Period
from firewatch.infra.firms.csv_parser import parse_firms_csv
from firewatch.infra.firms.errors import FireDataError
from firewatch.providers.fires.firms import FirmsFireProvider

app = typer.Typer(help="CLI para detectar cambios en focos de incendio")


def load_observations(path: Path) -> List[FireObservation]:
    """Read observations from a FIRMS CSV export or a JSON array of records."""
    text = path.read_text()
    if path.suffix.lower() == ".csv":
        return parse_firms_csv(text)
    payload = json.loads(text)
    if isinstance(payload, dict):
        payload = payload.get("data", [])
    return [FireObservation.from_dict(item) for item in payload]


def _period_for(observations: List[FireObservation], label: str) -> Period:
    dates = sorted(obs.acq_date for obs in observations if obs.acq_date)
    if not dates:
        return Period(start_date="", end_date="", label=label)
    return Period(start_date=dates[0], end_date=dates[-1], label=label)


@app.command("detect")
def cli_detect(
    before: Path = typer.Option(..., exists=True, dir_okay=False, help="Observaciones del periodo 1 (JSON o CSV)"),
    after: Path = typer.Option(..., exists=True, dir_okay=False, help="Observaciones del periodo 2 (JSON o CSV)"),
    before_label: str = typer.Option("Period 1", help="Etiqueta del periodo 1"),
    after_label: str = typer.Option("Period 2", help="Etiqueta del periodo 2"),
    as_json: bool = typer.Option(False, "--json", help="Imprime el resultado completo en JSON"),
):
    period_a = load_observations(before)
    period_b = load_observations(after)
    result = detect_changes(
        period_a,
        period_b,
        _period_for(period_a, before_label),
        _period_for(period_b, after_label),
        settings.detection_config(),
    )
    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        raise typer.Exit(code=0)
    if not result.changes:
        typer.echo("No se detectaron cambios entre los periodos")
        raise typer.Exit(code=0)
    typer.echo("type\tlat\tlon\tintensity\tbefore\tafter")
    for change in result.changes:
        before_frp = "-" if change.before_frp is None else f"{change.before_frp:.1f}"
        after_frp = "-" if change.after_frp is None else f"{change.after_frp:.1f}"
        typer.echo(
            f"{change.kind}\t{change.latitude:.5f}\t{change.longitude:.5f}\t"
            f"{change.intensity:.3f}\t{before_frp}\t{after_frp}"
        )
    summary = result.summary
    typer.echo(
        f"total={summary.total_changes} new={summary.new_fires} growing={summary.growing_fires} "
        f"diminishing={summary.diminishing_fires} extinguished={summary.extinguished_fires}"
    )


@app.command("fires")
def cli_fires(
    west: float = typer.Option(..., help="Longitud oeste"),
    south: float = typer.Option(..., help="Latitud sur"),
    east: float = typer.Option(..., help="Longitud este"),
    north: float = typer.Option(..., help="Latitud norte"),
    day_range: int = typer.Option(1, help="Días (1-10)"),
    date: Optional[str] = typer.Option(None, help="Fecha inicial YYYY-MM-DD"),
    source: Optional[str] = typer.Option(None, help="Fuente FIRMS"),
):
    try:
        bounds = MapBounds(west=west, south=south, east=east, north=north)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    provider = FirmsFireProvider()
    try:
        response = asyncio.run(provider.fetch_fires(bounds=bounds, day_range=day_range, date=date, source=source))
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except FireDataError as exc:
        typer.echo(f"Error: {exc.message} ({exc.detail})", err=True)
        raise typer.Exit(code=1)
    if not response.data:
        typer.echo(response.message or "No fire data available.")
        raise typer.Exit(code=0)
    typer.echo("lat\tlon\tfrp\tconfidence\tacq_date")
    for obs in response.data:
        typer.echo(f"{obs.latitude:.5f}\t{obs.longitude:.5f}\t{obs.frp:.1f}\t{obs.confidence:.0f}\t{obs.acq_date}")


if __name__ == "__main__":
    app()
