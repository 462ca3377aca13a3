"""Typer CLI for the days-off optimizer."""

from __future__ import annotations

import datetime
import json
import logging
import pathlib
import sys

import typer

from daysoff.holidays import PRESETS, get_holidays
from daysoff.models import Holiday, HolidayPeriod
from daysoff.optimizer import MAX_YEAR, MIN_YEAR
from daysoff.optimizer import optimize as run_optimizer
from daysoff.optimizer import summarize
from daysoff.report import format_calendar_view, format_periods
from daysoff.strategies import STRATEGIES, StrategyType, get_strategy

app = typer.Typer(
    name="daysoff",
    help="Days-off optimizer — plan your personal days around weekends and "
    "public/company holidays for the longest possible breaks.",
    add_completion=False,
)

STRATEGY_CHOICES = ["all", *(s.value for s in StrategyType)]


def _parse_date(value: str) -> datetime.date:
    """Parse a YYYY-MM-DD date string."""
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Invalid date format {value!r}. Use YYYY-MM-DD.") from None


def _parse_holiday(value: str, default_name: str) -> Holiday:
    """Parse ``YYYY-MM-DD`` or ``YYYY-MM-DD=Name``."""
    date_part, _, name = value.partition("=")
    return Holiday(_parse_date(date_part.strip()), name.strip() or default_name)


def _holiday_from_config(raw: object, default_name: str) -> Holiday:
    if isinstance(raw, str):
        return _parse_holiday(raw, default_name)
    if isinstance(raw, dict) and "date" in raw:
        return Holiday(_parse_date(str(raw["date"])), str(raw.get("name") or default_name))
    raise typer.BadParameter(f"Invalid holiday entry {raw!r}. Use a date string or {{date, name}}.")


def _current_year() -> int:
    return datetime.date.today().year


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(code=1)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _as_int(value: object, key: str) -> int:
    """Coerce a command-line or config value to an integer."""
    if isinstance(value, bool):
        raise _fail(f"'{key}' must be an integer, got {value!r}.")
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        raise _fail(f"'{key}' must be an integer, got {value!r}.") from None


def _load_config(path: str) -> dict[str, object]:
    """Load and validate a JSON config file."""
    p = pathlib.Path(path)
    if not p.exists():
        raise _fail(f"Config file not found: {path}")

    try:
        data = json.loads(p.read_text())
    except json.JSONDecodeError as exc:
        raise _fail(f"Invalid JSON in config file: {exc}") from None

    if not isinstance(data, dict):
        raise _fail("Config file must contain a JSON object.")

    for key in ("public_holidays", "company_holidays"):
        if key in data and not isinstance(data[key], list):
            raise _fail(f"'{key}' must be a list.")

    return data


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def optimize(
    year: int = typer.Option(
        None,
        "--year",
        "-y",
        help="Target year. Defaults to the current year.",
    ),
    days: int = typer.Option(
        None,
        "--days",
        "-d",
        help="Number of personal days available.",
        min=0,
    ),
    strategy: str = typer.Option(
        None,
        "--strategy",
        "-s",
        help=f"Strategy to run: {', '.join(STRATEGY_CHOICES)}. Defaults to all.",
    ),
    country: str | None = typer.Option(
        None,
        "--country",
        "-c",
        help=f"Holiday preset ({', '.join(sorted(PRESETS))}). Use 'none' to skip. Defaults to us.",
    ),
    holiday: list[str] | None = typer.Option(  # noqa: B008
        None,
        "--holiday",
        "-H",
        help="Additional public holiday, YYYY-MM-DD[=Name]. Repeatable.",
    ),
    company: list[str] | None = typer.Option(  # noqa: B008
        None,
        "--company",
        "-C",
        help="Company holiday, YYYY-MM-DD[=Name]. Repeatable.",
    ),
    today: str | None = typer.Option(
        None,
        "--today",
        help="Plan as if today were this date (YYYY-MM-DD).",
    ),
    calendar: bool = typer.Option(
        True,
        "--calendar/--no-calendar",
        help="Show month-by-month calendar view.",
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Output results as JSON.",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Path to JSON config file. Command-line options take precedence.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log search progress to stderr.",
    ),
) -> None:
    """Plan your personal days for maximum consecutive time off."""
    _configure_logging(verbose)
    data = _load_config(config) if config is not None else {}

    raw_year = year if year is not None else data.get("year", _current_year())
    resolved_year = _as_int(raw_year, "year")
    if not MIN_YEAR <= resolved_year <= MAX_YEAR:
        raise _fail(f"year must be between {MIN_YEAR} and {MAX_YEAR}, got {resolved_year}")

    raw_budget = days if days is not None else data.get("personal_days")
    if raw_budget is None:
        raise _fail("--days is required (or set 'personal_days' in --config).")
    budget = _as_int(raw_budget, "personal_days")
    if budget < 0:
        raise _fail("'personal_days' must be >= 0.")

    resolved_strategy = strategy if strategy is not None else str(data.get("strategy", "all"))
    if resolved_strategy != "all" and get_strategy(resolved_strategy) is None:
        raise _fail(
            f"Invalid strategy {resolved_strategy!r}. Choose from: {', '.join(STRATEGY_CHOICES)}"
        )

    raw_today = today if today is not None else data.get("today")
    resolved_today = _parse_date(str(raw_today)) if raw_today is not None else datetime.date.today()

    # Collect holidays
    public: list[Holiday] = []
    resolved_country = country if country is not None else str(data.get("country", "us"))
    if resolved_country and resolved_country != "none":
        try:
            public.extend(get_holidays(resolved_country, resolved_year))
        except KeyError as exc:
            raise _fail(str(exc.args[0])) from None

    public.extend(_holiday_from_config(h, "Holiday") for h in data.get("public_holidays", []))  # type: ignore[attr-defined]
    public.extend(_parse_holiday(h, "Holiday") for h in holiday or [])

    company_days = [
        _holiday_from_config(h, "Company holiday")
        for h in data.get("company_holidays", [])  # type: ignore[attr-defined]
    ]
    company_days.extend(_parse_holiday(h, "Company holiday") for h in company or [])

    strategy_types = (
        list(StrategyType) if resolved_strategy == "all" else [get_strategy(resolved_strategy).type]  # type: ignore[union-attr]
    )

    plans: list[tuple[StrategyType, list[HolidayPeriod]]] = []
    for stype in strategy_types:
        try:
            periods = run_optimizer(
                stype, public, company_days, budget, resolved_year, today=resolved_today
            )
        except ValueError as exc:
            raise _fail(str(exc)) from None
        plans.append((stype, periods))

    if output_json:
        _print_json(plans, resolved_year, budget, resolved_today, public, company_days)
    else:
        _print_text(plans, resolved_year, budget, public, company_days, calendar)


def _print_text(
    plans: list[tuple[StrategyType, list[HolidayPeriod]]],
    year: int,
    budget: int,
    public: list[Holiday],
    company: list[Holiday],
    show_calendar: bool,
) -> None:
    w = 64
    typer.echo("=" * w)
    typer.echo("  DAYS-OFF OPTIMIZER")
    typer.echo("=" * w)
    typer.echo(f"  Year:              {year}")
    typer.echo(f"  Personal days:     {budget}")
    typer.echo(f"  Public holidays:   {len(public)}")
    typer.echo(f"  Company holidays:  {len(company)}")
    typer.echo()
    for h in sorted([*public, *company]):
        typer.echo(f"    {h.date.strftime('%a, %b %d'):>12}  {h.name}")

    for stype, periods in plans:
        typer.echo(format_periods(periods, STRATEGIES[stype].name, budget))
        if show_calendar and periods:
            typer.echo(format_calendar_view(periods, year))

    generated = sum(1 for _s, periods in plans if periods)
    typer.echo()
    typer.echo("=" * w)
    typer.echo(f"  Generated {generated} of {len(plans)} plan option{'s' if len(plans) != 1 else ''}.")
    typer.echo("=" * w)


def _print_json(
    plans: list[tuple[StrategyType, list[HolidayPeriod]]],
    year: int,
    budget: int,
    today: datetime.date,
    public: list[Holiday],
    company: list[Holiday],
) -> None:
    def _serialize_holiday(h: Holiday) -> dict[str, str]:
        return {"date": h.date.isoformat(), "name": h.name}

    def _serialize_period(p: HolidayPeriod) -> dict[str, object]:
        return {
            "start_date": p.start_date.isoformat(),
            "end_date": p.end_date.isoformat(),
            "description": p.description,
            "total_days": p.total_days,
            "personal_days_used": p.personal_days_used,
            "public_holidays_used": p.public_holidays_used,
            "company_holidays_used": p.company_holidays_used,
            "weekend_days": p.weekend_days,
            "days": [
                {"date": d.date.isoformat(), "type": d.type.value, "name": d.name}
                for d in p.days
            ],
        }

    output = {
        "year": year,
        "personal_days": budget,
        "today": today.isoformat(),
        "public_holidays": [_serialize_holiday(h) for h in public],
        "company_holidays": [_serialize_holiday(h) for h in company],
        "plans": [
            {
                "strategy": stype.value,
                "name": STRATEGIES[stype].name,
                "periods": [_serialize_period(p) for p in periods],
                "summary": summarize(periods)._asdict(),
            }
            for stype, periods in plans
        ],
    }
    json.dump(output, sys.stdout, indent=2)
    typer.echo()


@app.command()
def holidays(
    country: str = typer.Option(
        "us",
        "--country",
        "-c",
        help=f"Country preset ({', '.join(sorted(PRESETS))}).",
    ),
    year: int = typer.Option(
        None,
        "--year",
        "-y",
        help="Year to list holidays for. Defaults to the current year.",
    ),
) -> None:
    """List holidays for a country preset."""
    resolved_year = year if year is not None else _current_year()

    try:
        preset = get_holidays(country, resolved_year)
    except KeyError as exc:
        raise _fail(str(exc.args[0])) from None

    typer.echo(f"  {PRESETS[country.lower()]} — {resolved_year}")
    typer.echo()
    for d, name in preset:
        typer.echo(f"    {d.strftime('%a, %b %d'):>12}  {name}")


@app.command()
def strategies() -> None:
    """List the available strategies and the window lengths they search."""
    for stype, strat in STRATEGIES.items():
        passes = " then ".join("/".join(str(n) for n in lengths) for lengths in strat.passes)
        line = f"  {stype.value:<14} {strat.name:<14} {passes} days"
        if strat.min_personal_days:
            line += f" (needs {strat.min_personal_days}+ personal days)"
        typer.echo(line)


def main() -> None:
    """Entry point for the CLI."""
    app()
