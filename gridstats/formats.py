from __future__ import annotations

from html import escape

from .types import AggregateStats, StatsPayload


def _number(value: float, places: int = 3) -> str:
    """Fixed precision without trailing zeros: 3.500 -> '3.5', 2.0 -> '2'."""
    text = f"{value:.{places}f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def fuel_mix_lines(stats: AggregateStats) -> list[str]:
    return [f"~ {fuel}: {pct:.2f}%" for fuel, pct in stats.average_fuel_mix.items()]


def render_text(stats: AggregateStats) -> str:
    lines = [
        f"Building Energy Consumption: {_number(stats.total_consumption_kwh)} kWh",
        f"Amount of CO2 produced: {_number(stats.total_co2_kg)} kg",
        "Fuel Mix:",
        *fuel_mix_lines(stats),
    ]
    return "\n".join(lines) + "\n"


def render_html(stats: AggregateStats) -> str:
    """
    Render the stats as an HTML fragment for a host page container.

    Layout:
      <div>
        Building Energy Consumption: ... kWh <br/>
        Amount of CO2 produced: ... kg <br/>
        Fuel Mix: <br/>
        <code>~ gas: 40.00% <br/>...</code>
      </div>
    """
    fuels = "".join(f"{escape(line)} <br/>\n" for line in fuel_mix_lines(stats))
    return (
        "<div>\n"
        f"  Building Energy Consumption: {_number(stats.total_consumption_kwh)} kWh <br/>\n"
        f"  Amount of CO2 produced: {_number(stats.total_co2_kg)} kg <br/>\n"
        "  Fuel Mix: <br/>\n"
        f"  <code>\n{fuels}  </code>\n"
        "</div>\n"
    )


def to_payload(stats: AggregateStats) -> StatsPayload:
    return {
        "start": stats.start.isoformat() if stats.start else None,
        "end": stats.end.isoformat() if stats.end else None,
        "intervals": int(stats.intervals),
        "total_consumption_kwh": float(stats.total_consumption_kwh),
        "total_co2_kg": float(stats.total_co2_kg),
        "average_fuel_mix": {k: float(v) for k, v in stats.average_fuel_mix.items()},
    }
