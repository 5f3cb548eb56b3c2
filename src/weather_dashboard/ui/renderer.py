"""Rich console rendering of today/forecast cards and the search history."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..state import HistoryEntry
from ..weather.models import WeatherRecord

# Unit labels follow the `units` request parameter; values are never converted.
UNIT_LABELS: dict[str, tuple[str, str]] = {
    "metric": ("°C", "m/s"),
    "imperial": ("°F", "mph"),
    "standard": ("K", "m/s"),
}

CONDITION_STYLES: dict[str, str] = {
    "Snow": "bright_white",
    "Clouds": "grey70",
    "Fog": "grey50",
    "Rain": "blue",
    "Clear": "yellow",
    "Thunderstorm": "magenta",
}


def condition_style(condition: str | None) -> str:
    return CONDITION_STYLES.get(condition or "", CONDITION_STYLES["Clear"])


def _format_measure(value: float | None, unit: str) -> str:
    if value is None:
        return "-"
    return f"{value:g} {unit}"


class ForecastRenderer:
    """Draws weather records onto a console."""

    def __init__(
        self,
        console: Console,
        units: str = "metric",
        date_format: str = "%d/%m/%Y",
    ) -> None:
        self.console = console
        self.units = units
        self.date_format = date_format
        self.temp_unit, self.speed_unit = UNIT_LABELS.get(units, UNIT_LABELS["standard"])

    def format_date(self, record: WeatherRecord) -> str:
        """Format the sample time in the city's local time."""
        offset = record.city.timezone or 0
        local = datetime.fromtimestamp(record.date, tz=UTC).astimezone(
            timezone(timedelta(seconds=offset))
        )
        return local.strftime(self.date_format)

    def render_today(self, record: WeatherRecord) -> None:
        city = record.city.name or "Unknown"
        title = f"{city}, {record.city.country}" if record.city.country else city
        style = condition_style(record.weather.condition)

        body = Table.grid(padding=(0, 1))
        body.add_column(style="bold")
        body.add_column()
        body.add_row("Date", self.format_date(record))
        body.add_row("Conditions", record.weather.description or record.weather.condition or "-")
        body.add_row("Temp", _format_measure(record.temperature.avg, self.temp_unit))
        body.add_row("Wind", _format_measure(record.wind.speed, self.speed_unit))
        body.add_row("Humidity", _format_measure(record.humidity, "%"))
        if record.weather.icon:
            body.add_row("Icon", Text(record.weather.icon, style="dim"))

        self.console.print(Panel(body, title=title, border_style=style))

    def render_forecast(self, records: list[WeatherRecord]) -> None:
        self.console.print(Text(f"{len(records)}-Day Forecast:", style="bold"))
        if not records:
            self.console.print("No forecast days available.")
            return

        cards = []
        for index, record in enumerate(records):
            card = Table.grid(padding=(0, 1))
            card.add_column(style="bold")
            card.add_column()
            card.add_row("Temp", _format_measure(record.temperature.avg, self.temp_unit))
            card.add_row("Wind", _format_measure(record.wind.speed, self.speed_unit))
            card.add_row("Humidity", _format_measure(record.humidity, "%"))
            card.add_row("", record.weather.description or record.weather.condition or "-")
            cards.append(
                Panel(
                    card,
                    title=self.format_date(record),
                    subtitle=f"forecast-{index}",
                    border_style=condition_style(record.weather.condition),
                    width=26,
                )
            )
        self.console.print(Columns(cards))

    def render_history(self, entries: list[HistoryEntry]) -> None:
        """List history newest first, numbered by stored index for replay."""
        if not entries:
            self.console.print("No searches yet.")
            return

        table = Table(title="Search History")
        table.add_column("#", justify="right")
        table.add_column("Location", overflow="fold")
        table.add_column("Lat", justify="right")
        table.add_column("Lon", justify="right")
        for index in range(len(entries) - 1, -1, -1):
            entry = entries[index]
            table.add_row(str(index), entry.name, f"{entry.lat:.4f}", f"{entry.lon:.4f}")
        self.console.print(table)

    def render_projection(self, today: WeatherRecord, daily: list[WeatherRecord]) -> None:
        self.render_today(today)
        self.render_forecast(daily)

