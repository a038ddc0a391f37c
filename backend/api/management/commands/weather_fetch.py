"""Management command to fetch a temperature using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api import views
from multiweather.errors import WeatherError


class Command(BaseCommand):
    help = "Fetch the averaged temperature (Kelvin) for a city"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--city", type=str, required=True, help="City name")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        city = (options.get("city") or "").strip()
        if not city:
            raise CommandError("--city must not be empty")

        try:
            payload = views.measure(views.get_aggregator(), city)
        except WeatherError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(json.dumps(payload))
