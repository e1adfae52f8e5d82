"""Command-line entry point for the weather sample."""

import os, sys as system
import requests

from .client import WeatherClient
from .report.render import render_forecast


def main():
    # import this_is_only_a_comment
    city = system.argv[1] if len(system.argv) > 1 else os.environ.get("CITY", "Lisbon")
    client = WeatherClient(session=requests.Session())
    print(render_forecast(city, client.forecast(city)))


if __name__ == "__main__":
    main()
