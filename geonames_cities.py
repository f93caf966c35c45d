#!/usr/bin/env python3
"""
geonames_cities.py
------------------
Exports the cities of one country from the bundled geonamescache dataset as
CSV text in the format read by `city_annotator.py`::

    # latitude,longitude,name,population
    50.45466,30.5238,Kyiv,2797553

Usage:
    python geonames_cities.py UA [output.csv] [--min-population 100000]

If no output file is specified, the CSV is printed to stdout.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List

import geonamescache  # type: ignore
import pycountry

HEADER = "# latitude,longitude,name,population"


def _check_country(country_code: str) -> str:
    code = country_code.upper()
    if pycountry.countries.get(alpha_2=code) is None:
        raise ValueError(f"unknown ISO 3166 alpha-2 country code: {country_code!r}")
    return code


def country_cities(country_code: str, min_population: int = 0) -> List[Dict]:
    """Return the country's cities, most populous first."""
    code = _check_country(country_code)
    gc = geonamescache.GeonamesCache()

    cities = []
    for city in gc.get_cities().values():
        if city.get("countrycode") != code:
            continue
        pop = int(city.get("population", 0))
        if pop < min_population:
            continue
        name = city["name"]
        # commas and '#' would break the line format
        if "," in name or "#" in name:
            continue
        cities.append({
            "latitude": city["latitude"],
            "longitude": city["longitude"],
            "name": name,
            "population": pop,
        })

    return sorted(cities, key=lambda c: c["population"], reverse=True)


def cities_csv(country_code: str, min_population: int = 0) -> str:
    lines = [HEADER]
    for city in country_cities(country_code, min_population):
        lines.append(f"{city['latitude']},{city['longitude']},{city['name']},{city['population']}")
    return "\n".join(lines)


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Export a country's cities as annotator CSV")
    parser.add_argument("country", help="ISO 3166 alpha-2 code, e.g. UA")
    parser.add_argument("output", nargs="?", help="Output file (stdout when omitted)")
    parser.add_argument("--min-population", type=int, default=0)
    args = parser.parse_args(argv)

    try:
        csv_text = cities_csv(args.country, args.min_population)
        if args.output:
            Path(args.output).write_text(csv_text + "\n", encoding="utf-8")
            count = len(csv_text.splitlines()) - 1  # minus header
            print(f"[cities] {count} cities written to: {args.output}")
            print(f"\nReady to run: python city_annotator.py {args.output}")
        else:
            print(csv_text)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
