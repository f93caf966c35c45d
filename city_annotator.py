#!/usr/bin/env python3
"""
city_annotator.py
-----------------
Ranks the most populous cities found in a comment-laden CSV blob and builds a
text annotator that rewrites every occurrence of a ranked city name.

Input lines look like::

    44.38,34.33,Алушта,31440,      # x, y, name, population
    49.54,28.49,Бердичів,87575,#anything after '#' is dropped

For each ranked city the annotator substitutes a phrase such as::

    Алушта(4 place in TOP-10 largest cities of Ukraine, 31440 people)

Usage (CLI):
    python city_annotator.py cities.csv "Алушта і Вінниця"
    echo "Алушта" | python city_annotator.py cities.csv --locale uk

As a library:
    from city_annotator import build_city_annotator
    annotate = build_city_annotator(csv_text)   # table is built once per text
    annotate("Алушта\\nВінниця")
"""
from __future__ import annotations

import argparse
import hashlib
import logging
import re
import sys
import threading
from functools import lru_cache as _lru
from pathlib import Path
from typing import Callable, Dict, List, NamedTuple, Optional

import pycountry

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
TOP_N = 10
DEFAULT_COUNTRY = "UA"
COMMENT_MARK = "#"

DECIMAL_RE = re.compile(r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
RADIX_RE = re.compile(r"0([xXoObB])([0-9A-Za-z]+)")
RADIX_BASES = {"x": 16, "o": 8, "b": 2}

# "uk" is the Ukrainian report wording.
PHRASE_TEMPLATES = {
    "en": "{name}({rating} place in TOP-{top_n} largest cities of {country}, {population} people)",
    "uk": "{name}({rating} місце в ТОП-{top_n} найбільших міст України {population} чоловік)",
}


class CityRecord(NamedTuple):
    """One parsed CSV line. Missing trailing fields are ``None``."""

    x: str
    y: Optional[str]
    name: Optional[str]
    population: Optional[str]


class RankedCity(NamedTuple):
    population: str
    rating: int


RankedCityTable = Dict[str, RankedCity]


# --------------------------------------------------------------------------- #
#   Parsing & filtering
# --------------------------------------------------------------------------- #

def parse_city_line(line: str) -> CityRecord:
    """Return the record for one line; a ``#`` starts a comment to end of line."""
    if COMMENT_MARK in line:
        line = line[: line.index(COMMENT_MARK)]
    parts = line.split(",")
    # pad so that short lines yield None for the missing positions
    parts += [None] * (4 - len(parts))
    return CityRecord(parts[0], parts[1], parts[2], parts[3])


def _number(text: str) -> float | None:
    """Number-literal conversion of *text*; ``None`` when it is not a number.

    Accepts signed decimals with fraction/exponent, ``Infinity`` and unsigned
    0x/0o/0b integers. Blank text is 0.
    """
    text = text.strip()
    if not text:
        return 0.0
    if DECIMAL_RE.fullmatch(text):
        return float(text)
    m = RADIX_RE.fullmatch(text)
    if m:
        try:
            return float(int(m.group(2), RADIX_BASES[m.group(1).lower()]))
        except ValueError:
            return None
    return None


def population_value(population: str | None) -> float:
    """Numeric population; non-numeric text counts as 0."""
    if population is None:
        return 0.0
    value = _number(population)
    return 0.0 if value is None else value


def _is_numeric(text: str) -> bool:
    return _number(text) is not None


def is_valid_record(record: CityRecord, strict: bool = False) -> bool:
    """Check the fields needed for ranking.

    Only ``x`` is tested for emptiness; ``y``, ``name`` and ``population``
    merely have to be present. ``strict`` additionally rejects empty fields and
    non-numeric populations.
    """
    if record.x == "" or None in (record.y, record.name, record.population):
        return False
    if strict:
        if not (record.y.strip() and record.name.strip() and record.population.strip()):
            return False
        if not _is_numeric(record.population.strip()):
            return False
    return True


def parse_cities(csv_text: str, strict: bool = False) -> List[CityRecord]:
    """Parse every line of *csv_text* and keep only valid records."""
    records: List[CityRecord] = []
    for line_no, line in enumerate(csv_text.split("\n"), 1):
        record = parse_city_line(line)
        if not is_valid_record(record, strict):
            logger.debug("dropping line %d: %r", line_no, line)
            continue
        records.append(record)
    return records


# --------------------------------------------------------------------------- #
#   Ranking
# --------------------------------------------------------------------------- #

def rank_cities(records: List[CityRecord], top_n: int = TOP_N) -> List[CityRecord]:
    """Largest populations first; equal populations keep their input order."""
    if top_n < 1:
        raise ValueError("top_n must be a positive integer")
    # sorted() is stable and reverse=True keeps equal items in input order
    ranked = sorted(records, key=lambda r: population_value(r.population), reverse=True)
    return ranked[:top_n]


def build_city_table(csv_text: str, top_n: int = TOP_N, strict: bool = False) -> RankedCityTable:
    """Build the name → (population, rating) table for *csv_text*.

    Ratings are 1-based positions in the ranked list. A repeated city name
    overwrites the earlier entry's values but keeps its key position.
    """
    table: RankedCityTable = {}
    for rating, record in enumerate(rank_cities(parse_cities(csv_text, strict), top_n), 1):
        table[record.name] = RankedCity(record.population, rating)
    return table


# --------------------------------------------------------------------------- #
#   Annotation
# --------------------------------------------------------------------------- #

@_lru(maxsize=256)
def country_name(country_code: str) -> str:
    """English short name of an ISO 3166 alpha-2/alpha-3 country code."""
    code = country_code.upper()
    if len(code) == 2:
        country = pycountry.countries.get(alpha_2=code)
    elif len(code) == 3:
        country = pycountry.countries.get(alpha_3=code)
    else:
        country = None
    if country is None:
        raise ValueError(f"unknown country code: {country_code!r}")
    return country.name


def city_phrase(
    name: str,
    city: RankedCity,
    top_n: int = TOP_N,
    country: str = DEFAULT_COUNTRY,
    locale: str = "en",
) -> str:
    if locale not in PHRASE_TEMPLATES:
        raise ValueError(f"locale must be one of {sorted(PHRASE_TEMPLATES)}")
    return PHRASE_TEMPLATES[locale].format(
        name=name,
        rating=city.rating,
        top_n=top_n,
        country=country_name(country),
        population=city.population,
    )


def annotate(
    table: RankedCityTable,
    text: str,
    top_n: int = TOP_N,
    country: str = DEFAULT_COUNTRY,
    locale: str = "en",
) -> str:
    """Replace every literal occurrence of each ranked name in *text*.

    Names are applied one after another in rank order and matched as plain
    substrings, so "Київ" also rewrites the start of "Київський".
    """
    for name, city in table.items():
        if not name:
            continue
        text = text.replace(name, city_phrase(name, city, top_n, country, locale))
    return text


# --------------------------------------------------------------------------- #
#   Build cache
# --------------------------------------------------------------------------- #

class CityTableCache:
    """Built tables keyed by a digest of the CSV text and build options.

    Entries are never evicted; call ``clear()`` to drop them.
    """

    def __init__(self):
        self._tables: Dict[tuple, RankedCityTable] = {}
        self._lock = threading.Lock()
        self.builds = 0

    @staticmethod
    def _key(csv_text: str, top_n: int, strict: bool) -> tuple:
        digest = hashlib.sha256(csv_text.encode("utf-8")).hexdigest()
        return digest, top_n, strict

    def get(self, csv_text: str, top_n: int = TOP_N, strict: bool = False) -> RankedCityTable:
        key = self._key(csv_text, top_n, strict)
        with self._lock:
            table = self._tables.get(key)
            if table is None:
                table = build_city_table(csv_text, top_n, strict)
                self._tables[key] = table
                self.builds += 1
                logger.debug("built city table %s… with %d entries", key[0][:12], len(table))
        return table

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()

    def __len__(self) -> int:
        return len(self._tables)


DEFAULT_CACHE = CityTableCache()


def build_city_annotator(
    csv_text: str,
    *,
    cache: CityTableCache | None = None,
    top_n: int = TOP_N,
    strict: bool = False,
    country: str = DEFAULT_COUNTRY,
    locale: str = "en",
) -> Callable[[str], str]:
    """Return a function that annotates ranked city names in its argument.

    The ranking table is built once per distinct *csv_text* (and options) and
    reused through *cache* (module default when omitted).
    """
    if locale not in PHRASE_TEMPLATES:
        raise ValueError(f"locale must be one of {sorted(PHRASE_TEMPLATES)}")
    country_name(country)  # fail fast on a bad code
    table = (cache if cache is not None else DEFAULT_CACHE).get(csv_text, top_n, strict)

    def _annotate(text: str) -> str:
        return annotate(table, text, top_n, country, locale)

    return _annotate


# --------------------------------------------------------------------------- #
#   CLI
# --------------------------------------------------------------------------- #

def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Annotate city names with their TOP-N population rank")
    parser.add_argument("csv_file", help="CSV with x,y,name,population lines ('#' starts a comment)")
    parser.add_argument("text", nargs="*", help="Text to annotate (read from stdin when omitted)")
    parser.add_argument("--top", type=int, default=TOP_N, help="How many cities to rank (default: 10)")
    parser.add_argument("--strict", action="store_true", help="Also drop rows with empty or non-numeric fields")
    parser.add_argument("--country", default=DEFAULT_COUNTRY, help="ISO country code used in the phrase")
    parser.add_argument("--locale", default="en", choices=sorted(PHRASE_TEMPLATES))
    args = parser.parse_args(argv)

    try:
        csv_text = Path(args.csv_file).read_text(encoding="utf-8")
        table = DEFAULT_CACHE.get(csv_text, args.top, args.strict)

        print(f"[cities] TOP-{args.top} of {len(table)} ranked cities:")
        for name, city in table.items():
            print(f"{city.rating:2d}. {name:<20} {city.population}")

        text = " ".join(args.text) if args.text else sys.stdin.read()
        annotator = build_city_annotator(
            csv_text, top_n=args.top, strict=args.strict, country=args.country, locale=args.locale
        )
        print()
        print(annotator(text))
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
