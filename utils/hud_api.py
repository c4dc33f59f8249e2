"""
Econ Data Explorer — HUD Adapter
HUD values are simulated: each (variable, location, year) gets a reproducible value
whose range depends only on the variable code.
"""
import logging
import math
import zlib

import numpy as np
import pandas as pd

import config
from utils.errors import ValidationError
from utils.fetching import SourceClient, unique
from utils.formatting import CURRENCY, format_value
from utils.models import Location, ObservedVariable, YearResult

logger = logging.getLogger(__name__)

RECORD_COLUMNS = ["year", "location", "code", "name", "category", "value", "formatted_value"]


def simulate_value(code: str, location: str, year: str) -> float:
    """
    Reproducible stand-in for a HUD statistic.

    Rents, income limits and counts grow HUD_ANNUAL_GROWTH per year after
    HUD_BASE_YEAR; rates stay in [20, 80) and household sizes in [1.5, 3.5].
    """
    rng = np.random.default_rng(zlib.crc32(f"{code}|{location}|{year}".encode("utf-8")))
    growth = 1 + (int(year) - config.HUD_BASE_YEAR) * config.HUD_ANNUAL_GROWTH

    if "fmr" in code:
        bedrooms = int(code[0]) if code[0].isdigit() else 0
        value = bedrooms * 500 + 500 + int(rng.integers(0, 200))
    elif code.startswith("il_"):
        base = 30000 if "_50_" in code else 50000
        multiplier = 1 if code.endswith("_1") else 1.7
        value = math.floor(base * multiplier + rng.random() * 5000)
    elif "rate" in code or "pct" in code:
        return float(20 + int(rng.integers(0, 60)))
    elif "size" in code:
        return round(1.5 + rng.random() * 2, 2)
    elif "homeless" in code:
        value = 500 + int(rng.integers(0, 2000))
    elif "unit" in code:
        value = 1000 + int(rng.integers(0, 5000))
    else:
        value = 100 + int(rng.integers(0, 900))

    return float(round(value * growth))


class HudClient(SourceClient):
    """Simulated HUD adapter; makes no network calls."""

    source_id = "hud"
    available_years = config.HUD_YEARS

    def validate(self, location: Location, years: list[str], codes: list[str]) -> None:
        if not location.state_code:
            raise ValidationError("Please select a state")
        if location.state_code.upper() not in config.STATES:
            raise ValidationError(f"Unknown state code '{location.state_code}'")
        self.check_years(years)
        if not [c for c in codes if c in self.catalog]:
            raise ValidationError("Please select at least one variable")

    def location_label(self, location: Location) -> str:
        if location.county_name:
            return location.county_name
        return config.STATES[location.state_code.upper()]["name"]

    def observe(self, code: str, place: str, year: str) -> ObservedVariable:
        descriptor = self.catalog.describe(code)
        value = simulate_value(code, place, year)
        # Income-limit names carry "(50%)", which would read as a rate
        kind = CURRENCY if code.startswith("il_") or "fmr" in code else None
        return ObservedVariable(
            code=code,
            name=descriptor.name,
            category=descriptor.category,
            raw_value=value,
            formatted_value=format_value(value, descriptor.name, self.source_id, kind=kind),
            location=place,
        )

    def fetch_year(self, location: Location, year: str, codes: list[str]) -> YearResult:
        place = self.location_label(location)
        known = [c for c in codes if c in self.catalog]
        skipped = set(codes) - set(known)
        if skipped:
            logger.warning(f"Skipping unknown HUD variables: {sorted(skipped)}")

        variables = [self.observe(code, place, year) for code in known]
        variables.sort(key=lambda v: (v.category, v.name))
        return YearResult(year=str(year), location=place, variables=tuple(variables))

    def fetch_records(self, state_code: str, years: list[str], codes: list[str],
                      county_name: str | None = None) -> pd.DataFrame:
        """
        Flat HUD table, one row per (variable, location, year).

        Without a county the state is reported as HUD_DEFAULT_AREAS sub-areas.
        """
        years = [str(y) for y in unique(years)]
        codes = unique(codes)
        self.validate(Location(state_code=state_code), years, codes)

        areas = [county_name] if county_name else list(config.HUD_DEFAULT_AREAS)
        rows = []
        for year in years:
            for code in codes:
                if code not in self.catalog:
                    continue
                for area in areas:
                    var = self.observe(code, area, year)
                    rows.append({
                        "year": year,
                        "location": area,
                        "code": var.code,
                        "name": var.name,
                        "category": var.category,
                        "value": var.raw_value,
                        "formatted_value": var.formatted_value,
                    })

        df = pd.DataFrame(rows, columns=RECORD_COLUMNS)
        logger.info(f"Generated {len(df)} HUD records for {state_code}")
        return df
