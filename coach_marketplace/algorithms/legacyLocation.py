"""
Legacy location fallback
========================

Older coach profiles only carry a free-text ``location`` string ("Leeds",
"London, United Kingdom", "Salford, Greater Manchester, England").  Newer
profiles carry structured city/region/country fields from geocoding.

This module infers structured components from the free text so legacy coaches
still take part in location matching.  Structured data always wins; the
parsed values only fill fields that are empty.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Final, Optional

from coach_marketplace.algorithms.rankingTypes import CoachLocationData, LocationData

# ---------------------------------------------------------------------------
# Country lookup tables
# ---------------------------------------------------------------------------

COUNTRY_NAME_TO_CODE: Final[dict[str, str]] = {
    "united kingdom": "GB",
    "uk": "GB",
    "england": "GB",
    "scotland": "GB",
    "wales": "GB",
    "northern ireland": "GB",
    "great britain": "GB",
    "united states": "US",
    "usa": "US",
    "us": "US",
    "america": "US",
    "ireland": "IE",
    "poland": "PL",
    "germany": "DE",
    "france": "FR",
    "spain": "ES",
    "italy": "IT",
    "netherlands": "NL",
    "belgium": "BE",
    "portugal": "PT",
    "sweden": "SE",
    "norway": "NO",
    "denmark": "DK",
    "finland": "FI",
    "austria": "AT",
    "switzerland": "CH",
    "greece": "GR",
    "czech republic": "CZ",
    "czechia": "CZ",
    "canada": "CA",
    "australia": "AU",
    "new zealand": "NZ",
    "south africa": "ZA",
    "uae": "AE",
    "united arab emirates": "AE",
    "singapore": "SG",
    "india": "IN",
    "japan": "JP",
    "brazil": "BR",
    "mexico": "MX",
}

COUNTRY_CODE_TO_NAME: Final[dict[str, str]] = {
    "GB": "United Kingdom",
    "US": "United States",
    "IE": "Ireland",
    "PL": "Poland",
    "DE": "Germany",
    "FR": "France",
    "ES": "Spain",
    "IT": "Italy",
    "NL": "Netherlands",
    "BE": "Belgium",
    "PT": "Portugal",
    "SE": "Sweden",
    "NO": "Norway",
    "DK": "Denmark",
    "FI": "Finland",
    "AT": "Austria",
    "CH": "Switzerland",
    "GR": "Greece",
    "CZ": "Czech Republic",
    "CA": "Canada",
    "AU": "Australia",
    "NZ": "New Zealand",
    "ZA": "South Africa",
    "AE": "United Arab Emirates",
    "SG": "Singapore",
    "IN": "India",
    "JP": "Japan",
    "BR": "Brazil",
    "MX": "Mexico",
}


@dataclass(frozen=True)
class ParsedLegacyLocation:
    """Components inferred from a free-text location."""

    city: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not (self.city or self.region or self.country or self.country_code)


def _blank(value: Optional[str]) -> bool:
    return not isinstance(value, str) or not value.strip()


def country_name_for_code(code: Optional[str]) -> Optional[str]:
    if _blank(code):
        return None
    return COUNTRY_CODE_TO_NAME.get(code.strip().upper())


def parse_legacy_location(text: Optional[str]) -> ParsedLegacyLocation:
    """Split a free-text location into city, region and country.

    The first comma-separated part is the city and the last part is the
    country when it names a known country; anything in between is the
    region.  A single part that names a country is read as a country.
    """
    if _blank(text):
        return ParsedLegacyLocation()

    parts = [p.strip() for p in text.split(",") if p.strip()]
    if not parts:
        return ParsedLegacyLocation()

    if len(parts) == 1:
        code = COUNTRY_NAME_TO_CODE.get(parts[0].casefold())
        if code:
            return ParsedLegacyLocation(country=parts[0], country_code=code)
        return ParsedLegacyLocation(city=parts[0])

    city = parts[0]
    last = parts[-1]
    code = COUNTRY_NAME_TO_CODE.get(last.casefold())
    country = last if code else None
    region = ", ".join(parts[1:-1]) if len(parts) >= 3 and country else None

    return ParsedLegacyLocation(
        city=city,
        region=region,
        country=country,
        country_code=code,
    )


def resolve_coach_location(
    location: CoachLocationData,
    legacy_text: Optional[str] = None,
) -> CoachLocationData:
    """Return a copy of ``location`` with empty fields filled from fallbacks.

    Fallback order per field: structured value, country code lookup (country
    only), parsed legacy text.
    """
    parsed = parse_legacy_location(legacy_text)

    city = location.location_city
    if _blank(city):
        city = parsed.city

    region = location.location_region
    if _blank(region):
        region = parsed.region

    country = location.location_country
    if _blank(country):
        country = country_name_for_code(location.location_country_code) or parsed.country

    country_code = location.location_country_code
    if _blank(country_code):
        country_code = parsed.country_code

    return replace(
        location,
        location_city=city,
        location_region=region,
        location_country=country,
        location_country_code=country_code,
    )


def resolve_searcher_location(searcher: Optional[LocationData]) -> LocationData:
    """Fill the searcher's country name from its country code when missing."""
    if searcher is None:
        return LocationData()
    if _blank(searcher.country):
        country = country_name_for_code(searcher.country_code)
        if country:
            return replace(searcher, country=country)
    return searcher
