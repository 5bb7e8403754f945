"""
Demo Parcel Generator

Produces plausible placeholder parcel attributes for locations without a
reachable real source. Records are always tagged DataSource.DEMO.
"""
import random
from typing import Optional

from src.parcel_lookup.models.parcel_record import DataSource, ParcelRecord

DEMO_OWNERS = [
    "ABC Development LLC",
    "Lancaster Properties Inc",
    "Smith Family Trust",
    "Johnson & Associates",
    "Heritage Realty Group",
    "Keystone Holdings LLC",
]

DEMO_ZONING = [
    "C-2 (General Commercial)",
    "C-1 (Neighborhood Commercial)",
    "R-2 (Medium Density Residential)",
    "R-3 (High Density Residential)",
    "I-1 (Light Industrial)",
    "M-1 (Manufacturing)",
]

DEMO_LAND_USES = ["Commercial", "Residential", "Industrial", "Mixed Use", "Retail", "Office"]

DEMO_SITUS = "Property Address (Demo Data)"
DEFAULT_DEMO_COUNTY = "Lancaster County"


def demo_municipality(lat: float, lon: float) -> str:
    """
    Pick a municipality from coordinate thresholds.

    Rules apply in order and later matches override earlier ones.
    """
    municipality = "Lancaster Township"
    if lat > 40.05:
        municipality = "Manheim Township"
    if lat < 39.95:
        municipality = "West Hempfield Township"
    if lon > -76.25:
        municipality = "East Hempfield Township"
    if 40.03 < lat < 40.045 and -76.31 < lon < -76.29:
        municipality = "Lancaster City"
    return municipality


def demo_county(county: Optional[str]) -> str:
    """Format a county name for demo output."""
    if not county or not county.strip():
        return DEFAULT_DEMO_COUNTY
    county = county.strip()
    if county.lower().endswith("county"):
        return county
    return f"{county} County"


def generate_demo_parcel(
    lat: float,
    lon: float,
    county: Optional[str] = None,
    fallback_reason: Optional[str] = None,
    rng: Optional[random.Random] = None
) -> ParcelRecord:
    """
    Generate a demo parcel record.

    Args:
        lat: Latitude
        lon: Longitude
        county: County name to echo back (default Lancaster County)
        fallback_reason: Why the real source was not used
        rng: Random source, seed it for reproducible output

    Returns:
        ParcelRecord tagged as demo data
    """
    rng = rng or random.Random()

    parcel_num = rng.randint(100000, 999999)

    return ParcelRecord(
        parcel_id=f"410-{parcel_num}-0-0000",
        owner=rng.choice(DEMO_OWNERS),
        acres=round(rng.uniform(0.5, 5.5), 2),
        zoning=rng.choice(DEMO_ZONING),
        municipality=demo_municipality(lat, lon),
        situs=DEMO_SITUS,
        land_use=rng.choice(DEMO_LAND_USES),
        assessment=rng.randrange(200000, 700000),
        county=demo_county(county),
        data_source=DataSource.DEMO,
        source_name="demo",
        fallback_reason=fallback_reason,
    )
