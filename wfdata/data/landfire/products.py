"""
Static catalogs of LANDFIRE products, versions, and regions
----------
LANDFIRE uses acronyms to refer to individual products (for example, "FBFM40" or
"EVT"), and each product is published for several versions (for example, "LF2024")
and regions ("conus", "alaska", and "hawaii"). The catalogs in this module are
immutable mappings keyed by these names. Lookups elsewhere in the package are
case-insensitive, but always resolve to the keys used here.
----------
Catalogs:
    PRODUCTS        - Maps product acronyms to Product descriptors
    VERSIONS        - Maps version names to Version descriptors
    REGIONS         - Maps region names to Region descriptors
    CATEGORIES      - The supported product categories

Queries:
    query           - Returns products, optionally filtered by category
    versions        - Returns the version catalog
    regions         - Returns the region catalog

Categories:
    fuel            - Fuel models and canopy characteristics
    vegetation      - Existing and potential vegetation
    disturbance     - Annual and historical disturbance
    topographic     - Elevation, slope, and aspect
    fire_regime     - Historical fire frequency and severity
"""

from __future__ import annotations

import typing
from dataclasses import dataclass
from types import MappingProxyType

import wfdata._validate as validate

if typing.TYPE_CHECKING:
    from typing import Mapping, Optional

CATEGORIES = ("fuel", "vegetation", "disturbance", "topographic", "fire_regime")


@dataclass(frozen=True)
class Product:
    "Describes a LANDFIRE product"

    acronym: str
    name: str
    category: str
    description: str


@dataclass(frozen=True)
class Version:
    "Describes a LANDFIRE version and its numeric code"

    name: str
    year: int
    code: str


@dataclass(frozen=True)
class Region:
    "Describes a LANDFIRE region and its download and service codes"

    key: str
    name: str
    code: str
    service_code: str


#####
# Catalogs
#####

# acronym, name, category, description
_PRODUCTS = [
    # Fuel
    (
        "FBFM13",
        "13 Anderson Fire Behavior Fuel Models",
        "fuel",
        "Fire behavior fuel models based on Anderson's 13 fuel model classification",
    ),
    (
        "FBFM40",
        "40 Scott and Burgan Fire Behavior Fuel Models",
        "fuel",
        "Fire behavior fuel models based on Scott and Burgan's 40 fuel model "
        "classification",
    ),
    (
        "CFFDRS",
        "Canadian Forest Fire Danger Rating System",
        "fuel",
        "Fuel types mapped to the Canadian Forest Fire Danger Rating System",
    ),
    (
        "CBD",
        "Canopy Bulk Density",
        "fuel",
        "Mass of available canopy fuel per unit canopy volume (kg/m³)",
    ),
    (
        "CBH",
        "Canopy Base Height",
        "fuel",
        "Height from ground to the base of the canopy (m)",
    ),
    ("CC", "Canopy Cover", "fuel", "Percent cover of the tree canopy"),
    ("CH", "Canopy Height", "fuel", "Average height of the top of the canopy (m)"),
    ("FVC", "Fuel Vegetation Cover", "fuel", "Percent cover of fuel vegetation"),
    ("FVH", "Fuel Vegetation Height", "fuel", "Average height of fuel vegetation"),
    ("FVT", "Fuel Vegetation Type", "fuel", "Classification of fuel vegetation types"),
    # Vegetation
    (
        "BPS",
        "Biophysical Settings",
        "vegetation",
        "Potential natural vegetation that may have been dominant prior to "
        "Euro-American settlement",
    ),
    (
        "EVC",
        "Existing Vegetation Cover",
        "vegetation",
        "Vertically projected percent cover of the existing vegetation",
    ),
    (
        "EVH",
        "Existing Vegetation Height",
        "vegetation",
        "Average height of the dominant vegetation",
    ),
    (
        "EVT",
        "Existing Vegetation Type",
        "vegetation",
        "Classification of existing vegetation types",
    ),
    (
        "SCLASS",
        "Succession Class",
        "vegetation",
        "Current vegetation conditions relative to reference conditions",
    ),
    (
        "VCC",
        "Vegetation Condition Class",
        "vegetation",
        "Departure of current vegetation from historical reference conditions",
    ),
    (
        "VDEP",
        "Vegetation Departure",
        "vegetation",
        "Degree to which current vegetation has departed from simulated historical "
        "reference",
    ),
    # Disturbance
    (
        "Dist",
        "Annual Disturbance",
        "disturbance",
        "Annual disturbance events including fire, insects, disease, and other factors",
    ),
    (
        "HDist",
        "Historical Disturbance",
        "disturbance",
        "Cumulative disturbance from 1999 to present",
    ),
    # Topographic
    ("Elev", "Elevation", "topographic", "Elevation above sea level (m)"),
    ("Slp", "Slope", "topographic", "Slope steepness (degrees)"),
    ("Asp", "Aspect", "topographic", "Slope direction (degrees from north)"),
    # Fire regime
    (
        "FRG",
        "Fire Regime Group",
        "fire_regime",
        "Groupings of fire frequency and severity",
    ),
    (
        "MFRI",
        "Mean Fire Return Interval",
        "fire_regime",
        "Average period between fires under historical conditions",
    ),
    (
        "PLS",
        "Percent Low Severity",
        "fire_regime",
        "Percent of fires that were low severity under historical conditions",
    ),
    (
        "PMS",
        "Percent Mixed Severity",
        "fire_regime",
        "Percent of fires that were mixed severity under historical conditions",
    ),
    (
        "PRS",
        "Percent Replacement Severity",
        "fire_regime",
        "Percent of fires that were stand-replacing under historical conditions",
    ),
]

PRODUCTS: Mapping[str, Product] = MappingProxyType(
    {fields[0]: Product(*fields) for fields in _PRODUCTS}
)

# Newest first
VERSIONS: Mapping[str, Version] = MappingProxyType(
    {
        f"LF{year}": Version(f"LF{year}", year, code)
        for year, code in [
            (2024, "250"),
            (2023, "240"),
            (2022, "230"),
            (2020, "220"),
            (2016, "200"),
            (2014, "140"),
            (2012, "130"),
            (2010, "120"),
            (2008, "110"),
            (2001, "105"),
        ]
    }
)

REGIONS: Mapping[str, Region] = MappingProxyType(
    {
        "conus": Region("conus", "Continental US", "US", "us"),
        "alaska": Region("alaska", "Alaska", "AK", "ak"),
        "hawaii": Region("hawaii", "Hawaii", "HI", "hi"),
    }
)


#####
# Queries
#####


def query(category: Optional[str] = None) -> dict[str, Product]:
    """
    Returns LANDFIRE products
    ----------
    query()
    Returns a dict mapping each product acronym to its Product descriptor.

    query(category)
    Only returns products in the indicated category. Supported categories are
    "fuel", "vegetation", "disturbance", "topographic", and "fire_regime".
    ----------
    Inputs:
        category: A product category

    Outputs:
        dict[str, Product]: The selected products
    """

    if category is None:
        return dict(PRODUCTS)
    category = validate.option(category, "category", CATEGORIES)
    return {
        acronym: product
        for acronym, product in PRODUCTS.items()
        if product.category == category
    }


def versions() -> dict[str, Version]:
    "Returns the LANDFIRE versions, newest first"
    return dict(VERSIONS)


def regions() -> dict[str, Region]:
    "Returns the LANDFIRE regions"
    return dict(REGIONS)


#####
# Categories
#####


def fuel() -> dict[str, Product]:
    return query("fuel")


def vegetation() -> dict[str, Product]:
    return query("vegetation")


def disturbance() -> dict[str, Product]:
    return query("disturbance")


def topographic() -> dict[str, Product]:
    return query("topographic")


def fire_regime() -> dict[str, Product]:
    return query("fire_regime")
