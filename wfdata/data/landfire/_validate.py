"""
Functions that validate LANDFIRE catalog keys
----------
Each function accepts a key (case-insensitive) and returns the matching catalog
descriptor. Unknown keys raise an UnknownDatasetError that lists the options.
----------
Functions:
    product     - Returns the Product for an acronym
    version     - Returns the Version for a version name
    region      - Returns the Region for a region name
"""

from __future__ import annotations

import typing

import wfdata._validate as validate
from wfdata.data.landfire.products import PRODUCTS, REGIONS, VERSIONS
from wfdata.errors import UnknownDatasetError

if typing.TYPE_CHECKING:
    from typing import Any, Mapping

    from wfdata.data.landfire.products import Product, Region, Version


def _lookup(catalog: Mapping, key: Any, name: str) -> Any:
    "Returns the catalog entry matching a key, ignoring case"

    key = validate.string(key, name)
    for option, entry in catalog.items():
        if option.lower() == key.lower():
            return entry
    options = ", ".join(catalog)
    raise UnknownDatasetError(
        f'Unknown LANDFIRE {name}: "{key}". Supported options are: {options}', key
    )


def product(acronym: Any) -> Product:
    return _lookup(PRODUCTS, acronym, "product")


def version(name: Any) -> Version:
    return _lookup(VERSIONS, name, "version")


def region(name: Any) -> Region:
    return _lookup(REGIONS, name, "region")
