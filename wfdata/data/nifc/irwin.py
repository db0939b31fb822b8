"""
Functions to access fire incident records derived from IRWIN
----------
The Integrated Reporting of Wildland-Fire Information (IRWIN) service links the
incident records of federal, state, and local fire agencies. This module provides
access to the InFORM fire occurrence records published by NIFC (complete from 2020
to present), and to the current incident points and perimeters published in the
Esri Living Atlas "USA Wildfires" service.

The query options are the same as for the `wfigs` module.
----------
Catalog:
    datasets        - Returns the available datasets, optionally filtered by category
    dataset         - Returns the descriptor of a dataset
    info            - Returns a description of a dataset

Queries:
    query_url       - Returns the query URL for a dataset
    download        - Downloads a dataset as a FeatureCollection
    count           - Returns the number of features matching a query
    fields          - Returns the (name, type, alias) of each field in a dataset

Local files:
    download_file   - Saves a dataset to a local GeoJSON file
    load_file       - Loads a saved dataset
"""

from __future__ import annotations

import typing

from wfdata.config import DEFAULT_TIMEOUT
from wfdata.data._core import Dataset, Query, Registry, Source
from wfdata.data._core.protocols import ArcGIS

if typing.TYPE_CHECKING:
    from pathlib import Path
    from typing import Optional

    from wfdata.data._core import FeatureCollection
    from wfdata.typing import BBox, Fields, Pathlike, timeout

NIFC_BASE = "https://services3.arcgis.com/T4QMspbfLg3qTGWY/ArcGIS/rest/services"
ESRI_BASE = "https://services9.arcgis.com/RHVPKKiFTONKtxq3/ArcGIS/rest/services"

REGISTRY = Registry(
    "IRWIN",
    [
        Dataset(
            id="fire_occurrence",
            source="IRWIN",
            root=NIFC_BASE,
            resource="InFORM_FireOccurrence_Public",
            name="InFORM Fire Occurrence Data Records",
            description=(
                "Official fire occurrence records from InFORM/IRWIN. The "
                "authoritative dataset for federal and some state fire agencies. "
                "Complete from 2020 to present."
            ),
            category="incidents",
            geometry="point",
            layer=0,
            server="FeatureServer",
        ),
        Dataset(
            id="usa_current_incidents",
            source="IRWIN",
            root=ESRI_BASE,
            resource="USA_Wildfires_v1",
            name="USA Current Wildfire Incidents",
            description=(
                "Current wildfire incident points across the United States. Sourced "
                "from IRWIN via the Esri Living Atlas. Updated frequently."
            ),
            category="incidents",
            geometry="point",
            layer=0,
            server="FeatureServer",
        ),
        Dataset(
            id="usa_current_perimeters",
            source="IRWIN",
            root=ESRI_BASE,
            resource="USA_Wildfires_v1",
            name="USA Current Wildfire Perimeters",
            description=(
                "Current wildfire perimeters across the United States. Sourced from "
                "IRWIN via the Esri Living Atlas. Updated frequently."
            ),
            category="perimeters",
            geometry="polygon",
            layer=1,
            server="FeatureServer",
        ),
    ],
)
SOURCE = Source(
    REGISTRY, ArcGIS(), ["NIFC ArcGIS Online", "Esri Living Atlas"]
)


def datasets(category: Optional[str] = None) -> list[Dataset]:
    """
    Returns the available IRWIN datasets
    ----------
    datasets()
    datasets(category)
    Returns the dataset descriptors, optionally filtered by category. Supported
    categories are "incidents" and "perimeters".
    """
    return SOURCE.datasets(category)


def dataset(id: str) -> Dataset:
    "Returns the descriptor of an IRWIN dataset"
    return SOURCE.dataset(id)


def info(id: str) -> str:
    "Returns a description of an IRWIN dataset"
    return SOURCE.info(id)


def query_url(
    dataset: str,
    *,
    where: Optional[str] = None,
    fields: Fields = "*",
    limit: Optional[int] = None,
    bbox: Optional[BBox | str] = None,
    offset: Optional[int] = None,
    sortby: Optional[str] = None,
) -> str:
    "Returns the ArcGIS query URL for an IRWIN dataset"
    query = Query(
        where=where, fields=fields, limit=limit, bbox=bbox, offset=offset, sortby=sortby
    )
    return SOURCE.query_url(dataset, query)


def download(
    dataset: str,
    *,
    where: Optional[str] = None,
    fields: Fields = "*",
    limit: Optional[int] = None,
    bbox: Optional[BBox | str] = None,
    offset: Optional[int] = None,
    sortby: Optional[str] = None,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> FeatureCollection:
    """
    Downloads an IRWIN dataset as a FeatureCollection
    ----------
    download(dataset, **options)
    Downloads the features matching the query options. Supports the same options
    as `wfigs.download`. For example, use where="POOState = 'US-CA'" to only return
    California incidents.
    ----------
    Inputs:
        dataset: An IRWIN dataset ID
        where: A SQL-like where clause
        fields: "*" or a list of field names
        limit: The maximum number of features to return
        bbox: A (west, south, east, north) bounding box in EPSG:4326
        offset: The number of features to skip
        sortby: An ArcGIS orderByFields expression
        timeout: The maximum time in seconds to connect with the server

    Outputs:
        FeatureCollection: The downloaded features
    """
    query = Query(
        where=where, fields=fields, limit=limit, bbox=bbox, offset=offset, sortby=sortby
    )
    return SOURCE.fetch(dataset, query, timeout)


def count(
    dataset: str,
    *,
    where: Optional[str] = None,
    bbox: Optional[BBox | str] = None,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> int:
    "Returns the number of features in an IRWIN dataset that match a query"
    return SOURCE.count(dataset, Query(where=where, bbox=bbox), timeout)


def fields(
    dataset: str, *, timeout: timeout = DEFAULT_TIMEOUT
) -> list[tuple[str, str, str]]:
    "Returns the (name, type, alias) of each field in an IRWIN dataset"
    return SOURCE.fields(dataset, timeout)


def download_file(
    dataset: str,
    *,
    filename: Optional[str] = None,
    parent: Optional[Pathlike] = None,
    force: bool = False,
    where: Optional[str] = None,
    fields: Fields = "*",
    limit: Optional[int] = None,
    bbox: Optional[BBox | str] = None,
    offset: Optional[int] = None,
    sortby: Optional[str] = None,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> Path:
    """
    Saves an IRWIN dataset to a local GeoJSON file
    ----------
    download_file(dataset, **options)
    download_file(..., *, filename, parent, force)
    Saves the dataset as "<dataset>.geojson" in the IRWIN data folder, unless the
    file already exists. Use `force=True` to replace an existing file.
    """
    query = Query(
        where=where, fields=fields, limit=limit, bbox=bbox, offset=offset, sortby=sortby
    )
    return SOURCE.download_file(dataset, query, filename, parent, force, timeout)


def load_file(
    dataset: str,
    *,
    filename: Optional[str] = None,
    parent: Optional[Pathlike] = None,
) -> FeatureCollection:
    "Loads a saved IRWIN dataset. Raises a DataFileNotFoundError if it was not saved"
    return SOURCE.load_file(dataset, None, filename, parent)
