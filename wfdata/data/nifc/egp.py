"""
Functions to access fire management boundaries from the Enterprise Geospatial Portal
----------
The NIFC Enterprise Geospatial Portal (EGP) publishes the administrative and planning
boundaries used to coordinate wildland fire response: Geographic Area Coordination
Center (GACC) boundaries, dispatch center boundaries and locations, Predictive
Service Areas, Potential Operational Delineations (PODs), and initial attack
frequency zones.

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

ARCGIS_BASE = "https://services3.arcgis.com/T4QMspbfLg3qTGWY/ArcGIS/rest/services"

# id, service, layer, name, description, category, geometry
_DATASETS = [
    (
        "gacc_boundaries",
        "DMP_NationalGACCBoundaries_Public",
        0,
        "National GACC Boundaries",
        "Geographic Area Coordination Center boundaries for wildland fire "
        "management coordination.",
        "boundaries",
        "polygon",
    ),
    (
        "dispatch_boundaries",
        "DMP_National_Dispatch_Boundaries_Public",
        0,
        "National Dispatch Boundaries",
        "Interagency dispatch center boundaries for wildland fire resource "
        "dispatching.",
        "boundaries",
        "polygon",
    ),
    (
        "dispatch_locations",
        "DMP_National_Dispatch_Locations_Public",
        0,
        "National Dispatch Locations",
        "Point locations of interagency dispatch centers.",
        "boundaries",
        "point",
    ),
    (
        "psa_boundaries",
        "DMP_Predictive_Service_Area__PSA_Boundaries_Public",
        0,
        "Predictive Service Area Boundaries",
        "Predictive Service Area (PSA) boundaries used for fire weather forecasting.",
        "boundaries",
        "polygon",
    ),
    (
        "pods",
        "Nat_PODs_Public",
        1,
        "Potential Operational Delineations (PODs)",
        "Pre-identified planning areas for wildfire response operations.",
        "planning",
        "polygon",
    ),
    (
        "ia_frequency_zones",
        "DMP_National_IA_Frequency_Zones_Federal_Public",
        0,
        "Initial Attack Frequency Zones (Federal)",
        "Federal initial attack frequency zones for fire management planning.",
        "planning",
        "polygon",
    ),
]

REGISTRY = Registry(
    "EGP",
    [
        Dataset(
            id=id,
            source="EGP",
            root=ARCGIS_BASE,
            resource=service,
            name=name,
            description=description,
            category=category,
            geometry=geometry,
            layer=layer,
            server="FeatureServer",
        )
        for id, service, layer, name, description, category, geometry in _DATASETS
    ],
)
SOURCE = Source(REGISTRY, ArcGIS(), "NIFC Enterprise Geospatial Portal")


def datasets(category: Optional[str] = None) -> list[Dataset]:
    """
    Returns the available EGP datasets
    ----------
    datasets()
    datasets(category)
    Returns the dataset descriptors, optionally filtered by category. Supported
    categories are "boundaries" and "planning".
    """
    return SOURCE.datasets(category)


def dataset(id: str) -> Dataset:
    return SOURCE.dataset(id)


def info(id: str) -> str:
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
    "Returns the ArcGIS query URL for an EGP dataset"
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
    Downloads an EGP dataset as a FeatureCollection
    ----------
    download(dataset, **options)
    Downloads the features matching the query options. Supports the same options
    as `wfigs.download`. For example, use where="GACCAbbreviation = 'OSCC'" to
    return the Southern California GACC.
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
    "Returns the number of features in an EGP dataset that match a query"
    return SOURCE.count(dataset, Query(where=where, bbox=bbox), timeout)


def fields(
    dataset: str, *, timeout: timeout = DEFAULT_TIMEOUT
) -> list[tuple[str, str, str]]:
    "Returns the (name, type, alias) of each field in an EGP dataset"
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
    "Saves an EGP dataset to a local GeoJSON file, unless the file already exists"
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
    "Loads a saved EGP dataset. Raises a DataFileNotFoundError if it was not saved"
    return SOURCE.load_file(dataset, None, filename, parent)
