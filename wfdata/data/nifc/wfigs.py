"""
Functions to access wildland fire perimeters and locations from WFIGS
----------
The Wildland Fire Interagency Geospatial Services (WFIGS) group publishes the
authoritative interagency fire perimeters and incident locations for the United
States via ArcGIS FeatureServer layers hosted by the National Interagency Fire Center
(NIFC). This module provides access to the current perimeters and incident
locations, as well as historical perimeters from the GeoMAC system (2000-2018) and
the interagency perimeter history.

Use `datasets` to list the available datasets, and `download` to query a dataset
into memory. Use `download_file` to save a query to the local data folder, and
`load_file` to reload it later without a network request. Queries support a SQL-like
"where" clause, field selection, a record limit, a bounding box, pagination, and
sort order. Note that the WFIGS servers cap the number of records returned by a
single request. When this occurs, the returned FeatureCollection is marked as
truncated, and a warning is logged.
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

Constants:
    ARCGIS_BASE     - The base URL of the NIFC ArcGIS REST services
    GEOMAC_YEARS    - The years with individual Historic GeoMAC datasets
"""

from __future__ import annotations

import typing

from wfdata.config import DEFAULT_TIMEOUT
from wfdata.data._core import Dataset, Query, Registry, Source, yearly
from wfdata.data._core.protocols import ArcGIS

if typing.TYPE_CHECKING:
    from pathlib import Path
    from typing import Optional

    from wfdata.data._core import FeatureCollection
    from wfdata.typing import BBox, Fields, Pathlike, timeout

ARCGIS_BASE = "https://services3.arcgis.com/T4QMspbfLg3qTGWY/ArcGIS/rest/services"
GEOMAC_YEARS = range(2000, 2019)


def _dataset(id, resource, name, description, category, geometry) -> Dataset:
    return Dataset(
        id=id,
        source="WFIGS",
        root=ARCGIS_BASE,
        resource=resource,
        name=name,
        description=description,
        category=category,
        geometry=geometry,
        layer=0,
        server="FeatureServer",
    )


REGISTRY = Registry(
    "WFIGS",
    [
        _dataset(
            "current_perimeters",
            "WFIGS_Interagency_Perimeters_Current",
            "Current Interagency Fire Perimeters",
            "Best available perimeters for recent and ongoing wildland fires. "
            "Updated every 5 minutes.",
            "perimeters",
            "polygon",
        ),
        _dataset(
            "current_locations",
            "WFIGS_Incident_Locations_Current",
            "Current Wildland Fire Locations",
            "Point locations for recent and ongoing wildland fires. "
            "Updated every 5 minutes.",
            "locations",
            "point",
        ),
        _dataset(
            "historic_geomac",
            "Historic_Geomac_Perimeters_Combined_2000_2018",
            "Historic GeoMAC Perimeters (2000-2018)",
            "Historical fire perimeters from the GeoMAC system covering 2000-2018.",
            "history",
            "polygon",
        ),
        _dataset(
            "perimeters_all_years",
            "InteragencyFirePerimeterHistory_All_Years_View",
            "Interagency Fire Perimeter History (All Years)",
            "Consolidated historical fire perimeter data across all available years.",
            "history",
            "polygon",
        ),
    ]
    + yearly(
        _dataset(
            "historic_geomac_{year}",
            "Historic_Geomac_Perimeters_{year}",
            "Historic GeoMAC Perimeters ({year})",
            "Historical fire perimeters from the GeoMAC system for {year}.",
            "history",
            "polygon",
        ),
        GEOMAC_YEARS,
    ),
)
SOURCE = Source(REGISTRY, ArcGIS(), "WFIGS (NIFC ArcGIS Online)")


#####
# Catalog
#####


def datasets(category: Optional[str] = None) -> list[Dataset]:
    """
    Returns the available WFIGS datasets
    ----------
    datasets()
    Returns the descriptors of all WFIGS datasets in registration order.

    datasets(category)
    Only returns datasets in the indicated category. Supported categories are
    "perimeters" (fire perimeter polygons), "locations" (fire location points), and
    "history" (historical perimeters).
    ----------
    Inputs:
        category: A category used to filter the datasets

    Outputs:
        list[Dataset]: The matching dataset descriptors
    """
    return SOURCE.datasets(category)


def dataset(id: str) -> Dataset:
    "Returns the descriptor of a WFIGS dataset"
    return SOURCE.dataset(id)


def info(id: str) -> str:
    """
    Returns a description of a WFIGS dataset
    ----------
    info(id)
    Returns a multi-line description of the dataset, including its name,
    category, geometry, and ArcGIS service.
    ----------
    Inputs:
        id: A WFIGS dataset ID

    Outputs:
        str: A description of the dataset
    """
    return SOURCE.info(id)


#####
# Queries
#####


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
    """
    Returns the ArcGIS query URL for a WFIGS dataset
    ----------
    query_url(dataset, **options)
    Returns the percent-encoded FeatureServer query URL for the dataset. See
    `download` for descriptions of the query options. This function does not make
    a network request.
    ----------
    Inputs:
        dataset: A WFIGS dataset ID
        **options: Query options (where, fields, limit, bbox, offset, sortby)

    Outputs:
        str: The query URL
    """
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
    Downloads a WFIGS dataset as a FeatureCollection
    ----------
    download(dataset)
    Downloads every feature in the dataset, in EPSG:4326. Note that the server
    caps the number of features returned by a single request. If the result was
    capped, the returned collection's `truncated` property is True, and you should
    narrow the query or page through the results using `offset`.

    download(..., *, where)
    download(..., *, fields)
    download(..., *, limit)
    Filters the features. The `where` option is a SQL-like clause passed to the
    server as-is (for example, "GISAcres > 1000"). The `fields` option is "*" for
    every field, or a list of field names. Use `limit` to return at most the
    indicated number of features.

    download(..., *, bbox)
    Only returns features that intersect a bounding box. The bounding box should be
    a (west, south, east, north) sequence, or a "west,south,east,north" string, in
    decimal degrees.

    download(..., *, offset)
    download(..., *, sortby)
    Skips the indicated number of features, and sorts the results using an ArcGIS
    orderByFields expression (for example, "GISAcres DESC").

    download(..., *, timeout)
    Specifies a maximum time in seconds for connecting to the WFIGS server. This
    option is typically a scalar, but may also use a vector with two elements. In
    this case, the first value is the timeout to connect with the server, and the
    second value is the time for the server to return the first byte. You can also
    set timeout to None, in which case API queries will never time out. This may be
    useful for some slow connections, but is generally not recommended as your code
    may hang indefinitely if the server fails to respond.
    ----------
    Inputs:
        dataset: A WFIGS dataset ID
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
    """
    Returns the number of features matching a query
    ----------
    count(dataset)
    count(..., *, where, bbox)
    Returns the number of features in the dataset. Use the `where` and `bbox`
    options to only count features matching a filter. Record counts are not subject
    to the server's transfer limit.
    ----------
    Inputs:
        dataset: A WFIGS dataset ID
        where: A SQL-like where clause
        bbox: A (west, south, east, north) bounding box in EPSG:4326
        timeout: The maximum time in seconds to connect with the server

    Outputs:
        int: The number of matching features
    """
    return SOURCE.count(dataset, Query(where=where, bbox=bbox), timeout)


def fields(
    dataset: str, *, timeout: timeout = DEFAULT_TIMEOUT
) -> list[tuple[str, str, str]]:
    """
    Returns the fields of a WFIGS dataset
    ----------
    fields(dataset)
    Returns a list with one (name, type, alias) tuple per field in the dataset.
    ----------
    Inputs:
        dataset: A WFIGS dataset ID
        timeout: The maximum time in seconds to connect with the server

    Outputs:
        list[tuple[str, str, str]]: The name, type, and alias of each field
    """
    return SOURCE.fields(dataset, timeout)


#####
# Local files
#####


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
    Saves a WFIGS dataset to a local GeoJSON file
    ----------
    download_file(dataset, **options)
    Downloads the dataset and saves it as "<dataset>.geojson" in the WFIGS data
    folder. Accepts the same query options as `download`. If the file already
    exists, returns its path without making a network request.

    download_file(..., *, filename, parent)
    Specifies the name of the saved file, and the folder it is saved in.

    download_file(..., *, force=True)
    Downloads the dataset and replaces any existing file.
    ----------
    Inputs:
        dataset: A WFIGS dataset ID
        filename: The name of the saved file
        parent: The folder in which to save the file
        force: True to replace an existing file
        **options: Query options (see `download`)

    Outputs:
        Path: The path to the saved file
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
    """
    Loads a saved WFIGS dataset
    ----------
    load_file(dataset)
    load_file(..., *, filename, parent)
    Loads a file saved by `download_file`. Raises a DataFileNotFoundError if the
    file does not exist. Never makes a network request.
    ----------
    Inputs:
        dataset: A WFIGS dataset ID
        filename: The name of the saved file
        parent: The folder containing the saved file

    Outputs:
        FeatureCollection: The saved features
    """
    return SOURCE.load_file(dataset, None, filename, parent)
