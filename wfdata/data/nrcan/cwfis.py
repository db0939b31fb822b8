"""
Functions to access wildfire data from the Canadian Wildland Fire Information System
----------
The Canadian Wildland Fire Information System (CWFIS), operated by Natural Resources
Canada, publishes active fires, satellite hotspots, historical fire perimeters and
points, fire danger ratings, and fire weather stations via a GeoServer WFS 2.0
service.

Queries support a CQL filter, property selection, a feature count (limit), a
bounding box, a start index (offset), and sort order. When the server reports that
more features match a query than it returned, the result is marked as truncated.
WFS exception reports are raised as BackendErrors.
----------
Catalog:
    datasets        - Returns the collections, optionally filtered by category
    dataset         - Returns the descriptor of a collection
    info            - Returns a description of a collection

Queries:
    query_url       - Returns the GetFeature URL for a query
    download        - Downloads a collection as a FeatureCollection
    count           - Returns the number of features matching a query
    fields          - Returns the properties of a collection

Local files:
    download_file   - Saves a collection to a local GeoJSON file
    load_file       - Loads a saved collection
"""

from __future__ import annotations

import typing

from wfdata.config import DEFAULT_TIMEOUT
from wfdata.data._core import Dataset, Query, Registry, Source
from wfdata.data._core.protocols import WFS

if typing.TYPE_CHECKING:
    from pathlib import Path
    from typing import Optional

    from wfdata.data._core import FeatureCollection
    from wfdata.typing import BBox, Fields, Pathlike, timeout

WFS_BASE = "https://cwfis.cfs.nrcan.gc.ca/geoserver/public/wfs"

# id, type name, name, description, category, geometry
_COLLECTIONS = [
    (
        "active_fires",
        "public:activefires_current",
        "Active Fires (Current)",
        "Current active wildland fires in Canada with size, agency, and stage of "
        "control.",
        "current",
        "point",
    ),
    (
        "reported_fires",
        "public:reportedfires_ytd",
        "Reported Fires (Year-to-Date)",
        "All reported fires in Canada for the current year with cause and control "
        "status.",
        "current",
        "point",
    ),
    (
        "hotspots",
        "public:hotspots",
        "Satellite Hotspots",
        "Satellite-detected fire hotspots with Fire Weather Index (FWI) components "
        "and fire behavior estimates.",
        "detection",
        "point",
    ),
    (
        "hotspots_24h",
        "public:hotspots_24h",
        "Satellite Hotspots (Last 24 Hours)",
        "Satellite-detected fire hotspots from the last 24 hours.",
        "detection",
        "point",
    ),
    (
        "fire_perimeters",
        "public:nbac",
        "National Burned Area Composite",
        "National Burned Area Composite (NBAC) fire perimeter polygons "
        "(1972-present).",
        "archive",
        "polygon",
    ),
    (
        "fire_points",
        "public:NFDB_point",
        "National Fire Database Points",
        "National Fire Database (NFDB) fire point locations for large fires >= 200 "
        "hectares (1970-present).",
        "archive",
        "point",
    ),
    (
        "fire_danger",
        "public:fdr_current_shp",
        "Fire Danger Rating (Current)",
        "Current fire danger rating polygons across Canada.",
        "weather",
        "polygon",
    ),
    (
        "weather_stations",
        "public:firewx_stns",
        "Fire Weather Stations",
        "Reporting weather stations with current observations and FWI components.",
        "weather",
        "point",
    ),
]

REGISTRY = Registry(
    "CWFIS",
    [
        Dataset(
            id=id,
            source="CWFIS",
            root=WFS_BASE,
            resource=type_name,
            name=name,
            description=description,
            category=category,
            geometry=geometry,
        )
        for id, type_name, name, description, category, geometry in _COLLECTIONS
    ],
)
SOURCE = Source(REGISTRY, WFS(), "CWFIS GeoServer")


def datasets(category: Optional[str] = None) -> list[Dataset]:
    """
    Returns the CWFIS collections
    ----------
    datasets()
    datasets(category)
    Returns the collection descriptors, optionally filtered by category. Supported
    categories are "current", "detection", "archive", and "weather".
    """
    return SOURCE.datasets(category)


def dataset(id: str) -> Dataset:
    return SOURCE.dataset(id)


def info(id: str) -> str:
    return SOURCE.info(id)


def _query(cql_filter, fields, limit, bbox, offset, sortby) -> Query:
    return Query(
        where=cql_filter,
        fields=fields,
        limit=limit,
        bbox=bbox,
        offset=offset,
        sortby=sortby,
    )


def query_url(
    collection: str,
    *,
    cql_filter: Optional[str] = None,
    fields: Fields = "*",
    limit: Optional[int] = None,
    bbox: Optional[BBox | str] = None,
    offset: Optional[int] = None,
    sortby: Optional[str] = None,
) -> str:
    "Returns the WFS GetFeature URL for a CWFIS collection"
    query = _query(cql_filter, fields, limit, bbox, offset, sortby)
    return SOURCE.query_url(collection, query)


def download(
    collection: str,
    *,
    cql_filter: Optional[str] = None,
    fields: Fields = "*",
    limit: Optional[int] = None,
    bbox: Optional[BBox | str] = None,
    offset: Optional[int] = None,
    sortby: Optional[str] = None,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> FeatureCollection:
    """
    Downloads a CWFIS collection as a FeatureCollection
    ----------
    download(collection)
    Downloads the features in a collection, in EPSG:4326.

    download(..., *, cql_filter)
    download(..., *, fields)
    Filters the features using a CQL expression (for example, "hectares > 1000"),
    and only returns the indicated properties.

    download(..., *, limit)
    download(..., *, offset)
    download(..., *, sortby)
    Returns at most `limit` features (WFS count), skips the first `offset` features
    (WFS startIndex), and sorts the features (for example, "hectares DESC").

    download(..., *, bbox)
    Only returns features within a (west, south, east, north) bounding box.
    ----------
    Inputs:
        collection: A CWFIS collection ID
        cql_filter: A CQL filter expression
        fields: "*" or a list of property names
        limit: The maximum number of features to return
        bbox: A (west, south, east, north) bounding box in EPSG:4326
        offset: The number of features to skip
        sortby: A WFS sortBy expression
        timeout: The maximum time in seconds to connect with the server

    Outputs:
        FeatureCollection: The downloaded features
    """
    query = _query(cql_filter, fields, limit, bbox, offset, sortby)
    return SOURCE.fetch(collection, query, timeout)


def count(
    collection: str,
    *,
    cql_filter: Optional[str] = None,
    bbox: Optional[BBox | str] = None,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> int:
    "Returns the number of features in a CWFIS collection that match a query"
    return SOURCE.count(collection, Query(where=cql_filter, bbox=bbox), timeout)


def fields(
    collection: str, *, timeout: timeout = DEFAULT_TIMEOUT
) -> list[tuple[str, str, str]]:
    "Returns the (name, type, alias) of each property in a CWFIS collection"
    return SOURCE.fields(collection, timeout)


def download_file(
    collection: str,
    *,
    filename: Optional[str] = None,
    parent: Optional[Pathlike] = None,
    force: bool = False,
    cql_filter: Optional[str] = None,
    fields: Fields = "*",
    limit: Optional[int] = None,
    bbox: Optional[BBox | str] = None,
    offset: Optional[int] = None,
    sortby: Optional[str] = None,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> Path:
    "Saves a CWFIS collection to a local GeoJSON file, unless the file already exists"
    query = _query(cql_filter, fields, limit, bbox, offset, sortby)
    return SOURCE.download_file(collection, query, filename, parent, force, timeout)


def load_file(
    collection: str,
    *,
    filename: Optional[str] = None,
    parent: Optional[Pathlike] = None,
) -> FeatureCollection:
    "Loads a saved CWFIS collection. Raises a DataFileNotFoundError if it was not saved"
    return SOURCE.load_file(collection, None, filename, parent)
