"""
Functions to access satellite fire perimeters from the FEDS algorithm
----------
The Fire Event Data Suite (FEDS) algorithm tracks fire perimeters, active fire
lines, and new fire pixels from VIIRS satellite detections. FEDS outputs are
published by NASA's Earth Information System via the VEDA OGC API Features service.
Collections include a rolling ~20-day snapshot of all fires, current-year large fires
(>5 km²), and an archive of large fires in the western US (2018-2021).

Queries support a CQL filter, field selection, a record limit, a bounding box,
pagination, sort order, and an ISO-8601 datetime interval. When a query matches more
features than the server returned, the result is marked as truncated, and you can
page through the remaining features using `offset`.
----------
Catalog:
    datasets        - Returns the collections, optionally filtered by category
    dataset         - Returns the descriptor of a collection
    info            - Returns a description of a collection

Queries:
    query_url       - Returns the items URL for a query
    download        - Downloads a collection as a FeatureCollection
    count           - Returns the number of features matching a query
    fields          - Returns the queryable fields of a collection

Local files:
    download_file   - Saves a collection to a local GeoJSON file
    load_file       - Loads a saved collection
"""

from __future__ import annotations

import typing

from wfdata.config import DEFAULT_TIMEOUT
from wfdata.data._core import Dataset, Query, Registry, Source
from wfdata.data._core.protocols import OGCFeatures

if typing.TYPE_CHECKING:
    from pathlib import Path
    from typing import Optional

    from wfdata.data._core import FeatureCollection
    from wfdata.typing import BBox, Fields, Pathlike, timeout

API_BASE = "https://openveda.cloud/api/features"
COLLECTIONS_URL = f"{API_BASE}/collections"

# id, collection, name, description, category, geometry
_COLLECTIONS = [
    (
        "snapshot_perimeters",
        "public.eis_fire_snapshot_perimeter_nrt",
        "Snapshot Perimeters (NRT)",
        "Rolling ~20-day snapshot of fire perimeters from near real-time "
        "satellite data.",
        "snapshot",
        "polygon",
    ),
    (
        "snapshot_firelines",
        "public.eis_fire_snapshot_fireline_nrt",
        "Snapshot Fire Lines (NRT)",
        "Rolling ~20-day snapshot of active fire lines from near real-time "
        "satellite data.",
        "snapshot",
        "line",
    ),
    (
        "snapshot_newfirepix",
        "public.eis_fire_snapshot_newfirepix_nrt",
        "Snapshot New Fire Pixels (NRT)",
        "Rolling ~20-day snapshot of newly detected fire pixels from near real-time "
        "satellite data.",
        "snapshot",
        "point",
    ),
    (
        "lf_perimeters",
        "public.eis_fire_lf_perimeter_nrt",
        "Large Fire Perimeters (NRT)",
        "Current-year large fire (>5 km²) perimeters from near real-time "
        "satellite data.",
        "large_fire",
        "polygon",
    ),
    (
        "lf_firelines",
        "public.eis_fire_lf_fireline_nrt",
        "Large Fire Lines (NRT)",
        "Current-year large fire (>5 km²) active fire lines from near real-time "
        "satellite data.",
        "large_fire",
        "line",
    ),
    (
        "lf_newfirepix",
        "public.eis_fire_lf_newfirepix_nrt",
        "Large Fire New Fire Pixels (NRT)",
        "Current-year large fire (>5 km²) newly detected fire pixels from near "
        "real-time satellite data.",
        "large_fire",
        "point",
    ),
    (
        "archive_perimeters",
        "public.eis_fire_lf_perimeter_archive",
        "Archive Perimeters",
        "Archived large fire perimeters for the Western US (2018-2021).",
        "archive",
        "polygon",
    ),
    (
        "archive_firelines",
        "public.eis_fire_lf_fireline_archive",
        "Archive Fire Lines",
        "Archived large fire active fire lines for the Western US (2018-2021).",
        "archive",
        "line",
    ),
    (
        "archive_newfirepix",
        "public.eis_fire_lf_newfirepix_archive",
        "Archive New Fire Pixels",
        "Archived large fire newly detected fire pixels for the Western US "
        "(2018-2021).",
        "archive",
        "point",
    ),
]

REGISTRY = Registry(
    "FEDS",
    [
        Dataset(
            id=id,
            source="FEDS",
            root=COLLECTIONS_URL,
            resource=collection,
            name=name,
            description=description,
            category=category,
            geometry=geometry,
        )
        for id, collection, name, description, category, geometry in _COLLECTIONS
    ],
)
SOURCE = Source(REGISTRY, OGCFeatures(), "NASA VEDA OGC API")


#####
# Catalog
#####


def datasets(category: Optional[str] = None) -> list[Dataset]:
    """
    Returns the FEDS collections
    ----------
    datasets()
    datasets(category)
    Returns the collection descriptors, optionally filtered by category. Supported
    categories are "snapshot", "large_fire", and "archive".
    """
    return SOURCE.datasets(category)


def dataset(id: str) -> Dataset:
    "Returns the descriptor of a FEDS collection"
    return SOURCE.dataset(id)


def info(id: str) -> str:
    "Returns a description of a FEDS collection"
    return SOURCE.info(id)


#####
# Queries
#####


def _query(filter, fields, limit, bbox, offset, sortby, datetime) -> Query:
    return Query(
        where=filter,
        fields=fields,
        limit=limit,
        bbox=bbox,
        offset=offset,
        sortby=sortby,
        datetime=datetime,
    )


def query_url(
    collection: str,
    *,
    filter: Optional[str] = None,
    fields: Fields = "*",
    limit: Optional[int] = None,
    bbox: Optional[BBox | str] = None,
    offset: Optional[int] = None,
    sortby: Optional[str] = None,
    datetime: Optional[str] = None,
) -> str:
    "Returns the OGC API items URL for a FEDS collection"
    query = _query(filter, fields, limit, bbox, offset, sortby, datetime)
    return SOURCE.query_url(collection, query)


def download(
    collection: str,
    *,
    filter: Optional[str] = None,
    fields: Fields = "*",
    limit: Optional[int] = None,
    bbox: Optional[BBox | str] = None,
    offset: Optional[int] = None,
    sortby: Optional[str] = None,
    datetime: Optional[str] = None,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> FeatureCollection:
    """
    Downloads a FEDS collection as a FeatureCollection
    ----------
    download(collection)
    Downloads the features in a collection. The server returns a limited number of
    features per request. If more features match the query, the result is marked
    as truncated.

    download(..., *, filter)
    download(..., *, fields)
    Filters the features using a CQL expression (for example, "farea > 10"), and
    only returns the indicated properties.

    download(..., *, limit)
    download(..., *, offset)
    download(..., *, sortby)
    Returns at most `limit` features, skips the first `offset` features, and sorts
    the features (for example, "-t" for decreasing time).

    download(..., *, bbox)
    download(..., *, datetime)
    Only returns features that intersect a (west, south, east, north) bounding box,
    or whose time is within an ISO-8601 interval (for example,
    "2020-01-01T00:00:00Z/2020-12-31T23:59:59Z").
    ----------
    Inputs:
        collection: A FEDS collection ID
        filter: A CQL filter expression
        fields: "*" or a list of property names
        limit: The maximum number of features to return
        bbox: A (west, south, east, north) bounding box in EPSG:4326
        offset: The number of features to skip
        sortby: A sort expression
        datetime: An ISO-8601 instant or interval
        timeout: The maximum time in seconds to connect with the server

    Outputs:
        FeatureCollection: The downloaded features
    """
    query = _query(filter, fields, limit, bbox, offset, sortby, datetime)
    return SOURCE.fetch(collection, query, timeout)


def count(
    collection: str,
    *,
    filter: Optional[str] = None,
    bbox: Optional[BBox | str] = None,
    datetime: Optional[str] = None,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> int:
    "Returns the number of features in a FEDS collection that match a query"
    query = Query(where=filter, bbox=bbox, datetime=datetime)
    return SOURCE.count(collection, query, timeout)


def fields(
    collection: str, *, timeout: timeout = DEFAULT_TIMEOUT
) -> list[tuple[str, str, str]]:
    "Returns the (name, type, title) of each queryable field in a FEDS collection"
    return SOURCE.fields(collection, timeout)


#####
# Local files
#####


def download_file(
    collection: str,
    *,
    filename: Optional[str] = None,
    parent: Optional[Pathlike] = None,
    force: bool = False,
    filter: Optional[str] = None,
    fields: Fields = "*",
    limit: Optional[int] = None,
    bbox: Optional[BBox | str] = None,
    offset: Optional[int] = None,
    sortby: Optional[str] = None,
    datetime: Optional[str] = None,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> Path:
    """
    Saves a FEDS collection to a local GeoJSON file
    ----------
    download_file(collection, **options)
    download_file(..., *, filename, parent, force)
    Saves the collection as "<collection>.geojson" in the FEDS data folder, unless
    the file already exists. Use `force=True` to replace an existing file.
    """
    query = _query(filter, fields, limit, bbox, offset, sortby, datetime)
    return SOURCE.download_file(collection, query, filename, parent, force, timeout)


def load_file(
    collection: str,
    *,
    filename: Optional[str] = None,
    parent: Optional[Pathlike] = None,
) -> FeatureCollection:
    "Loads a saved FEDS collection. Raises a DataFileNotFoundError if it was not saved"
    return SOURCE.load_file(collection, None, filename, parent)
