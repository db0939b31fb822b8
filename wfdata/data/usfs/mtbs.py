"""
Functions to access burn severity data from Monitoring Trends in Burn Severity
----------
The Monitoring Trends in Burn Severity (MTBS) program maps the burn severity and
extent of large fires across the United States from 1984 to present (fires larger
than 1000 acres in the west, and 500 acres in the east). This module queries the
MTBS fire occurrence points and burned area boundaries via the USDA Forest Service
EDW MapServer, and can also download the complete datasets as zipped shapefiles or
geodatabases.

The MapServer returns at most 2000 records per request, and does not report when a
result was capped. Results with 2000 records are therefore marked as truncated.
Use `count` to check the size of a query before downloading it, and use the
complete archives when you need every record.
----------
Catalog:
    datasets        - Returns the queryable datasets, optionally filtered by category
    dataset         - Returns the descriptor of a dataset
    info            - Returns a description of a dataset
    archives        - Returns the descriptors of the downloadable archives

Queries:
    query_url       - Returns the query URL for a dataset
    download        - Downloads a dataset as a FeatureCollection
    count           - Returns the number of features matching a query
    fields          - Returns the (name, type, alias) of each field in a dataset

Local files:
    download_file       - Saves a dataset to a local GeoJSON file
    load_file           - Loads a saved dataset
    download_archive    - Streams a complete zipped dataset to disk

Convenience:
    fires           - Fire occurrence points filtered by year, size, and type
    boundaries      - Burned area boundaries filtered by year and size
    largest_fires   - The largest fires by acreage

Constants:
    YEARS           - The years covered by MTBS
    CEILING         - The maximum number of records per MapServer request
"""

from __future__ import annotations

import typing

import wfdata._validate as validate
from wfdata.config import DEFAULT_TIMEOUT
from wfdata.data._core import Dataset, Query, Registry, Source
from wfdata.data._core.protocols import ArcGIS, StaticFile

if typing.TYPE_CHECKING:
    from pathlib import Path
    from typing import Optional

    from wfdata.data._core import FeatureCollection
    from wfdata.typing import BBox, Fields, Pathlike, timeout

MAPSERVER_BASE = "https://apps.fs.usda.gov/arcx/rest/services/EDW"
DOWNLOAD_BASE = "https://data.fs.usda.gov/geodata/edw"
YEARS = range(1984, 2025)
CEILING = 2000
SERVERS = "USDA Forest Service EDW"

REGISTRY = Registry(
    "MTBS",
    [
        Dataset(
            id="fire_occurrence",
            source="MTBS",
            root=MAPSERVER_BASE,
            resource="EDW_MTBS_01",
            name="Fire Occurrence Locations (All Years)",
            description=(
                "Point locations of all inventoried MTBS fires from 1984 to present. "
                "Includes fire name, date, acres, and burn severity assessment data."
            ),
            category="occurrence",
            geometry="point",
            layer=62,
            server="MapServer",
            ceiling=CEILING,
        ),
        Dataset(
            id="burn_boundaries",
            source="MTBS",
            root=MAPSERVER_BASE,
            resource="EDW_MTBS_01",
            name="Burned Area Boundaries (All Years)",
            description=(
                "Polygon boundaries of burned areas from 1984 to present. Includes "
                "fire perimeters with burn severity thresholds."
            ),
            category="boundaries",
            geometry="polygon",
            layer=63,
            server="MapServer",
            ceiling=CEILING,
        ),
    ],
)
SOURCE = Source(REGISTRY, ArcGIS(), SERVERS)


def _archive(id, resource, name, description, geometry) -> Dataset:
    return Dataset(
        id=id,
        source="MTBS",
        root=DOWNLOAD_BASE,
        resource=resource,
        name=name,
        description=description,
        category="archive",
        geometry=geometry,
        extension="zip",
        archive=True,
    )


ARCHIVES = Registry(
    "MTBS",
    [
        _archive(
            "burn_boundaries_shp",
            "edw_resources/shp/S_USA.MTBS_BURN_AREA_BOUNDARY.zip",
            "Burned Area Boundaries (shapefile)",
            "Burn area boundaries shapefile (~374 MB)",
            "polygon",
        ),
        _archive(
            "burn_boundaries_gdb",
            "edw_resources/fc/S_USA.MTBS_BURN_AREA_BOUNDARY.gdb.zip",
            "Burned Area Boundaries (geodatabase)",
            "Burn area boundaries geodatabase (~158 MB)",
            "polygon",
        ),
        _archive(
            "fire_occurrence_shp",
            "edw_resources/shp/S_USA.MTBS_FIRE_OCCURRENCE_PT.zip",
            "Fire Occurrence Locations (shapefile)",
            "Fire occurrence points shapefile (~3 MB)",
            "point",
        ),
        _archive(
            "fire_occurrence_gdb",
            "edw_resources/fc/S_USA.MTBS_FIRE_OCCURRENCE_PT.gdb.zip",
            "Fire Occurrence Locations (geodatabase)",
            "Fire occurrence points geodatabase (~2 MB)",
            "point",
        ),
    ],
)
ARCHIVE_SOURCE = Source(ARCHIVES, StaticFile(), SERVERS)


#####
# Catalog
#####


def datasets(category: Optional[str] = None) -> list[Dataset]:
    """
    Returns the queryable MTBS datasets
    ----------
    datasets()
    datasets(category)
    Returns the MapServer dataset descriptors, optionally filtered by category.
    Supported categories are "occurrence" and "boundaries". Use `archives` to list
    the complete downloadable datasets.
    """
    return SOURCE.datasets(category)


def dataset(id: str) -> Dataset:
    "Returns the descriptor of an MTBS dataset"
    return SOURCE.dataset(id)


def info(id: str) -> str:
    "Returns a description of an MTBS dataset or archive"
    if id in ARCHIVES:
        return ARCHIVE_SOURCE.info(id)
    return SOURCE.info(id)


def archives() -> list[Dataset]:
    "Returns the descriptors of the complete MTBS datasets available for download"
    return ARCHIVE_SOURCE.datasets()


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
    "Returns the MapServer query URL for an MTBS dataset"
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
    Downloads an MTBS dataset as a FeatureCollection
    ----------
    download(dataset, **options)
    Downloads the features matching the query options. Supports the same options as
    `wfigs.download`. Common fields include FIRE_NAME, YEAR, ACRES, FIRE_TYPE,
    IG_DATE, and MTBS_ID. For example:

        download("burn_boundaries", where="ACRES > 10000", limit=50)

    The MapServer returns at most 2000 features per request. A result with 2000
    features is marked as truncated, even if the query matched exactly 2000
    features. Use `count` to check.
    ----------
    Inputs:
        dataset: "fire_occurrence" or "burn_boundaries"
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
    "Returns the number of features in an MTBS dataset that match a query"
    return SOURCE.count(dataset, Query(where=where, bbox=bbox), timeout)


def fields(
    dataset: str, *, timeout: timeout = DEFAULT_TIMEOUT
) -> list[tuple[str, str, str]]:
    "Returns the (name, type, alias) of each field in an MTBS dataset"
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
    "Saves an MTBS dataset to a local GeoJSON file, unless the file already exists"
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
    "Loads a saved MTBS dataset. Raises a DataFileNotFoundError if it was not saved"
    return SOURCE.load_file(dataset, None, filename, parent)


def download_archive(
    key: str,
    *,
    filename: Optional[str] = None,
    parent: Optional[Pathlike] = None,
    force: bool = False,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> Path:
    """
    Streams a complete MTBS dataset to disk
    ----------
    download_archive(key)
    Downloads a zipped shapefile or geodatabase of a complete MTBS dataset, and
    returns the path to the saved zip file. Supported keys are
    "burn_boundaries_shp", "burn_boundaries_gdb", "fire_occurrence_shp", and
    "fire_occurrence_gdb". The archive is streamed straight to disk without being
    parsed. If the file already exists, returns its path without downloading.

    download_archive(..., *, filename, parent, force)
    Specifies the name and folder of the saved file. Use `force=True` to replace an
    existing file.
    ----------
    Inputs:
        key: The key of an MTBS archive
        filename: The name of the saved file
        parent: The folder in which to save the file
        force: True to replace an existing file
        timeout: The maximum time in seconds to connect with the server

    Outputs:
        Path: The path to the saved archive
    """
    return ARCHIVE_SOURCE.download_file(
        key, Query(), filename, parent, force, timeout
    )


#####
# Convenience
#####


def _where(
    year: Optional[int] = None,
    min_acres: Optional[float] = None,
    max_acres: Optional[float] = None,
    fire_type: Optional[str] = None,
) -> str:
    "Builds a where clause from optional filters"

    conditions = []
    if year is not None:
        year = validate.integer(year, "year")
        conditions.append(f"YEAR = {year}")
    if min_acres is not None:
        min_acres = validate.real(min_acres, "min_acres")
        conditions.append(f"ACRES >= {min_acres}")
    if max_acres is not None:
        max_acres = validate.real(max_acres, "max_acres")
        conditions.append(f"ACRES <= {max_acres}")
    if fire_type is not None:
        fire_type = validate.string(fire_type, "fire_type").replace("'", "''")
        conditions.append(f"FIRE_TYPE = '{fire_type}'")
    if not conditions:
        return "1=1"
    return " AND ".join(conditions)


def fires(
    *,
    year: Optional[int] = None,
    min_acres: Optional[float] = None,
    max_acres: Optional[float] = None,
    fire_type: Optional[str] = None,
    limit: int = 1000,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> FeatureCollection:
    """
    Returns MTBS fire occurrence points matching optional filters
    ----------
    fires(*, year, min_acres, max_acres, fire_type, limit)
    Returns up to `limit` fire occurrence points (default 1000). Filters by ignition
    year, minimum and maximum size in acres, and fire type (for example, "Wildfire"
    or "Prescribed Fire").
    ----------
    Inputs:
        year: A fire year
        min_acres: The minimum fire size in acres
        max_acres: The maximum fire size in acres
        fire_type: An MTBS fire type
        limit: The maximum number of fires to return
        timeout: The maximum time in seconds to connect with the server

    Outputs:
        FeatureCollection: The matching fires
    """
    where = _where(year, min_acres, max_acres, fire_type)
    return download("fire_occurrence", where=where, limit=limit, timeout=timeout)


def boundaries(
    *,
    year: Optional[int] = None,
    min_acres: Optional[float] = None,
    max_acres: Optional[float] = None,
    limit: int = 100,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> FeatureCollection:
    "Returns up to `limit` burned area boundaries filtered by year and size in acres"
    where = _where(year, min_acres, max_acres)
    return download("burn_boundaries", where=where, limit=limit, timeout=timeout)


def largest_fires(
    n: int = 100,
    *,
    year: Optional[int] = None,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> FeatureCollection:
    """
    Returns the largest MTBS fires by acreage
    ----------
    largest_fires(n)
    largest_fires(n, *, year)
    Returns the n largest fires, sorted by decreasing acreage. The fires are sorted
    by the server, so n may not exceed the 2000 record ceiling. Optionally only
    considers fires in the indicated year.
    ----------
    Inputs:
        n: The number of fires to return
        year: A fire year
        timeout: The maximum time in seconds to connect with the server

    Outputs:
        FeatureCollection: The largest fires
    """
    n = validate.positive(n, "n")
    validate.inrange(n, "n", 1, CEILING)
    return download(
        "fire_occurrence",
        where=_where(year),
        sortby="ACRES DESC",
        limit=n,
        timeout=timeout,
    )
