"""
Functions to access fire and smoke products from the NOAA Hazard Mapping System
----------
The NOAA Hazard Mapping System (HMS) is an analyst-reviewed product that combines
fire detections from the MODIS, VIIRS, GOES, and AVHRR sensors, and outlines smoke
plumes visible in satellite imagery. HMS publishes one file per product per day:
fire points as CSV text files (from 2003), and smoke polygons as zipped shapefiles
(from 2005).

Fire points are loaded as Tables with the columns Lon, Lat, YearDay, Time,
Satellite, Method, Ecosystem, and FRP. Fire radiative power (FRP) is reported as
-999 when it is not available, and these values are replaced with NaN. Smoke
polygon shapefiles are saved to disk without being parsed.
----------
Catalog:
    datasets        - Returns the HMS products
    dataset         - Returns the descriptor of a product
    info            - Returns a description of a product

Fire points:
    download_url    - Returns the archive URL of a product on a date
    download        - Downloads the fire points for a date
    download_file   - Saves the fire points for a date as a CSV file
    load_file       - Loads saved fire points

Smoke:
    download_smoke  - Saves the zipped smoke polygon shapefile for a date
"""

from __future__ import annotations

import datetime
import typing

from wfdata.config import DEFAULT_TIMEOUT
from wfdata.data._core import Dataset, Query, Registry, Source
from wfdata.data._core.protocols import DailyArchive

if typing.TYPE_CHECKING:
    from pathlib import Path
    from typing import Optional

    from wfdata.data._core import Table
    from wfdata.typing import Datelike, Fields, Pathlike, timeout

ARCHIVE_BASE = "https://satepsanone.nesdis.noaa.gov/pub/FIRE/web/HMS"
COLUMNS = ("Lon", "Lat", "YearDay", "Time", "Satellite", "Method", "Ecosystem", "FRP")

REGISTRY = Registry(
    "HMS",
    [
        Dataset(
            id="fire_points",
            source="HMS",
            root=ARCHIVE_BASE,
            resource="Fire_Points/Text",
            name="Fire Points",
            description=(
                "Satellite-detected fire locations from MODIS, VIIRS, GOES, and AVHRR "
                "sensors. Quality-controlled by NOAA analysts."
            ),
            category="fire",
            geometry="point",
            prefix="hms_fire",
            extension="txt",
            columns=COLUMNS,
            sentinels=("FRP",),
            start=datetime.date(2003, 1, 1),
        ),
        Dataset(
            id="smoke_polygons",
            source="HMS",
            root=ARCHIVE_BASE,
            resource="Smoke_Polygons/Shapefile",
            name="Smoke Polygons",
            description=(
                "Analyst-drawn smoke plume polygons with density classification "
                "(light, medium, heavy)."
            ),
            category="smoke",
            geometry="polygon",
            prefix="hms_smoke",
            extension="zip",
            start=datetime.date(2005, 1, 1),
            archive=True,
        ),
    ],
)
SOURCE = Source(REGISTRY, DailyArchive(), "NOAA HMS archive")


def datasets(category: Optional[str] = None) -> list[Dataset]:
    "Returns the HMS products, optionally filtered by category (fire or smoke)"
    return SOURCE.datasets(category)


def dataset(id: str) -> Dataset:
    return SOURCE.dataset(id)


def info(id: str) -> str:
    return SOURCE.info(id)


def download_url(product: str, date: Datelike) -> str:
    """
    Returns the archive URL of an HMS product on a date
    ----------
    download_url(product, date)
    Returns the URL of the daily file for "fire_points" or "smoke_polygons". The
    date may be a datetime.date or a "YYYY-MM-DD" string. Raises a ValueError if
    the date precedes the start of the product's archive.
    ----------
    Inputs:
        product: "fire_points" or "smoke_polygons"
        date: The date of the daily file

    Outputs:
        str: The URL of the daily file
    """
    return SOURCE.query_url(product, Query(date=date))


def download(
    date: Datelike,
    *,
    fields: Fields = "*",
    timeout: timeout = DEFAULT_TIMEOUT,
) -> Table:
    """
    Downloads HMS fire points for a date
    ----------
    download(date)
    Downloads and parses the fire points for the indicated date. FRP values of -999
    are replaced with NaN.

    download(..., *, fields)
    Only returns the indicated columns. Raises a ValueError if a column does not
    exist.

    download(..., *, timeout)
    Specifies a maximum time in seconds for connecting to the HMS archive.
    ----------
    Inputs:
        date: A datetime.date or "YYYY-MM-DD" string
        fields: "*" or a list of column names
        timeout: The maximum time in seconds to connect with the server

    Outputs:
        Table: The fire points
    """
    return SOURCE.fetch("fire_points", Query(date=date, fields=fields), timeout)


def download_file(
    date: Datelike,
    *,
    filename: Optional[str] = None,
    parent: Optional[Pathlike] = None,
    force: bool = False,
    fields: Fields = "*",
    timeout: timeout = DEFAULT_TIMEOUT,
) -> Path:
    """
    Saves HMS fire points for a date as a CSV file
    ----------
    download_file(date)
    download_file(..., *, filename, parent, force)
    Saves the parsed fire points as "hms_fire<YYYYMMDD>.csv" in the HMS data
    folder, unless the file already exists. Use `force=True` to replace an
    existing file.
    """
    query = Query(date=date, fields=fields)
    return SOURCE.download_file(
        "fire_points", query, filename, parent, force, timeout
    )


def load_file(
    date: Datelike,
    *,
    filename: Optional[str] = None,
    parent: Optional[Pathlike] = None,
) -> Table:
    "Loads saved HMS fire points. Raises a DataFileNotFoundError if they were not saved"
    return SOURCE.load_file("fire_points", Query(date=date), filename, parent)


def download_smoke(
    date: Datelike,
    *,
    filename: Optional[str] = None,
    parent: Optional[Pathlike] = None,
    force: bool = False,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> Path:
    """
    Saves the HMS smoke polygons for a date
    ----------
    download_smoke(date)
    Streams the zipped smoke polygon shapefile for the date to
    "hms_smoke<YYYYMMDD>.zip" in the HMS data folder, and returns its path. The
    shapefile is not parsed. If the file already exists, returns its path without
    downloading.

    download_smoke(..., *, filename, parent, force)
    Specifies the name and folder of the saved file. Use `force=True` to replace an
    existing file.
    ----------
    Inputs:
        date: A datetime.date or "YYYY-MM-DD" string
        filename: The name of the saved file
        parent: The folder in which to save the file
        force: True to replace an existing file
        timeout: The maximum time in seconds to connect with the server

    Outputs:
        Path: The path to the saved shapefile archive
    """
    return SOURCE.download_file(
        "smoke_polygons", Query(date=date), filename, parent, force, timeout
    )
