"""
Functions to access active fire detections from NASA FIRMS
----------
The Fire Information for Resource Management System (FIRMS) distributes near
real-time (NRT) and standard processing (SP) active fire detections from the MODIS,
VIIRS, and Landsat satellites. NRT detections are available within 3 hours of
satellite observation globally, and in real time for the US and Canada.

The FIRMS API requires a free 32-character MAP_KEY, which you can obtain at
https://firms.modaps.eosdis.nasa.gov/api/map_key/. Set the key using the
FIRMS_MAP_KEY environment variable, or by calling `set_map_key`. Functions that
query the API raise a ConfigurationMissingError before making any request if the
key is not set. The key is never included in logged URLs or error messages.

The API returns CSV files, which this module loads as Tables. Each query covers a
bounding box (or a named region, or the whole world) and a window of 1 to 10 days,
optionally ending on a specific date. The API rate limit is 5000 transactions per
10-minute interval.
----------
MAP_KEY:
    get_map_key         - Returns the configured MAP_KEY
    set_map_key         - Sets the MAP_KEY for the current process
    require_map_key     - Returns the MAP_KEY, or raises an informative error

Catalog:
    datasets            - Returns the satellite sources, optionally by category
    dataset             - Returns the descriptor of a satellite source
    info                - Returns a description of a satellite source
    regions             - Returns the named regions

Queries:
    query_url           - Returns the API URL for a query
    download            - Downloads fire detections as a Table
    data_availability   - Returns the dates available for a satellite source

Local files:
    download_file       - Saves fire detections to a local CSV file
    load_file           - Loads saved fire detections

Convenience:
    recent_fires        - Recent detections with optional confidence filtering
    hotspots_by_date    - Detections grouped by acquisition date

Internal:
    FIRMSArea           - Protocol strategy for the FIRMS area API
"""

from __future__ import annotations

import datetime
import os
import re
import typing
import warnings

import wfdata._validate as validate
from wfdata._utils import redact
from wfdata.config import DEFAULT_TIMEOUT
from wfdata.data._core import Dataset, Query, Registry, Source, Table
from wfdata.data._core.protocols import Protocol
from wfdata.data._core.protocols.archive import read_table
from wfdata.data._core.protocols.base import bbox_string
from wfdata.data._utils import requests
from wfdata.errors import BackendError, HTTPStatusError

if typing.TYPE_CHECKING:
    from pathlib import Path
    from typing import Any, Optional

    import pandas as pd

    from wfdata.typing import BBox, Datelike, Pathlike, timeout

API_BASE = "https://firms.modaps.eosdis.nasa.gov/api"
KEY_VARIABLE = "FIRMS_MAP_KEY"
REGISTER_URL = "https://firms.modaps.eosdis.nasa.gov/api/map_key/"
SERVERS = "NASA FIRMS"
MAX_DAYS = 10

# Named regions. None is the whole world
REGIONS = {
    "world": None,
    "conus": (-125, 24, -66, 50),
    "alaska": (-180, 51, -129, 72),
    "california": (-125, 32, -114, 42),
    "western_us": (-125, 31, -102, 49),
    "eastern_us": (-102, 24, -66, 50),
    "canada": (-141, 41, -52, 84),
    "australia": (112, -44, 154, -10),
    "europe": (-25, 35, 40, 72),
    "amazon": (-82, -20, -34, 13),
    "africa": (-18, -35, 52, 38),
}

_KEY = re.compile(r"^[A-Za-z0-9]{32}$")
_ERRORS = ("Invalid", "Error")


#####
# MAP_KEY
#####


def get_map_key() -> Optional[str]:
    "Returns the MAP_KEY from the FIRMS_MAP_KEY environment variable, or None"
    return os.environ.get(KEY_VARIABLE) or None


def set_map_key(key: str) -> None:
    """
    Sets the FIRMS MAP_KEY for the current process
    ----------
    set_map_key(key)
    Sets the FIRMS_MAP_KEY environment variable. Issues a warning if the key is not
    a 32-character alphanumeric string, but still sets the key.
    ----------
    Inputs:
        key: A FIRMS MAP_KEY
    """
    validate.string(key, "key")
    if not _KEY.match(key):
        warnings.warn("The FIRMS MAP_KEY should be a 32-character alphanumeric string")
    os.environ[KEY_VARIABLE] = key


def require_map_key() -> str:
    "Returns the MAP_KEY. Raises a ConfigurationMissingError if it is not set"
    return validate.credential(
        get_map_key(),
        "The FIRMS MAP_KEY is not configured. To use the FIRMS API, you need a "
        "free MAP_KEY:\n"
        f"  1. Register at: {REGISTER_URL}\n"
        '  2. Set it via: wfdata.data.nasa.firms.set_map_key("your-key")\n'
        f"     or set the {KEY_VARIABLE} environment variable",
    )


#####
# Protocol
#####


class FIRMSArea(Protocol):
    "Strategy for the FIRMS area CSV API"

    name = "FIRMS area API"
    supports = frozenset({"bbox", "days", "date"})
    format = "text"

    def _build_url(self, dataset: Dataset, query: Query) -> str:
        key = require_map_key()
        days = 1 if query.days is None else query.days
        validate.inrange(days, "days", 1, MAX_DAYS)
        area = "world" if query.bbox is None else bbox_string(query.bbox)
        url = f"{dataset.root}/area/csv/{key}/{dataset.resource}/{area}/{days}"
        if query.date is not None:
            url += f"/{query.date.isoformat()}"
        return url

    def default_filename(self, dataset: Dataset, query: Query) -> str:
        date = query.date or datetime.date.today()
        return f"{dataset.id}_{date:%Y%m%d}.csv"

    def redact(self, text: str) -> str:
        return redact(text, get_map_key())

    def detect_error(self, payload: Any) -> Optional[str]:
        text = payload.strip()
        if text.startswith(_ERRORS) or "exceeded" in text:
            return self.redact(text)
        return None

    def decode(self, payload: Any, dataset: Dataset, query: Query) -> Table:
        return Table(read_table(payload))


#####
# Registry
#####


def _dataset(id, description, start, category) -> Dataset:
    return Dataset(
        id=id,
        source="FIRMS",
        root=API_BASE,
        resource=id,
        name=id,
        description=description,
        category=category,
        geometry="point",
        start=datetime.date.fromisoformat(start),
    )


REGISTRY = Registry(
    "FIRMS",
    [
        _dataset(
            "MODIS_NRT",
            "MODIS Collection 6.1 Near Real-Time (Aqua/Terra satellites)",
            "2000-11-01",
            "NRT",
        ),
        _dataset(
            "MODIS_SP",
            "MODIS Collection 6.1 Standard Processing (science quality)",
            "2000-11-01",
            "SP",
        ),
        _dataset(
            "VIIRS_SNPP_NRT", "VIIRS 375m S-NPP Near Real-Time", "2012-01-20", "NRT"
        ),
        _dataset(
            "VIIRS_SNPP_SP", "VIIRS 375m S-NPP Standard Processing", "2012-01-20", "SP"
        ),
        _dataset(
            "VIIRS_NOAA20_NRT", "VIIRS 375m NOAA-20 Near Real-Time", "2018-04-01", "NRT"
        ),
        _dataset(
            "VIIRS_NOAA20_SP",
            "VIIRS 375m NOAA-20 Standard Processing",
            "2018-04-01",
            "SP",
        ),
        _dataset(
            "VIIRS_NOAA21_NRT", "VIIRS 375m NOAA-21 Near Real-Time", "2024-01-17", "NRT"
        ),
        _dataset(
            "LANDSAT_NRT",
            "Landsat 8/9 30m Near Real-Time (US/Canada only)",
            "2022-06-20",
            "NRT",
        ),
    ],
)
SOURCE = Source(REGISTRY, FIRMSArea(), SERVERS)


#####
# Catalog
#####


def datasets(category: Optional[str] = None) -> list[Dataset]:
    """
    Returns the FIRMS satellite sources
    ----------
    datasets()
    datasets(category)
    Returns the descriptors of the satellite sources, optionally filtered by
    category. Supported categories are "NRT" (near real-time) and "SP" (standard
    processing).
    """
    return SOURCE.datasets(category)


def dataset(id: str) -> Dataset:
    return SOURCE.dataset(id)


def info(id: str) -> str:
    return SOURCE.info(id)


def regions() -> dict[str, Optional[BBox]]:
    "Returns the named regions and their (west, south, east, north) bounding boxes"
    return dict(REGIONS)


#####
# Queries
#####


def _query(
    region: Optional[str],
    bbox: Optional[BBox | str],
    days: int,
    date: Optional[Datelike],
) -> Query:
    "Builds a FIRMS query from a region or bounding box"

    if region is not None:
        if bbox is not None:
            raise ValueError("You cannot specify both a region and a bbox")
        region = validate.option(region, "region", list(REGIONS))
        bbox = REGIONS[region]
    validate.integer(days, "days")
    validate.inrange(days, "days", 1, MAX_DAYS)
    return Query(bbox=bbox, days=days, date=date)


def query_url(
    source: str,
    *,
    region: Optional[str] = None,
    bbox: Optional[BBox | str] = None,
    days: int = 1,
    date: Optional[Datelike] = None,
) -> str:
    """
    Returns the FIRMS API URL for a query
    ----------
    query_url(source, **options)
    Returns the area API URL for the query. See `download` for the query options.
    The URL includes your MAP_KEY, so avoid sharing it. Raises a
    ConfigurationMissingError if the MAP_KEY is not set.
    """
    return SOURCE.query_url(source, _query(region, bbox, days, date))


def download(
    source: str,
    *,
    region: Optional[str] = None,
    bbox: Optional[BBox | str] = None,
    days: int = 1,
    date: Optional[Datelike] = None,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> Table:
    """
    Downloads FIRMS fire detections
    ----------
    download(source)
    Downloads the last day of fire detections from the satellite source, for the
    whole world.

    download(..., *, region)
    download(..., *, bbox)
    Only returns detections within a named region (see `regions`), or within a
    (west, south, east, north) bounding box in decimal degrees. You may not use
    both options.

    download(..., *, days)
    download(..., *, date)
    Returns detections from a window of 1 to 10 days. By default, the window ends
    at the most recent data. Use `date` to return historical detections starting
    on the indicated date.

    download(..., *, timeout)
    Specifies a maximum time in seconds for connecting to the FIRMS server.
    ----------
    Inputs:
        source: A FIRMS satellite source (for example, "VIIRS_NOAA20_NRT")
        region: A named region
        bbox: A (west, south, east, north) bounding box in EPSG:4326
        days: The number of days to query (1 to 10)
        date: The date of a historical query
        timeout: The maximum time in seconds to connect with the server

    Outputs:
        Table: The fire detections
    """
    return SOURCE.fetch(source, _query(region, bbox, days, date), timeout)


def data_availability(
    source: str = "VIIRS_NOAA20_NRT", *, timeout: timeout = DEFAULT_TIMEOUT
) -> pd.DataFrame:
    """
    Returns the dates available for a FIRMS satellite source
    ----------
    data_availability(source)
    Returns a DataFrame with the range of dates available for the source.
    ----------
    Inputs:
        source: A FIRMS satellite source
        timeout: The maximum time in seconds to connect with the server

    Outputs:
        pandas.DataFrame: The data availability of the source
    """

    dataset = SOURCE.dataset(source)
    key = require_map_key()
    url = f"{API_BASE}/data_availability/csv/{key}/{dataset.resource}"
    response = requests.response(url, {}, timeout, SERVERS)
    status = response.status_code
    if not 200 <= status < 300:
        display = redact(url, key)
        raise HTTPStatusError(
            f'Could not check data availability for the FIRMS "{dataset.id}" '
            f"dataset. The server responded with HTTP status {status}.\n"
            f"URL: {display}",
            status,
            display,
            dataset.id,
        )
    message = SOURCE.protocol.detect_error(response.text)
    if message is not None:
        raise BackendError(
            f'Could not check data availability for the FIRMS "{dataset.id}" '
            f"dataset. The server reported: {message}\n"
            f"URL: {redact(url, key)}",
            dataset.id,
        )
    return read_table(response.text)


#####
# Local files
#####


def download_file(
    source: str,
    *,
    filename: Optional[str] = None,
    parent: Optional[Pathlike] = None,
    force: bool = False,
    region: Optional[str] = None,
    bbox: Optional[BBox | str] = None,
    days: int = 1,
    date: Optional[Datelike] = None,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> Path:
    """
    Saves FIRMS fire detections to a local CSV file
    ----------
    download_file(source, **options)
    Downloads fire detections and saves them as "<source>_<YYYYMMDD>.csv" in the
    FIRMS data folder. The date is the query date, or today if the query does not
    have a date. If the file already exists, returns its path without making a
    request. Accepts the same query options as `download`.

    download_file(..., *, filename, parent, force)
    Specifies the name and folder of the saved file. Use `force=True` to replace an
    existing file.
    """
    query = _query(region, bbox, days, date)
    return SOURCE.download_file(source, query, filename, parent, force, timeout)


def load_file(
    source: str,
    *,
    date: Optional[Datelike] = None,
    filename: Optional[str] = None,
    parent: Optional[Pathlike] = None,
) -> Table:
    """
    Loads saved FIRMS fire detections
    ----------
    load_file(source)
    load_file(source, *, date)
    Loads the "<source>_<YYYYMMDD>.csv" file saved by `download_file`. The date
    defaults to today. Raises a DataFileNotFoundError if the file does not exist.

    load_file(..., *, filename, parent)
    Loads a file with a custom name or folder.
    """
    return SOURCE.load_file(source, Query(date=date), filename, parent)


#####
# Convenience
#####


def recent_fires(
    source: str = "VIIRS_NOAA20_NRT",
    *,
    region: str = "conus",
    days: int = 1,
    min_confidence: Optional[float] = None,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> Table:
    """
    Returns recent fire detections
    ----------
    recent_fires(source, *, region, days)
    Returns the detections from the last `days` days within a named region.

    recent_fires(..., *, min_confidence)
    Only returns detections whose confidence is at least the indicated value. MODIS
    reports numeric confidence (0-100), and the filter is applied to numeric
    confidence only. VIIRS reports categorical confidence ("l", "n", "h"), which is
    not filtered.
    """

    table = download(source, region=region, days=days, timeout=timeout)
    data = table.data
    if (
        min_confidence is not None
        and "confidence" in data.columns
        and data["confidence"].dtype.kind in "iuf"
    ):
        data = data[data["confidence"] >= min_confidence].reset_index(drop=True)
    return Table(data, table.truncated)


def hotspots_by_date(
    source: str = "VIIRS_NOAA20_NRT",
    *,
    region: str = "conus",
    days: int = 7,
    timeout: timeout = DEFAULT_TIMEOUT,
) -> dict[str, pd.DataFrame]:
    """Returns the detections from the last `days` days grouped by acquisition
    date. Returns {"all": data} if the detections do not have an acq_date column"""

    data = download(source, region=region, days=days, timeout=timeout).data
    if "acq_date" not in data.columns:
        return {"all": data}
    return {
        str(date): group.reset_index(drop=True)
        for date, group in data.groupby("acq_date", sort=True)
    }
