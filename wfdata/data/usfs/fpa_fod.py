"""
Functions to query the Fire Program Analysis Fire-Occurrence Database
----------
The Fire Program Analysis Fire-Occurrence Database (FPA-FOD) is a spatial database
of 2.3 million wildfires reported by federal, state, and local organizations in the
United States from 1992 to 2020. The database is published by the USDA Forest
Service Research Data Archive (https://doi.org/10.2737/RDS-2013-0009.6) as a single
SQLite file.

Use `download_database` to download the database (~214 MB) to the FPA_FOD data
folder. You can then run SQL queries using `query`, inspect the database using
`tables` and `schema`, or use the convenience functions to retrieve common
summaries. Every function opens a new database connection, and closes it before
returning, even if the query fails. Query results are returned as pandas DataFrames.
----------
Database:
    download_database   - Downloads the SQLite database
    database_path       - Returns the path to the local database
    connect             - Context manager that opens a database connection
    info                - Returns a description of the database

Pass-through:
    query               - Runs a SQL query
    tables              - Returns the names of the database tables
    schema              - Returns the columns of a table
    count               - Returns the number of fires matching a where clause

Convenience:
    states              - Fire counts by state
    causes              - Fire counts by general cause
    years               - Fire counts by year
    fires               - Fires filtered by state, year, cause, and size
    largest_fires       - The largest fires by size

Constants:
    YEARS                   - The years covered by the database
    SIZE_CLASSES            - Fire size classes (acres)
    CAUSE_CLASSIFICATIONS   - NWCG cause classifications
    GENERAL_CAUSES          - NWCG general causes
"""

from __future__ import annotations

import logging
import re
import sqlite3
import typing
from contextlib import contextmanager

import numpy as np
import pandas as pd

import wfdata._validate as validate
from wfdata import config
from wfdata._utils import format_number
from wfdata.config import DEFAULT_TIMEOUT
from wfdata.data._utils import extract, requests
from wfdata.errors import DatabaseNotAvailableError

if typing.TYPE_CHECKING:
    from pathlib import Path
    from typing import Any, Iterator, Optional, Sequence

    from wfdata.typing import timeout

logger = logging.getLogger(__name__)

SOURCE = "FPA_FOD"
ARCHIVE_URL = "https://www.fs.usda.gov/rds/archive/products/RDS-2013-0009.6"
SQLITE_URL = f"{ARCHIVE_URL}/RDS-2013-0009.6_Data_Format4_SQLITE.zip"
DATABASE_FILENAME = "FPA_FOD_20221014.sqlite"
ARCHIVE_FILENAME = "FPA_FOD_SQLITE.zip"

YEARS = range(1992, 2021)

# Fire size classes (acres)
SIZE_CLASSES = {
    "A": (0.0, 0.25),
    "B": (0.26, 9.9),
    "C": (10.0, 99.9),
    "D": (100.0, 299.9),
    "E": (300.0, 999.9),
    "F": (1000.0, 4999.9),
    "G": (5000.0, np.inf),
}

CAUSE_CLASSIFICATIONS = ("Human", "Natural", "Missing/Undefined")
GENERAL_CAUSES = (
    "Arson/Incendiarism",
    "Debris and Open Burning",
    "Equipment and Vehicle Use",
    "Firearms and Explosives Use",
    "Fireworks",
    "Misuse of Fire by a Minor",
    "Natural",
    "Power Generation/Transmission/Distribution",
    "Railroad Operations and Maintenance",
    "Recreation and Ceremony",
    "Smoking",
    "Other Causes",
    "Missing data/Not specified/Undetermined",
)

# Columns returned by the convenience queries
FIRE_COLUMNS = (
    "FOD_ID, FIRE_NAME, FIRE_YEAR, DISCOVERY_DATE, CONT_DATE, FIRE_SIZE, "
    "FIRE_SIZE_CLASS, NWCG_CAUSE_CLASSIFICATION, NWCG_GENERAL_CAUSE, STATE, COUNTY, "
    "LATITUDE, LONGITUDE"
)
LARGEST_COLUMNS = (
    "FOD_ID, FIRE_NAME, FIRE_YEAR, FIRE_SIZE, STATE, COUNTY, NWCG_GENERAL_CAUSE, "
    "LATITUDE, LONGITUDE"
)

_LIMIT = re.compile(r"\bLIMIT\s+(\d+|\?|:\w+)", re.IGNORECASE)


#####
# Database
#####


def database_path() -> Path:
    "Returns the path of the local FPA-FOD database (whether or not it exists)"
    return config.data_dir() / SOURCE / DATABASE_FILENAME


def download_database(
    *, force: bool = False, timeout: timeout = DEFAULT_TIMEOUT
) -> Path:
    """
    Downloads the FPA-FOD SQLite database
    ----------
    download_database()
    Downloads the zipped FPA-FOD database (~214 MB), extracts the SQLite file to the
    FPA_FOD data folder, and deletes the zip archive. Returns the path to the
    database. If the database already exists, returns its path without downloading.

    download_database(..., *, force=True)
    Downloads the database and replaces any existing file.

    download_database(..., *, timeout)
    Specifies a maximum time in seconds for connecting to the Research Data Archive.
    ----------
    Inputs:
        force: True to replace an existing database
        timeout: The maximum time in seconds to connect with the server

    Outputs:
        Path: The path to the SQLite database
    """

    folder = config.source_dir(SOURCE)
    path = folder / DATABASE_FILENAME
    if path.exists() and not force:
        logger.info("Using the existing FPA-FOD database: %s", path)
        return path

    archive = folder / ARCHIVE_FILENAME
    logger.info("Downloading the FPA-FOD database from %s", SQLITE_URL)
    requests.download(archive, SQLITE_URL, {}, timeout, "USFS Research Data Archive")
    try:
        extract(archive, ".sqlite", path)
    finally:
        archive.unlink(missing_ok=True)
    logger.info("Saved the FPA-FOD database to %s", path)
    return path


@contextmanager
def connect() -> Iterator[sqlite3.Connection]:
    """
    Opens a connection to the FPA-FOD database
    ----------
    with connect() as connection:
    Opens a new connection to the local database, and closes it when the block
    exits, including when an exception is raised. Raises a DatabaseNotAvailableError
    if the database has not been downloaded.
    ----------
    Outputs:
        sqlite3.Connection: A connection to the database
    """

    path = database_path()
    if not path.is_file():
        raise DatabaseNotAvailableError(
            f"The FPA-FOD database has not been downloaded:\n\t{path}\n"
            "Run wfdata.data.usfs.fpa_fod.download_database() first."
        )
    connection = sqlite3.connect(path)
    try:
        yield connection
    finally:
        connection.close()


def info() -> str:
    "Returns a description of the FPA-FOD database and its download status"

    lines = [
        "FPA-FOD: Fire Program Analysis Fire-Occurrence Database",
        f"  Coverage: {YEARS[0]}-{YEARS[-1]} ({len(YEARS)} years)",
        "  Source: USDA Forest Service Research Data Archive",
        "  DOI: https://doi.org/10.2737/RDS-2013-0009.6",
    ]
    path = database_path()
    if not path.is_file():
        lines.append("  Status: Not downloaded (run download_database)")
    else:
        size = path.stat().st_size / 1024**2
        lines += [
            "  Status: Downloaded",
            f"  Path: {path}",
            f"  Size: {size:.1f} MB",
            f"  Records: {format_number(count())}",
        ]
    return "\n".join(lines)


#####
# Pass-through
#####


def query(
    sql: str,
    params: Optional[Sequence[Any] | dict[str, Any]] = None,
    *,
    limit: Optional[int] = None,
) -> pd.DataFrame:
    """
    Runs a SQL query against the FPA-FOD database
    ----------
    query(sql)
    Runs a SQL query and returns the results as a DataFrame. The SQL is passed to
    the database as-is, so only run trusted queries. For example:

        query("SELECT FIRE_NAME, FIRE_SIZE FROM Fires ORDER BY FIRE_SIZE DESC LIMIT 10")

    query(sql, params)
    Binds parameters to "?" (sequence) or ":name" (dict) placeholders in the query.
    Prefer parameters to formatting values into the SQL string.

    query(..., *, limit)
    Appends a LIMIT clause to the query, unless it already has one.
    ----------
    Inputs:
        sql: A SQL query
        params: Parameters bound to the query placeholders
        limit: The maximum number of rows to return

    Outputs:
        pandas.DataFrame: The query results
    """

    validate.string(sql, "sql")
    if limit is not None:
        limit = validate.positive(limit, "limit")
        if not _LIMIT.search(sql):
            sql = f"{sql.rstrip().rstrip(';')} LIMIT {limit}"
    with connect() as connection:
        return pd.read_sql_query(sql, connection, params=params)


def tables() -> list[str]:
    "Returns the names of the tables in the FPA-FOD database"
    with connect() as connection:
        rows = connection.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ).fetchall()
    return [row[0] for row in rows]


def schema(table: str = "Fires") -> list[tuple[str, str, bool]]:
    """
    Returns the columns of an FPA-FOD table
    ----------
    schema()
    schema(table)
    Returns a (name, type, nullable) tuple for each column in the table (default
    "Fires"). Table names may only contain letters and underscores.
    ----------
    Inputs:
        table: The name of a database table

    Outputs:
        list[tuple[str, str, bool]]: The name, type, and nullability of each column
    """

    # PRAGMA arguments cannot be bound as parameters
    table = validate.identifier(table, "table")
    with connect() as connection:
        rows = connection.execute(f'PRAGMA table_info("{table}")').fetchall()
    return [(row[1], row[2], row[3] == 0) for row in rows]


def count(where: str = "1=1") -> int:
    """
    Returns the number of fires matching a where clause
    ----------
    count()
    count(where)
    Returns the number of records in the Fires table, optionally only counting
    records that match a SQL where clause (for example, "STATE = 'CA'").
    ----------
    Inputs:
        where: A SQL where clause

    Outputs:
        int: The number of matching fires
    """
    validate.string(where, "where")
    with connect() as connection:
        row = connection.execute(f"SELECT COUNT(*) FROM Fires WHERE {where}").fetchone()
    return row[0]


#####
# Convenience
#####


def states() -> pd.DataFrame:
    "Returns the number of fires in each state, in decreasing order"
    return query(
        "SELECT STATE, COUNT(*) AS count FROM Fires GROUP BY STATE ORDER BY count DESC"
    )


def causes() -> pd.DataFrame:
    "Returns the number of fires with each NWCG general cause, in decreasing order"
    return query(
        "SELECT NWCG_GENERAL_CAUSE AS cause, COUNT(*) AS count FROM Fires "
        "GROUP BY NWCG_GENERAL_CAUSE ORDER BY count DESC"
    )


def years() -> pd.DataFrame:
    "Returns the number of fires in each year"
    return query(
        "SELECT FIRE_YEAR AS year, COUNT(*) AS count FROM Fires "
        "GROUP BY FIRE_YEAR ORDER BY year"
    )


def _conditions(**filters: tuple[str, Any]) -> tuple[str, list[Any]]:
    "Builds a parameterized where clause from (condition, value) pairs"
    conditions = []
    params = []
    for condition, value in filters.values():
        if value is not None:
            conditions.append(condition)
            params.append(value)
    where = " AND ".join(conditions) if conditions else "1=1"
    return where, params


def fires(
    *,
    state: Optional[str] = None,
    year: Optional[int] = None,
    cause: Optional[str] = None,
    min_size: Optional[float] = None,
    max_size: Optional[float] = None,
    limit: int = 1000,
) -> pd.DataFrame:
    """
    Returns fires matching optional filters
    ----------
    fires(*, state, year, cause, min_size, max_size, limit)
    Returns up to `limit` fires (default 1000), sorted by decreasing size. Filters
    by two-letter state code, fire year, NWCG general cause (see GENERAL_CAUSES),
    and minimum and maximum fire size in acres.
    ----------
    Inputs:
        state: A two-letter state code (for example, "CA")
        year: A fire year
        cause: An NWCG general cause
        min_size: The minimum fire size in acres
        max_size: The maximum fire size in acres
        limit: The maximum number of fires to return

    Outputs:
        pandas.DataFrame: The matching fires
    """

    limit = validate.positive(limit, "limit")
    where, params = _conditions(
        state=("STATE = ?", state),
        year=("FIRE_YEAR = ?", year),
        cause=("NWCG_GENERAL_CAUSE = ?", cause),
        min_size=("FIRE_SIZE >= ?", min_size),
        max_size=("FIRE_SIZE <= ?", max_size),
    )
    sql = (
        f"SELECT {FIRE_COLUMNS} FROM Fires WHERE {where} "
        "ORDER BY FIRE_SIZE DESC LIMIT ?"
    )
    return query(sql, params + [limit])


def largest_fires(
    n: int = 100, *, year: Optional[int] = None, state: Optional[str] = None
) -> pd.DataFrame:
    "Returns the n largest fires, optionally filtered by year and state"

    n = validate.positive(n, "n")
    where, params = _conditions(
        year=("FIRE_YEAR = ?", year),
        state=("STATE = ?", state),
    )
    sql = (
        f"SELECT {LARGEST_COLUMNS} FROM Fires WHERE {where} "
        "ORDER BY FIRE_SIZE DESC LIMIT ?"
    )
    return query(sql, params + [n])
