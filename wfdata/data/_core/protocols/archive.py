"""
Strategy for daily file archives
----------
Daily archives publish one file per calendar day at a deterministic path:
"<root>/<resource>/<YYYY>/<MM>/<prefix><YYYYMMDD>.<extension>". Requests have no
query parameters, so the only supported query options are the date, and a field
selection that is applied after the file is parsed. Tabular files are parsed into
Tables, and designated sentinel columns have -999 values replaced by NaN.
"""

from __future__ import annotations

import typing
from io import StringIO

import numpy as np
import pandas as pd

from wfdata.data._core.protocols.base import Protocol
from wfdata.data._core.results import Table
from wfdata.errors import ParseError

if typing.TYPE_CHECKING:
    from datetime import date
    from typing import Any, Optional

    from wfdata.data._core.query import Query
    from wfdata.data._core.registry import Dataset

# Out-of-band value used to indicate missing data
SENTINEL = -999.0


class DailyArchive(Protocol):
    "Strategy for archives that publish one file per day"

    name = "daily archive"
    supports = frozenset({"date", "fields"})
    format = "text"

    @staticmethod
    def date(dataset: Dataset, query: Query) -> date:
        "Returns the validated date of a query"
        if query.date is None:
            raise ValueError(
                f'The {dataset.source} "{dataset.id}" dataset requires a date'
            )
        if dataset.start is not None and query.date < dataset.start:
            raise ValueError(
                f'The {dataset.source} "{dataset.id}" dataset is only available from '
                f"{dataset.start.isoformat()}, but the requested date is "
                f"{query.date.isoformat()}"
            )
        return query.date

    def _build_url(self, dataset: Dataset, query: Query) -> str:
        date = self.date(dataset, query)
        filename = f"{dataset.prefix}{date:%Y%m%d}.{dataset.extension}"
        return f"{dataset.root}/{dataset.resource}/{date:%Y}/{date:%m}/{filename}"

    def default_filename(self, dataset: Dataset, query: Query) -> str:
        date = self.date(dataset, query)
        extension = dataset.extension if dataset.archive else "csv"
        return f"{dataset.prefix}{date:%Y%m%d}.{extension}"

    def detect_error(self, payload: Any) -> Optional[str]:
        if payload.lstrip()[:1] == "<":
            return "The server returned an HTML page instead of a data file"
        return None

    def decode(self, payload: Any, dataset: Dataset, query: Query) -> Table:
        data = read_table(payload, dataset.columns)
        replace_sentinels(data, dataset.sentinels)
        if query.projected:
            data = project(data, query.fields)
        return Table(data)


#####
# Table utilities
#####


def _has_header(text: str) -> bool:
    "True if the first value of a CSV file is not numeric"
    first = text.lstrip().split(",", 1)[0].strip()
    try:
        float(first)
    except ValueError:
        return True
    return False


def read_table(text: str, columns: tuple[str, ...] = ()) -> pd.DataFrame:
    """Parses CSV text into a DataFrame. If column names are provided, they replace
    any header row in the file"""

    if text.strip() == "":
        return pd.DataFrame(columns=list(columns) or None)

    kwargs = {"skipinitialspace": True}
    if columns:
        kwargs["header"] = 0 if _has_header(text) else None
        kwargs["names"] = list(columns)
    try:
        return pd.read_csv(StringIO(text), **kwargs)
    except (pd.errors.ParserError, ValueError) as error:
        raise ParseError(f"Could not parse the CSV data: {error}") from error


def replace_sentinels(data: pd.DataFrame, columns: tuple[str, ...]) -> None:
    "Replaces -999 values in the indicated columns with NaN"
    for column in columns:
        if column in data.columns:
            values = pd.to_numeric(data[column], errors="coerce")
            data[column] = values.mask(values == SENTINEL, np.nan)


def project(data: pd.DataFrame, fields: tuple[str, ...]) -> pd.DataFrame:
    "Selects a subset of columns. Raises a ValueError if a column does not exist"
    missing = [field for field in fields if field not in data.columns]
    if missing:
        available = ", ".join(str(column) for column in data.columns)
        raise ValueError(
            f"The data does not have the requested fields: {', '.join(missing)}. "
            f"Available fields are: {available}"
        )
    return data[list(fields)]
