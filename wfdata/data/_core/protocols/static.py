"""
Strategy for static files published at a fixed URL
----------
Some sources publish complete datasets as large zipped shapefiles or geodatabases at
a fixed URL. These files accept no query options, and are streamed straight to disk
rather than decoded. The saved file uses the name of the published file.
"""

from __future__ import annotations

import typing
from pathlib import PurePosixPath

from wfdata.data._core.protocols.base import Protocol

if typing.TYPE_CHECKING:
    from wfdata.data._core.query import Query
    from wfdata.data._core.registry import Dataset


class StaticFile(Protocol):
    "Strategy for files published at a fixed URL"

    name = "static file"
    format = "bytes"

    def _build_url(self, dataset: Dataset, query: Query) -> str:
        return f"{dataset.root}/{dataset.resource}"

    def default_filename(self, dataset: Dataset, query: Query) -> str:
        return PurePosixPath(dataset.resource).name
