"""
Binds a dataset registry to a protocol strategy
----------
A Source combines a data source's registry, its protocol strategy, and the names of
the servers it relies on. It implements the operations shared by every source
module, so that each source module only needs to translate its keyword options into
a Query.
----------
Classes:
    Source      - Implements the shared operations for a data source
"""

from __future__ import annotations

import logging
import typing

import wfdata._validate as validate
from wfdata import config
from wfdata._utils import aslist
from wfdata.data._core import engine, storage
from wfdata.data._core.query import Query

if typing.TYPE_CHECKING:
    from pathlib import Path
    from typing import Any, Optional

    from wfdata.data._core.protocols import Protocol
    from wfdata.data._core.registry import Dataset, Registry
    from wfdata.typing import Pathlike, strs, timeout

logger = logging.getLogger(__name__)


class Source:
    """
    Implements the shared operations for a data source
    ----------
    Source(registry, protocol, servers)
    Source(..., outages)
    Creates a source from its registry and protocol strategy. The servers are the
    names of the servers used in timeout error messages, and outages are optional
    URLs that report outages for each server.
    ----------
    Catalog:
        dataset         - Returns a dataset descriptor
        datasets        - Returns the dataset descriptors, optionally by category
        info            - Returns a description of a dataset

    Queries:
        query_url       - Returns the request URL for a query
        fetch           - Downloads a dataset into memory
        count           - Returns the number of records matching a query
        fields          - Returns the fields of a dataset

    Local files:
        folder          - Returns the folder used to save the source's files
        path            - Returns the path of a saved dataset
        download_file   - Saves a dataset to a local file
        load_file       - Loads a saved dataset
    """

    def __init__(
        self,
        registry: Registry,
        protocol: Protocol,
        servers: strs,
        outages: Optional[strs] = None,
    ) -> None:
        self.registry = registry
        self.protocol = protocol
        self.servers = aslist(servers)
        self.outages = outages

    @property
    def name(self) -> str:
        return self.registry.source

    #####
    # Catalog
    #####

    def dataset(self, id: str) -> Dataset:
        return self.registry.lookup(id)

    def datasets(self, category: Optional[str] = None) -> list[Dataset]:
        return self.registry.list(category)

    def info(self, id: str) -> str:
        return self.registry.lookup(id).summary()

    #####
    # Queries
    #####

    def query_url(self, id: str, query: Query) -> str:
        return self.protocol.build_url(self.dataset(id), query)

    def fetch(self, id: str, query: Query, timeout: timeout) -> Any:
        dataset = self.dataset(id)
        return engine.fetch(
            dataset, query, self.protocol, timeout, self.servers, self.outages
        )

    def count(self, id: str, query: Query, timeout: timeout) -> int:
        dataset = self.dataset(id)
        return engine.count(
            dataset, query, self.protocol, timeout, self.servers, self.outages
        )

    def fields(self, id: str, timeout: timeout) -> list[tuple[str, str, str]]:
        dataset = self.dataset(id)
        return engine.fields(
            dataset, self.protocol, timeout, self.servers, self.outages
        )

    #####
    # Local files
    #####

    def folder(self) -> Path:
        "Returns the default folder used to save files, creating it if needed"
        return config.source_dir(self.name)

    def path(
        self,
        id: str,
        query: Optional[Query] = None,
        filename: Optional[str] = None,
        parent: Optional[Pathlike] = None,
    ) -> Path:
        "Returns the path of a saved dataset"
        dataset = self.dataset(id)
        query = Query() if query is None else query
        default = self.protocol.default_filename(dataset, query)
        if parent is None:
            parent = config.data_dir() / self.name
        return validate.download_path(parent, filename, default)

    def download_file(
        self,
        id: str,
        query: Query,
        filename: Optional[str],
        parent: Optional[Pathlike],
        force: bool,
        timeout: timeout,
    ) -> Path:
        """Saves a dataset to a local file. If the file already exists, returns the
        path without making a request, unless force=True"""

        dataset = self.dataset(id)
        if parent is None:
            parent = self.folder()
        path = self.path(id, query, filename, parent)
        if path.exists() and not force:
            logger.info(
                "Using the existing %s %s file: %s", self.name, dataset.id, path
            )
            return path

        if dataset.archive:
            url = self.protocol.build_url(dataset, query)
            engine.stream(
                dataset, url, path, self.protocol, timeout, self.servers, self.outages
            )
        else:
            result = self.fetch(id, query, timeout)
            storage.save(result, path)
        logger.info("Saved the %s %s dataset to %s", self.name, dataset.id, path)
        return path

    def load_file(
        self,
        id: str,
        query: Optional[Query] = None,
        filename: Optional[str] = None,
        parent: Optional[Pathlike] = None,
    ) -> Any:
        "Loads a saved dataset. Never makes a network request"
        path = self.path(id, query, filename, parent)
        hint = f"Download the {self.name} {id} dataset first using download_file."
        return storage.load(path, hint)
