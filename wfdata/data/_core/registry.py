"""
Immutable catalogs of the datasets offered by a data source
----------
Each data source builds a single Registry when its module is imported. The registry
maps stable dataset IDs to Dataset descriptors, which hold the protocol-specific
metadata needed to query a dataset: the service root, the resource name, the layer
index, and so on. Registries are read-only once constructed, so they can be shared
freely between concurrent callers.
----------
Classes:
    Dataset     - Describes a single queryable dataset
    Registry    - An ordered, read-only collection of Datasets

Functions:
    yearly      - Builds year-suffixed variants of a dataset template
"""

from __future__ import annotations

import datetime
import typing
from dataclasses import dataclass, replace
from types import MappingProxyType

import wfdata._validate as validate
from wfdata.errors import UnknownDatasetError

if typing.TYPE_CHECKING:
    from typing import Iterable, Iterator, Optional

# Supported geometry kinds
GEOMETRIES = ("point", "line", "polygon", "raster", "none")


@dataclass(frozen=True)
class Dataset:
    """
    Describes a single queryable dataset
    ----------
    Core fields:
        id: A stable key that is unique within the data source
        source: The name of the data source (also the name of its data folder)
        root: The base URL of the service
        resource: The service name, type name, collection ID, or layer name
        name: A human-readable display name
        description: A short description of the dataset
        category: A source-specific category used to filter datasets
        geometry: One of "point", "line", "polygon", "raster", or "none"

    Protocol-specific fields:
        layer: The layer index of an ArcGIS service
        server: "FeatureServer" or "MapServer" for ArcGIS services
        prefix: The filename prefix of a daily archive
        extension: The file extension of a daily archive or static file
        ceiling: The server's hard maximum number of records per request
        sentinels: Columns in which -999 denotes a missing value
        columns: Column names for header-less tabular files
        start: The first date with available data
        temporal: True if a WMS layer accepts a time parameter
        archive: True if the dataset is a binary file streamed directly to disk
    """

    id: str
    source: str
    root: str
    resource: str
    name: str
    description: str
    category: str
    geometry: str
    layer: Optional[int] = None
    server: Optional[str] = None
    prefix: Optional[str] = None
    extension: Optional[str] = None
    ceiling: Optional[int] = None
    sentinels: tuple[str, ...] = ()
    columns: tuple[str, ...] = ()
    start: Optional[datetime.date] = None
    temporal: bool = False
    archive: bool = False

    def __post_init__(self):
        if self.geometry not in GEOMETRIES:
            allowed = ", ".join(GEOMETRIES)
            raise ValueError(
                f"The geometry of dataset {self.id} ({self.geometry}) is not "
                f"supported. Supported geometries are: {allowed}"
            )

    def summary(self) -> str:
        "Returns a multi-line description of the dataset"
        lines = [
            f"{self.name} ({self.source}: {self.id})",
            f"  {self.description}",
            f"  Category: {self.category}",
            f"  Geometry: {self.geometry}",
            f"  Resource: {self.resource}",
        ]
        if self.layer is not None:
            lines.append(f"  Layer: {self.layer}")
        if self.ceiling is not None:
            lines.append(f"  Maximum records per request: {self.ceiling}")
        if self.start is not None:
            lines.append(f"  Available from: {self.start.isoformat()}")
        return "\n".join(lines)


class Registry:
    """
    An ordered, read-only collection of dataset descriptors
    ----------
    Registry(source, datasets)
    Builds a registry for the named data source. Datasets are listed in the order
    they are provided. Raises a ValueError if two datasets share an ID.
    ----------
    Lookup:
        lookup      - Returns the dataset with the given ID
        list        - Returns the datasets, optionally filtered by category

    Properties:
        source      - The name of the data source
        ids         - The registered dataset IDs
        categories  - The categories used by the registered datasets
    """

    def __init__(self, source: str, datasets: Iterable[Dataset]) -> None:
        entries = {}
        for dataset in datasets:
            if dataset.id in entries:
                raise ValueError(
                    f"The {source} registry contains multiple datasets "
                    f'with the ID "{dataset.id}"'
                )
            entries[dataset.id] = dataset
        self._source = source
        self._datasets = MappingProxyType(entries)

    @property
    def source(self) -> str:
        return self._source

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(self._datasets)

    @property
    def categories(self) -> tuple[str, ...]:
        categories = []
        for dataset in self._datasets.values():
            if dataset.category not in categories:
                categories.append(dataset.category)
        return tuple(categories)

    def __len__(self) -> int:
        return len(self._datasets)

    def __iter__(self) -> Iterator[Dataset]:
        return iter(self._datasets.values())

    def __contains__(self, id: str) -> bool:
        return id in self._datasets

    def __repr__(self) -> str:
        return f"Registry(source={self._source!r}, datasets={len(self)})"

    def lookup(self, id: str) -> Dataset:
        """
        Returns the dataset with the given ID
        ----------
        self.lookup(id)
        Returns the Dataset descriptor registered under the indicated ID. Raises an
        UnknownDatasetError if the ID is not registered.
        ----------
        Inputs:
            id: A dataset ID

        Outputs:
            Dataset: The matching dataset descriptor
        """
        validate.string(id, "dataset")
        if id not in self._datasets:
            supported = ", ".join(self._datasets)
            raise UnknownDatasetError(
                f'"{id}" is not a recognized {self._source} dataset. '
                f"Supported datasets are: {supported}",
                dataset=id,
            )
        return self._datasets[id]

    def list(self, category: Optional[str] = None) -> list[Dataset]:
        """
        Returns the registered datasets
        ----------
        self.list()
        Returns every registered dataset in registration order.

        self.list(category)
        Only returns datasets in the indicated category. Raises a ValueError if the
        category is not used by any dataset in the registry.
        ----------
        Inputs:
            category: A category used to filter the datasets

        Outputs:
            list[Dataset]: The matching datasets
        """
        if category is None:
            return [dataset for dataset in self._datasets.values()]
        category = validate.option(category, "category", self.categories)
        return [
            dataset
            for dataset in self._datasets.values()
            if dataset.category == category
        ]


def yearly(template: Dataset, years: Iterable[int]) -> list[Dataset]:
    """Builds year-suffixed variants of a dataset template. Any "{year}" placeholder
    in the ID, resource, name, or description is replaced by the year"""

    return [
        replace(
            template,
            id=template.id.format(year=year),
            resource=template.resource.format(year=year),
            name=template.name.format(year=year),
            description=template.description.format(year=year),
        )
        for year in years
    ]
