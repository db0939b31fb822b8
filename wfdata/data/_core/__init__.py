"""
The dataset-query layer shared by every data source
----------
Modules:
    registry    - Immutable catalogs of dataset descriptors
    query       - The protocol-agnostic Query
    results     - Canonical results and typed request outcomes
    protocols   - Protocol strategies that build URLs and decode responses
    engine      - Runs queries against any protocol
    storage     - Saves results to disk and loads them back
    source      - Binds a registry to a protocol strategy
"""

from wfdata.data._core.query import Query
from wfdata.data._core.registry import Dataset, Registry, yearly
from wfdata.data._core.results import (
    BackendFailure,
    Feature,
    FeatureCollection,
    Image,
    Success,
    Table,
    TransportFailure,
)
from wfdata.data._core.source import Source
