"""
Strategy for ArcGIS REST FeatureServer and MapServer layers
----------
Queries are sent to "<root>/<service>/<server>/<layer>/query". Results are requested
as GeoJSON in EPSG:4326. ArcGIS reports errors as a JSON object with an "error"
field, even when the HTTP status code indicates success, and sets
"exceededTransferLimit" when a result was capped by the server.
"""

from __future__ import annotations

import typing

from wfdata.data._core.protocols.base import (
    Protocol,
    at_ceiling,
    bbox_string,
    fields_string,
)
from wfdata.data._core.results import FeatureCollection
from wfdata.data._utils import requests
from wfdata.errors import MissingAPIFieldError, ParseError

if typing.TYPE_CHECKING:
    from typing import Any, Optional

    from wfdata.data._core.query import Query
    from wfdata.data._core.registry import Dataset


class ArcGIS(Protocol):
    "Strategy for ArcGIS REST FeatureServer and MapServer layers"

    name = "ArcGIS REST"
    supports = frozenset({"where", "fields", "limit", "bbox", "offset", "sortby"})

    @staticmethod
    def layer_url(dataset: Dataset) -> str:
        "Returns the URL of a dataset's layer"
        server = dataset.server or "FeatureServer"
        layer = 0 if dataset.layer is None else dataset.layer
        return f"{dataset.root}/{dataset.resource}/{server}/{layer}"

    def _filters(self, query: Query) -> dict[str, Any]:
        "Returns the where clause and spatial filter parameters"
        params = {"where": "1=1" if query.where is None else query.where}
        if query.bbox is not None:
            params["geometry"] = bbox_string(query.bbox)
            params["geometryType"] = "esriGeometryEnvelope"
            params["inSR"] = 4326
            params["spatialRel"] = "esriSpatialRelIntersects"
        return params

    def _build_url(self, dataset: Dataset, query: Query) -> str:
        params = self._filters(query)
        params["outFields"] = fields_string(query.fields)
        params["f"] = "geojson"
        params["outSR"] = 4326
        if query.limit is not None:
            params["resultRecordCount"] = query.limit
        if query.offset is not None:
            params["resultOffset"] = query.offset
        if query.sortby is not None:
            params["orderByFields"] = query.sortby
        return requests.query_url(f"{self.layer_url(dataset)}/query", params)

    def count_url(self, dataset: Dataset, query: Query) -> str:
        self.check(dataset, query)
        params = self._filters(query)
        params["returnCountOnly"] = "true"
        params["f"] = "json"
        return requests.query_url(f"{self.layer_url(dataset)}/query", params)

    def fields_url(self, dataset: Dataset) -> str:
        return requests.query_url(self.layer_url(dataset), {"f": "json"})

    def detect_error(self, payload: Any) -> Optional[str]:
        if not isinstance(payload, dict) or "error" not in payload:
            return None
        error = payload["error"]
        if not isinstance(error, dict):
            return str(error)
        message = error.get("message", "Unknown error")
        if "code" in error:
            message = f"{message} (code {error['code']})"
        details = [detail for detail in error.get("details") or [] if detail]
        if details:
            message += ". " + " ".join(str(detail) for detail in details)
        return message

    def decode(self, payload: Any, dataset: Dataset, query: Query) -> FeatureCollection:
        result = FeatureCollection.from_geojson(payload)
        result.truncated = self.detect_truncation(payload, result, dataset)
        return result

    @staticmethod
    def detect_truncation(
        payload: dict, result: FeatureCollection, dataset: Dataset
    ) -> bool:
        "True if the server flagged a transfer limit, or the result hit the ceiling"
        properties = payload.get("properties")
        if not isinstance(properties, dict):
            properties = {}
        flagged = payload.get("exceededTransferLimit") or properties.get(
            "exceededTransferLimit"
        )
        return bool(flagged) or at_ceiling(len(result), dataset)

    def parse_count(self, payload: Any) -> int:
        if not isinstance(payload, dict) or "count" not in payload:
            raise MissingAPIFieldError('The ArcGIS response is missing the "count" field')
        count = payload["count"]
        if isinstance(count, bool) or not isinstance(count, int):
            raise ParseError(f"The ArcGIS record count ({count}) is not an integer")
        return count

    def parse_fields(self, payload: Any) -> list[tuple[str, str, str]]:
        if not isinstance(payload, dict) or "fields" not in payload:
            raise MissingAPIFieldError(
                'The ArcGIS layer description is missing the "fields" field'
            )
        fields = []
        for field in payload["fields"] or []:
            name = field.get("name", "")
            fields.append((name, field.get("type", ""), field.get("alias", name)))
        return fields
