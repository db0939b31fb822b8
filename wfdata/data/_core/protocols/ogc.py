"""
Strategy for OGC API Features collections
----------
Items are requested from "<root>/<collection>/items" as GeoJSON. Filters are CQL2
text expressions sent in the "filter" parameter. Truncation is reported by a
"numberMatched" greater than "numberReturned", or by a "next" link.
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


class OGCFeatures(Protocol):
    "Strategy for OGC API Features collections"

    name = "OGC API Features"
    supports = frozenset(
        {"where", "fields", "limit", "bbox", "offset", "sortby", "datetime"}
    )

    @staticmethod
    def _filters(params: dict[str, Any], query: Query) -> None:
        if query.bbox is not None:
            params["bbox"] = bbox_string(query.bbox)
        if query.datetime is not None:
            params["datetime"] = query.datetime
        if query.where is not None:
            params["filter"] = query.where

    def _build_url(self, dataset: Dataset, query: Query) -> str:
        params = {"f": "geojson"}
        if query.limit is not None:
            params["limit"] = query.limit
        if query.offset is not None:
            params["offset"] = query.offset
        self._filters(params, query)
        if query.sortby is not None:
            params["sortby"] = query.sortby
        if query.projected:
            params["properties"] = fields_string(query.fields)
        return requests.query_url(f"{dataset.root}/{dataset.resource}/items", params)

    def count_url(self, dataset: Dataset, query: Query) -> str:
        self.check(dataset, query)
        params = {"f": "geojson", "limit": 1}
        self._filters(params, query)
        return requests.query_url(f"{dataset.root}/{dataset.resource}/items", params)

    def fields_url(self, dataset: Dataset) -> str:
        return requests.query_url(
            f"{dataset.root}/{dataset.resource}/queryables", {"f": "json"}
        )

    def detect_error(self, payload: Any) -> Optional[str]:
        if not isinstance(payload, dict) or "features" in payload:
            return None
        if "description" in payload and "code" in payload:
            return f"{payload['description']} ({payload['code']})"
        elif "detail" in payload:
            return str(payload["detail"])
        return None

    def decode(self, payload: Any, dataset: Dataset, query: Query) -> FeatureCollection:
        result = FeatureCollection.from_geojson(payload)
        result.truncated = self.detect_truncation(payload, result, dataset)
        return result

    @staticmethod
    def detect_truncation(
        payload: dict, result: FeatureCollection, dataset: Dataset
    ) -> bool:
        "True if more items matched than were returned, or there is a next page"
        matched = payload.get("numberMatched")
        returned = payload.get("numberReturned", len(result))
        if isinstance(matched, int) and isinstance(returned, int) and matched > returned:
            return True
        for link in payload.get("links") or []:
            if isinstance(link, dict) and link.get("rel") == "next":
                return True
        return at_ceiling(len(result), dataset)

    def parse_count(self, payload: Any) -> int:
        if not isinstance(payload, dict) or "numberMatched" not in payload:
            raise MissingAPIFieldError(
                'The OGC API response is missing the "numberMatched" field'
            )
        count = payload["numberMatched"]
        if isinstance(count, bool) or not isinstance(count, int):
            raise ParseError(f"The OGC API record count ({count}) is not an integer")
        return count

    def parse_fields(self, payload: Any) -> list[tuple[str, str, str]]:
        if not isinstance(payload, dict) or "properties" not in payload:
            raise MissingAPIFieldError(
                'The OGC API queryables response is missing the "properties" field'
            )
        fields = []
        for name, schema in payload["properties"].items():
            if not isinstance(schema, dict):
                schema = {}
            type = schema.get("type") or schema.get("format") or ""
            fields.append((name, type, schema.get("title", name)))
        return fields
