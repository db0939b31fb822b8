"""
Strategy for OGC Web Feature Service (WFS 2.0) GetFeature requests
----------
Features are requested as GeoJSON in EPSG:4326. Attribute filters use CQL and are
sent as the CQL_FILTER vendor parameter. WFS servers report errors as XML exception
reports, which are returned in place of the requested JSON.
"""

from __future__ import annotations

import re
import typing

from wfdata.data._core.protocols.base import (
    Protocol,
    at_ceiling,
    bbox_string,
    fields_string,
)
from wfdata.data._core.results import BackendFailure, FeatureCollection
from wfdata.data._utils import requests
from wfdata.errors import MissingAPIFieldError, ParseError

if typing.TYPE_CHECKING:
    from typing import Any, Optional

    from requests import Response

    from wfdata.data._core.query import Query
    from wfdata.data._core.registry import Dataset

_EXCEPTION_TEXT = re.compile(
    r"<(?:\w+:)?ExceptionText>(.*?)</(?:\w+:)?ExceptionText>", re.S
)
_NUMBER_MATCHED = re.compile(r'numberMatched="(\d+)"')


def _exception_message(text: str) -> Optional[str]:
    "Returns the message of a WFS exception report, or None if there is no report"
    if "ExceptionReport" not in text:
        return None
    messages = [message.strip() for message in _EXCEPTION_TEXT.findall(text)]
    messages = [message for message in messages if message]
    if not messages:
        return "The server returned a WFS exception report"
    return " ".join(messages)


class WFS(Protocol):
    "Strategy for OGC WFS 2.0 GetFeature requests"

    name = "WFS 2.0"
    supports = frozenset({"where", "fields", "limit", "bbox", "offset", "sortby"})
    count_format = "text"

    @staticmethod
    def _base(dataset: Dataset, request: str) -> dict[str, Any]:
        return {
            "service": "WFS",
            "version": "2.0.0",
            "request": request,
            "typeNames": dataset.resource,
        }

    @staticmethod
    def _filters(params: dict[str, Any], query: Query) -> None:
        if query.bbox is not None:
            params["bbox"] = bbox_string(query.bbox)
        if query.where is not None:
            params["CQL_FILTER"] = query.where

    def _build_url(self, dataset: Dataset, query: Query) -> str:
        params = self._base(dataset, "GetFeature")
        params["outputFormat"] = "application/json"
        params["srsName"] = "EPSG:4326"
        if query.limit is not None:
            params["count"] = query.limit
        if query.offset is not None:
            params["startIndex"] = query.offset
        self._filters(params, query)
        if query.sortby is not None:
            params["sortBy"] = query.sortby
        if query.projected:
            params["propertyName"] = fields_string(query.fields)
        return requests.query_url(dataset.root, params)

    def count_url(self, dataset: Dataset, query: Query) -> str:
        self.check(dataset, query)
        params = self._base(dataset, "GetFeature")
        params["resultType"] = "hits"
        self._filters(params, query)
        return requests.query_url(dataset.root, params)

    def fields_url(self, dataset: Dataset) -> str:
        params = self._base(dataset, "DescribeFeatureType")
        params["outputFormat"] = "application/json"
        return requests.query_url(dataset.root, params)

    def payload(self, response: Response, format: str) -> Any:
        payload = super().payload(response, format)
        if isinstance(payload, BackendFailure):
            message = _exception_message(response.text)
            if message is not None:
                return BackendFailure(message)
        return payload

    def detect_error(self, payload: Any) -> Optional[str]:
        if isinstance(payload, str):
            return _exception_message(payload)
        elif isinstance(payload, dict) and "exceptions" in payload:
            messages = [
                str(exception.get("text", exception))
                for exception in payload["exceptions"] or []
                if isinstance(exception, dict)
            ]
            return " ".join(messages) or "The server returned a WFS exception"
        return None

    def decode(self, payload: Any, dataset: Dataset, query: Query) -> FeatureCollection:
        result = FeatureCollection.from_geojson(payload)
        result.truncated = self.detect_truncation(payload, result, dataset)
        return result

    @staticmethod
    def detect_truncation(
        payload: dict, result: FeatureCollection, dataset: Dataset
    ) -> bool:
        "True if more features matched the query than were returned"
        returned = payload.get("numberReturned", len(result))
        for key in ["numberMatched", "totalFeatures"]:
            matched = payload.get(key)
            if isinstance(matched, int) and isinstance(returned, int):
                if matched > returned:
                    return True
        return at_ceiling(len(result), dataset)

    def parse_count(self, payload: Any) -> int:
        match = _NUMBER_MATCHED.search(payload)
        if match is None:
            raise MissingAPIFieldError(
                'The WFS hits response is missing the "numberMatched" attribute'
            )
        return int(match.group(1))

    def parse_fields(self, payload: Any) -> list[tuple[str, str, str]]:
        if not isinstance(payload, dict) or not payload.get("featureTypes"):
            raise MissingAPIFieldError(
                'The WFS feature type description is missing the "featureTypes" field'
            )
        feature_type = payload["featureTypes"][0]
        if not isinstance(feature_type, dict) or "properties" not in feature_type:
            raise ParseError("The WFS feature type description has no properties")
        fields = []
        for field in feature_type["properties"]:
            name = field.get("name", "")
            type = field.get("localType") or field.get("type", "")
            fields.append((name, type, name))
        return fields
