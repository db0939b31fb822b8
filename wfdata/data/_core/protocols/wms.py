"""
Strategy for OGC Web Map Service (WMS 1.1.1) GetMap requests
----------
WMS layers are rendered to images, so attribute filters and field selections are not
supported. Layers whose datasets are marked as temporal also receive a "time"
parameter holding a number of days. WMS servers report errors as XML service
exception documents, which are returned in place of the requested image.
"""

from __future__ import annotations

import re
import typing

from wfdata.data._core.protocols.base import Protocol, bbox_string
from wfdata.data._core.results import Image
from wfdata.data._utils import requests

if typing.TYPE_CHECKING:
    from typing import Any, Optional

    from wfdata.data._core.query import Query
    from wfdata.data._core.registry import Dataset

# Defaults for GetMap requests
WORLD = (-180, -90, 180, 90)
WIDTH = 1024
HEIGHT = 512
DAYS = 1
FORMAT = "image/png"
SRS = "EPSG:4326"

# File extensions of supported image formats
EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/gif": "gif",
    "image/tiff": "tif",
    "image/geotiff": "tif",
}

_SERVICE_EXCEPTION = re.compile(
    r"<ServiceException(?:\s[^>]*)?>(.*?)</ServiceException>", re.S
)


class WMS(Protocol):
    "Strategy for OGC WMS 1.1.1 GetMap requests"

    name = "WMS 1.1.1"
    supports = frozenset({"bbox", "days"})
    options = frozenset({"width", "height", "format", "srs"})
    format = "bytes"

    @staticmethod
    def image_format(query: Query) -> str:
        return query.options.get("format", FORMAT)

    def _build_url(self, dataset: Dataset, query: Query) -> str:
        bbox = WORLD if query.bbox is None else query.bbox
        params = {
            "service": "WMS",
            "request": "GetMap",
            "version": "1.1.1",
            "layers": dataset.resource,
            "styles": "",
            "format": self.image_format(query),
            "transparent": "true",
            "width": query.options.get("width", WIDTH),
            "height": query.options.get("height", HEIGHT),
            "srs": query.options.get("srs", SRS),
            "bbox": bbox_string(bbox),
        }
        if dataset.temporal:
            params["time"] = DAYS if query.days is None else query.days
        return requests.query_url(dataset.root, params)

    def default_filename(self, dataset: Dataset, query: Query) -> str:
        extension = EXTENSIONS.get(self.image_format(query), "img")
        return f"{dataset.id}.{extension}"

    def detect_error(self, payload: Any) -> Optional[str]:
        if not payload.lstrip().startswith(b"<"):
            return None
        text = payload.decode("utf-8", errors="replace")
        messages = [message.strip() for message in _SERVICE_EXCEPTION.findall(text)]
        messages = [message for message in messages if message]
        if messages:
            return " ".join(messages)
        return "The server returned an XML document instead of an image"

    def decode(self, payload: Any, dataset: Dataset, query: Query) -> Image:
        return Image(payload, self.image_format(query))
