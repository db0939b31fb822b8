"""
Canonical in-memory results, and the typed outcomes of a request
----------
Every protocol strategy decodes a server response into one of three outcomes. A
Success holds a canonical result (a FeatureCollection, Table, or Image), and records
whether the server truncated the result. A BackendFailure records an error that the
server encoded in an otherwise successful response. A TransportFailure records a
non-success HTTP status code. The engine converts failures into exceptions, so
callers only ever see canonical results.
----------
Results:
    Feature             - A single geometry and its attributes
    FeatureCollection   - An ordered sequence of features
    Table               - Tabular records held in a pandas DataFrame
    Image               - A rendered map image

Outcomes:
    Success             - A decoded result
    BackendFailure      - An error encoded by the server in a success response
    TransportFailure    - A non-success HTTP status code
"""

from __future__ import annotations

import typing
from dataclasses import dataclass, field

import pandas as pd
from shapely.errors import ShapelyError
from shapely.geometry import mapping, shape

from wfdata.errors import MissingAPIFieldError, ParseError

if typing.TYPE_CHECKING:
    from typing import Any, Iterator, Optional

    from shapely.geometry.base import BaseGeometry


#####
# Results
#####


@dataclass
class Feature:
    "A single geometry (in EPSG:4326) and its attribute values"

    geometry: Optional[BaseGeometry]
    properties: dict[str, Any] = field(default_factory=dict)
    id: Any = None

    @classmethod
    def from_geojson(cls, feature: Any) -> Feature:
        "Builds a Feature from a GeoJSON feature dict"

        if not isinstance(feature, dict) or feature.get("type") != "Feature":
            raise ParseError("A GeoJSON feature must be an object with type 'Feature'")
        geometry = feature.get("geometry")
        try:
            geometry = None if geometry is None else shape(geometry)
        except (KeyError, TypeError, ValueError, AttributeError, ShapelyError) as error:
            raise ParseError(f"Could not decode a feature geometry: {error}") from error
        properties = feature.get("properties") or {}
        if not isinstance(properties, dict):
            raise ParseError("GeoJSON feature properties must be an object")
        return cls(geometry, dict(properties), feature.get("id"))

    def to_geojson(self) -> dict:
        "Returns the feature as a GeoJSON feature dict"
        geojson = {
            "type": "Feature",
            "geometry": None if self.geometry is None else mapping(self.geometry),
            "properties": self.properties,
        }
        if self.id is not None:
            geojson["id"] = self.id
        return geojson


@dataclass
class FeatureCollection:
    """
    An ordered sequence of features
    ----------
    Properties:
        features: The list of Feature objects
        truncated: True if the server indicated that the results were truncated
        fields: The attribute names used by the features
    """

    features: list[Feature] = field(default_factory=list)
    truncated: bool = False

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)

    def __getitem__(self, index: int) -> Feature:
        return self.features[index]

    @property
    def fields(self) -> list[str]:
        names = []
        for feature in self.features:
            for name in feature.properties:
                if name not in names:
                    names.append(name)
        return names

    @classmethod
    def from_geojson(cls, geojson: Any, truncated: bool = False) -> FeatureCollection:
        "Builds a FeatureCollection from a GeoJSON FeatureCollection dict"

        if not isinstance(geojson, dict):
            raise ParseError("The response is not a GeoJSON object")
        if "features" not in geojson:
            raise MissingAPIFieldError(
                'The response is missing the "features" field of a GeoJSON '
                "FeatureCollection"
            )
        features = geojson["features"]
        if not isinstance(features, list):
            raise ParseError('The "features" field of the response is not a list')
        features = [Feature.from_geojson(feature) for feature in features]
        return cls(features, truncated)

    def to_geojson(self) -> dict:
        "Returns the collection as a GeoJSON FeatureCollection dict"
        geojson = {
            "type": "FeatureCollection",
            "features": [feature.to_geojson() for feature in self.features],
        }
        if self.truncated:
            geojson["truncated"] = True
        return geojson

    def to_frame(self) -> pd.DataFrame:
        "Returns the feature attributes as a pandas DataFrame (one row per feature)"
        return pd.DataFrame(
            [feature.properties for feature in self.features], columns=self.fields
        )


@dataclass
class Table:
    "Tabular records with a fixed column schema"

    data: pd.DataFrame
    truncated: bool = False

    def __len__(self) -> int:
        return len(self.data)

    @property
    def fields(self) -> list[str]:
        return list(self.data.columns)


@dataclass
class Image:
    "A rendered map image"

    content: bytes
    format: str

    def __len__(self) -> int:
        return len(self.content)


#####
# Outcomes
#####


@dataclass(frozen=True)
class Success:
    "A successfully decoded result"

    result: Any
    truncated: bool = False


@dataclass(frozen=True)
class BackendFailure:
    "An error reported by the server within a success response"

    message: str


@dataclass(frozen=True)
class TransportFailure:
    "A non-success HTTP status code"

    status: int
    reason: str = ""


Outcome = Success | BackendFailure | TransportFailure
