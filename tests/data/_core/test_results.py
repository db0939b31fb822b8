import pandas as pd
import pytest
from shapely.geometry import Point

from wfdata.data._core import Feature, FeatureCollection, Image, Table
from wfdata.errors import MissingAPIFieldError, ParseError


class TestFeature:
    def test_from_geojson(_):
        feature = Feature.from_geojson(
            {
                "type": "Feature",
                "id": 7,
                "geometry": {"type": "Point", "coordinates": [-118.5, 34.2]},
                "properties": {"NAME": "Example"},
            }
        )
        assert feature.geometry.equals(Point(-118.5, 34.2))
        assert feature.properties == {"NAME": "Example"}
        assert feature.id == 7

    def test_null_geometry(_):
        feature = Feature.from_geojson(
            {"type": "Feature", "geometry": None, "properties": None}
        )
        assert feature.geometry is None
        assert feature.properties == {}

    def test_not_feature(_, assert_contains):
        with pytest.raises(ParseError) as error:
            Feature.from_geojson({"type": "Point"})
        assert_contains(error, "must be an object with type 'Feature'")

    def test_invalid_geometry(_, assert_contains):
        with pytest.raises(ParseError) as error:
            Feature.from_geojson(
                {"type": "Feature", "geometry": {"type": "Blob"}, "properties": {}}
            )
        assert_contains(error, "Could not decode a feature geometry")

    def test_to_geojson(_):
        feature = Feature(Point(1, 2), {"a": 1})
        assert feature.to_geojson() == {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": (1.0, 2.0)},
            "properties": {"a": 1},
        }


class TestFeatureCollection:
    def test_from_geojson(_, geojson):
        collection = FeatureCollection.from_geojson(geojson)
        assert len(collection) == 2
        assert collection[0].properties["NAME"] == "Example Fire"
        assert collection.fields == ["NAME", "ACRES"]
        assert not collection.truncated

    def test_empty(_):
        collection = FeatureCollection.from_geojson(
            {"type": "FeatureCollection", "features": []}
        )
        assert len(collection) == 0
        assert collection.fields == []

    def test_missing_features(_, assert_contains):
        with pytest.raises(MissingAPIFieldError) as error:
            FeatureCollection.from_geojson({"type": "FeatureCollection"})
        assert_contains(error, 'missing the "features" field')

    def test_not_object(_):
        with pytest.raises(ParseError):
            FeatureCollection.from_geojson(["not", "geojson"])

    def test_to_frame(_, geojson):
        frame = FeatureCollection.from_geojson(geojson).to_frame()
        assert isinstance(frame, pd.DataFrame)
        assert list(frame.columns) == ["NAME", "ACRES"]
        assert frame["ACRES"].tolist() == [1250.5, 30.0]

    def test_truncated_geojson(_, geojson):
        collection = FeatureCollection.from_geojson(geojson, truncated=True)
        assert collection.to_geojson()["truncated"] == True


class TestTable:
    def test(_):
        table = Table(pd.DataFrame({"a": [1, 2], "b": [3, 4]}))
        assert len(table) == 2
        assert table.fields == ["a", "b"]


class TestImage:
    def test(_):
        image = Image(b"\x89PNG", "image/png")
        assert len(image) == 4
