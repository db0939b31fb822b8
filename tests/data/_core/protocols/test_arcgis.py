from dataclasses import replace

import pytest

from wfdata.data._core import Dataset, FeatureCollection, Query
from wfdata.data._core.protocols import ArcGIS
from wfdata.errors import MissingAPIFieldError, ParseError

ROOT = "https://services3.arcgis.com/T4QMspbfLg3qTGWY/ArcGIS/rest/services"


@pytest.fixture
def dataset():
    return Dataset(
        id="current_perimeters",
        source="WFIGS",
        root=ROOT,
        resource="WFIGS_Interagency_Perimeters_Current",
        name="Current Perimeters",
        description="",
        category="perimeters",
        geometry="polygon",
        layer=0,
        server="FeatureServer",
    )


class TestLayerUrl:
    def test(_, dataset):
        assert ArcGIS.layer_url(dataset) == (
            f"{ROOT}/WFIGS_Interagency_Perimeters_Current/FeatureServer/0"
        )

    def test_mapserver(_, dataset):
        dataset = replace(dataset, server="MapServer", layer=62)
        assert ArcGIS.layer_url(dataset).endswith("/MapServer/62")


class TestBuildUrl:
    def test_default(_, dataset, parse):
        base, params = parse(ArcGIS().build_url(dataset, Query()))
        assert base == f"{ROOT}/WFIGS_Interagency_Perimeters_Current/FeatureServer/0/query"
        assert params == {"where": "1=1", "outFields": "*", "f": "geojson", "outSR": "4326"}

    def test_options(_, dataset, parse):
        query = Query(
            where="GIS_ACRES > 1000",
            fields=["poly_IncidentName", "GIS_ACRES"],
            limit=5,
            offset=10,
            sortby="GIS_ACRES DESC",
            bbox=(-125, 32, -114, 42),
        )
        _, params = parse(ArcGIS().build_url(dataset, query))
        assert params == {
            "where": "GIS_ACRES > 1000",
            "geometry": "-125,32,-114,42",
            "geometryType": "esriGeometryEnvelope",
            "inSR": "4326",
            "spatialRel": "esriSpatialRelIntersects",
            "outFields": "poly_IncidentName,GIS_ACRES",
            "f": "geojson",
            "outSR": "4326",
            "resultRecordCount": "5",
            "resultOffset": "10",
            "orderByFields": "GIS_ACRES DESC",
        }

    def test_unsupported(_, dataset):
        with pytest.raises(ValueError):
            ArcGIS().build_url(dataset, Query(datetime="2024-01-01/.."))


class TestCountUrl:
    def test(_, dataset, parse):
        _, params = parse(ArcGIS().count_url(dataset, Query(where="STATE = 'CA'")))
        assert params == {
            "where": "STATE = 'CA'",
            "returnCountOnly": "true",
            "f": "json",
        }


class TestFieldsUrl:
    def test(_, dataset, parse):
        base, params = parse(ArcGIS().fields_url(dataset))
        assert base.endswith("/FeatureServer/0")
        assert params == {"f": "json"}


class TestDetectError:
    def test_none(_):
        assert ArcGIS().detect_error({"type": "FeatureCollection", "features": []}) is None

    def test_error(_):
        payload = {
            "error": {
                "code": 400,
                "message": "Unable to complete operation.",
                "details": ["'where' parameter is invalid"],
            }
        }
        assert ArcGIS().detect_error(payload) == (
            "Unable to complete operation. (code 400). 'where' parameter is invalid"
        )

    def test_string_error(_):
        assert ArcGIS().detect_error({"error": "Bad request"}) == "Bad request"


class TestDecode:
    def test(_, dataset, geojson):
        output = ArcGIS().decode(geojson, dataset, Query())
        assert isinstance(output, FeatureCollection)
        assert len(output) == 2
        assert not output.truncated

    def test_transfer_limit(_, dataset, geojson):
        geojson["exceededTransferLimit"] = True
        assert ArcGIS().decode(geojson, dataset, Query()).truncated

    def test_transfer_limit_properties(_, dataset, geojson):
        geojson["properties"] = {"exceededTransferLimit": True}
        assert ArcGIS().decode(geojson, dataset, Query()).truncated

    def test_ceiling(_, dataset, geojson):
        dataset = replace(dataset, ceiling=2)
        assert ArcGIS().decode(geojson, dataset, Query()).truncated


class TestParseCount:
    def test(_):
        assert ArcGIS().parse_count({"count": 42}) == 42

    def test_missing(_):
        with pytest.raises(MissingAPIFieldError):
            ArcGIS().parse_count({"features": []})

    def test_not_integer(_):
        with pytest.raises(ParseError):
            ArcGIS().parse_count({"count": "many"})


class TestParseFields:
    def test(_):
        payload = {
            "fields": [
                {"name": "OBJECTID", "type": "esriFieldTypeOID", "alias": "Object ID"},
                {"name": "GIS_ACRES", "type": "esriFieldTypeDouble"},
            ]
        }
        assert ArcGIS().parse_fields(payload) == [
            ("OBJECTID", "esriFieldTypeOID", "Object ID"),
            ("GIS_ACRES", "esriFieldTypeDouble", "GIS_ACRES"),
        ]

    def test_missing(_):
        with pytest.raises(MissingAPIFieldError):
            ArcGIS().parse_fields({"name": "layer"})
