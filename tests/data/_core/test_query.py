import datetime

import pytest

from wfdata.data._core import Query


class TestInit:
    def test_defaults(_):
        query = Query()
        assert query.where is None
        assert query.fields == "*"
        assert query.options == {}
        assert query.requested() == []
        assert not query.projected

    def test_fields(_):
        query = Query(fields=["NAME", "ACRES"])
        assert query.fields == ("NAME", "ACRES")
        assert query.projected

    def test_single_field(_):
        assert Query(fields="NAME").fields == ("NAME",)

    def test_empty_fields(_, assert_contains):
        with pytest.raises(ValueError) as error:
            Query(fields=[])
        assert_contains(error, "fields cannot be empty")

    def test_invalid_field(_, assert_contains):
        with pytest.raises(TypeError) as error:
            Query(fields=["NAME", 5])
        assert_contains(error, "fields[1] is not a string")

    def test_bbox_string(_):
        query = Query(bbox="-125,24,-66,50")
        assert query.bbox == (-125.0, 24.0, -66.0, 50.0)

    def test_date_string(_):
        assert Query(date="2024-08-15").date == datetime.date(2024, 8, 15)

    @pytest.mark.parametrize("limit", (0, -5))
    def test_invalid_limit(_, limit):
        with pytest.raises(ValueError):
            Query(limit=limit)

    def test_bool_limit(_):
        with pytest.raises(TypeError):
            Query(limit=True)

    def test_negative_offset(_):
        with pytest.raises(ValueError):
            Query(offset=-1)

    def test_invalid_where(_, assert_contains):
        with pytest.raises(TypeError) as error:
            Query(where=5)
        assert_contains(error, "where must be a string")

    def test_invalid_options(_, assert_contains):
        with pytest.raises(TypeError) as error:
            Query(options=["width"])
        assert_contains(error, "options must be a dict")

    def test_options_copied(_):
        options = {"width": 512}
        query = Query(options=options)
        options["width"] = 10
        assert query.options == {"width": 512}

    def test_unhashable(_):
        assert Query(limit=5) == Query(limit=5)
        with pytest.raises(TypeError):
            hash(Query())


class TestRequested:
    def test(_):
        query = Query(
            where="ACRES > 5",
            fields=["NAME"],
            limit=5,
            days=7,
            options={"width": 256, "height": 128},
        )
        assert query.requested() == [
            "where",
            "fields",
            "limit",
            "days",
            "options.width",
            "options.height",
        ]
