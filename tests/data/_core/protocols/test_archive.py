import datetime
from dataclasses import replace

import numpy as np
import pandas as pd
import pytest

from wfdata.data._core import Dataset, Query, Table
from wfdata.data._core.protocols import DailyArchive
from wfdata.data._core.protocols.archive import project, read_table, replace_sentinels
from wfdata.errors import ParseError

ROOT = "https://satepsanone.nesdis.noaa.gov/pub/FIRE/web/HMS"
COLUMNS = ("Lon", "Lat", "YearDay", "Time", "Satellite", "Method", "Ecosystem", "FRP")

HEADER = "Lon, Lat, YearDay, Time, Satellite, Method, Ecosystem, FRP\n"
ROWS = (
    "-118.50,34.20,2024228,1830,GOES-EAST,GOES FDC,22,51.2\n"
    "-120.10,38.70,2024228,1845,VIIRS,FIRMS,24,-999.000\n"
)


@pytest.fixture
def dataset():
    return Dataset(
        id="fire_points",
        source="HMS",
        root=ROOT,
        resource="Fire_Points/Text",
        name="Fire Points",
        description="",
        category="fire",
        geometry="point",
        prefix="hms_fire",
        extension="txt",
        columns=COLUMNS,
        sentinels=("FRP",),
        start=datetime.date(2003, 1, 1),
    )


class TestBuildUrl:
    def test(_, dataset):
        output = DailyArchive().build_url(dataset, Query(date="2024-08-15"))
        assert output == f"{ROOT}/Fire_Points/Text/2024/08/hms_fire20240815.txt"

    def test_missing_date(_, dataset, assert_contains):
        with pytest.raises(ValueError) as error:
            DailyArchive().build_url(dataset, Query())
        assert_contains(error, 'The HMS "fire_points" dataset requires a date')

    def test_before_start(_, dataset, assert_contains):
        with pytest.raises(ValueError) as error:
            DailyArchive().build_url(dataset, Query(date="2002-12-31"))
        assert_contains(error, "is only available from 2003-01-01")

    def test_unsupported(_, dataset):
        with pytest.raises(ValueError):
            DailyArchive().build_url(dataset, Query(date="2024-08-15", limit=5))


class TestDefaultFilename:
    def test_table(_, dataset):
        output = DailyArchive().default_filename(dataset, Query(date="2024-08-15"))
        assert output == "hms_fire20240815.csv"

    def test_archive(_, dataset):
        dataset = replace(dataset, prefix="hms_smoke", extension="zip", archive=True)
        output = DailyArchive().default_filename(dataset, Query(date="2024-08-15"))
        assert output == "hms_smoke20240815.zip"


class TestDetectError:
    def test_html(_):
        output = DailyArchive().detect_error("<!DOCTYPE html><html>Not Found</html>")
        assert output == "The server returned an HTML page instead of a data file"

    def test_data(_):
        assert DailyArchive().detect_error(HEADER + ROWS) is None


class TestDecode:
    def test_header(_, dataset):
        output = DailyArchive().decode(HEADER + ROWS, dataset, Query())
        assert isinstance(output, Table)
        assert output.fields == list(COLUMNS)
        assert output.data["Lon"].tolist() == [-118.5, -120.1]
        assert output.data["FRP"][0] == 51.2
        assert np.isnan(output.data["FRP"][1])

    def test_no_header(_, dataset):
        output = DailyArchive().decode(ROWS, dataset, Query())
        assert len(output) == 2
        assert output.fields == list(COLUMNS)

    def test_fields(_, dataset):
        query = Query(fields=["Lat", "Lon"])
        output = DailyArchive().decode(HEADER + ROWS, dataset, query)
        assert output.fields == ["Lat", "Lon"]

    def test_missing_field(_, dataset, assert_contains):
        query = Query(fields=["Lat", "Brightness"])
        with pytest.raises(ValueError) as error:
            DailyArchive().decode(HEADER + ROWS, dataset, query)
        assert_contains(error, "The data does not have the requested fields: Brightness")

    def test_empty(_, dataset):
        output = DailyArchive().decode("", dataset, Query())
        assert len(output) == 0
        assert output.fields == list(COLUMNS)


class TestReadTable:
    def test_header(_):
        output = read_table("latitude,longitude,confidence\n34.2,-118.5,n\n")
        assert list(output.columns) == ["latitude", "longitude", "confidence"]

    def test_empty(_):
        assert read_table("   \n").empty

    def test_invalid(_):
        with pytest.raises(ParseError):
            read_table('a,b\n"unterminated,2\n')


class TestReplaceSentinels:
    def test(_):
        data = pd.DataFrame({"FRP": [1.5, -999.0], "Other": [-999, 2]})
        replace_sentinels(data, ("FRP", "Missing"))
        assert data["FRP"][0] == 1.5
        assert np.isnan(data["FRP"][1])
        assert data["Other"].tolist() == [-999, 2]


class TestProject:
    def test(_):
        data = pd.DataFrame({"a": [1], "b": [2], "c": [3]})
        assert list(project(data, ("c", "a")).columns) == ["c", "a"]
