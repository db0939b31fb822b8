import datetime
from unittest.mock import patch

import pytest

from wfdata.data._core import Table
from wfdata.data.nasa import firms
from wfdata.errors import BackendError, ConfigurationMissingError, HTTPStatusError

KEY = "0123456789abcdef0123456789ABCDEF"
CSV = (
    "latitude,longitude,confidence,acq_date\n"
    "34.1,-118.2,90,2024-08-01\n"
    "34.2,-118.3,40,2024-08-01\n"
    "35.0,-119.0,75,2024-08-02\n"
)


@pytest.fixture
def key(monkeypatch):
    monkeypatch.setenv(firms.KEY_VARIABLE, KEY)
    return KEY


@pytest.fixture
def nokey(monkeypatch):
    monkeypatch.delenv(firms.KEY_VARIABLE, raising=False)


class TestMapKey:
    def test_get(_, key):
        assert firms.get_map_key() == KEY

    def test_get_missing(_, nokey):
        assert firms.get_map_key() is None

    def test_set(_, monkeypatch):
        monkeypatch.setenv(firms.KEY_VARIABLE, "")
        firms.set_map_key(KEY)
        assert firms.get_map_key() == KEY

    def test_set_warns(_, monkeypatch):
        monkeypatch.setenv(firms.KEY_VARIABLE, "")
        with pytest.warns(UserWarning, match="32-character"):
            firms.set_map_key("short")
        assert firms.get_map_key() == "short"

    def test_require_missing(_, nokey, assert_contains):
        with pytest.raises(ConfigurationMissingError) as error:
            firms.require_map_key()
        assert_contains(error, "FIRMS MAP_KEY is not configured", firms.REGISTER_URL)


class TestCatalog:
    def test_datasets(_):
        assert len(firms.datasets()) == 8
        assert [dataset.id for dataset in firms.datasets("SP")] == [
            "MODIS_SP",
            "VIIRS_SNPP_SP",
            "VIIRS_NOAA20_SP",
        ]

    def test_dataset(_):
        dataset = firms.dataset("LANDSAT_NRT")
        assert dataset.start == datetime.date(2022, 6, 20)

    def test_regions(_):
        regions = firms.regions()
        assert regions["world"] is None
        assert regions["conus"] == (-125, 24, -66, 50)
        regions["conus"] = None
        assert firms.REGIONS["conus"] is not None


class TestQueryUrl:
    def test_world(_, key):
        assert firms.query_url("VIIRS_NOAA20_NRT") == (
            f"{firms.API_BASE}/area/csv/{KEY}/VIIRS_NOAA20_NRT/world/1"
        )

    def test_region(_, key):
        assert firms.query_url("MODIS_NRT", region="conus", days=3) == (
            f"{firms.API_BASE}/area/csv/{KEY}/MODIS_NRT/-125,24,-66,50/3"
        )

    def test_bbox_and_date(_, key):
        url = firms.query_url(
            "VIIRS_SNPP_SP", bbox=(-120.5, 35, -119, 36.25), date="2023-07-04"
        )
        assert url == (
            f"{firms.API_BASE}/area/csv/{KEY}/VIIRS_SNPP_SP/"
            "-120.5,35,-119,36.25/1/2023-07-04"
        )

    def test_too_many_days(_, key, assert_contains):
        with pytest.raises(ValueError) as error:
            firms.query_url("MODIS_NRT", days=11)
        assert_contains(error, "days must be less than or equal to 10")

    def test_region_and_bbox(_, key):
        with pytest.raises(ValueError):
            firms.query_url("MODIS_NRT", region="conus", bbox=(0, 0, 1, 1))

    def test_unknown_region(_, key):
        with pytest.raises(ValueError):
            firms.query_url("MODIS_NRT", region="atlantis")

    def test_missing_key(_, nokey):
        with pytest.raises(ConfigurationMissingError):
            firms.query_url("MODIS_NRT")


class TestDownload:
    @patch("requests.get", spec=True)
    def test(_, mock, key, text_response):
        mock.return_value = text_response(CSV)
        output = firms.download("MODIS_NRT", region="california", days=2)
        assert isinstance(output, Table)
        assert len(output) == 3
        assert output.fields == ["latitude", "longitude", "confidence", "acq_date"]
        assert mock.call_args.args[0].endswith("/MODIS_NRT/-125,32,-114,42/2")

    @patch("requests.get", spec=True)
    def test_missing_key(_, mock, nokey):
        with pytest.raises(ConfigurationMissingError):
            firms.download("MODIS_NRT")
        mock.assert_not_called()

    @patch("requests.get", spec=True)
    def test_http_error_redacted(_, mock, key, text_response):
        mock.return_value = text_response(f"Server error for {KEY}", status=500)
        with pytest.raises(HTTPStatusError) as error:
            firms.download("MODIS_NRT")
        message = error.value.args[0]
        assert KEY not in message
        assert "[MAP_KEY]" in message
        assert "HTTP status 500" in message

    @patch("requests.get", spec=True)
    def test_invalid_key(_, mock, key, text_response):
        mock.return_value = text_response(f"Invalid MAP_KEY: {KEY}")
        with pytest.raises(BackendError) as error:
            firms.download("MODIS_NRT")
        message = error.value.args[0]
        assert "Invalid MAP_KEY" in message
        assert KEY not in message

    @patch("requests.get", spec=True)
    def test_empty(_, mock, key, text_response):
        mock.return_value = text_response("")
        output = firms.download("MODIS_NRT")
        assert len(output) == 0


class TestDataAvailability:
    @patch("requests.get", spec=True)
    def test(_, mock, key, text_response):
        mock.return_value = text_response(
            "data_id,min_date,max_date\nMODIS_NRT,2024-06-01,2024-08-01\n"
        )
        output = firms.data_availability("MODIS_NRT")
        assert output["max_date"].tolist() == ["2024-08-01"]
        assert mock.call_args.args[0] == (
            f"{firms.API_BASE}/data_availability/csv/{KEY}/MODIS_NRT"
        )

    @patch("requests.get", spec=True)
    def test_failed(_, mock, key, text_response):
        mock.return_value = text_response("", status=503)
        with pytest.raises(HTTPStatusError) as error:
            firms.data_availability("MODIS_NRT")
        assert KEY not in error.value.args[0]

    @patch("requests.get", spec=True)
    def test_invalid_key(_, mock, key, text_response):
        mock.return_value = text_response(f"Invalid MAP_KEY: {KEY}")
        with pytest.raises(BackendError) as error:
            firms.data_availability("MODIS_NRT")
        message = error.value.args[0]
        assert "Invalid MAP_KEY" in message
        assert KEY not in message
        assert error.value.dataset == "MODIS_NRT"


class TestFiles:
    @patch("requests.get", spec=True)
    def test_download_and_load(_, mock, key, text_response):
        mock.return_value = text_response(CSV)
        path = firms.download_file("VIIRS_NOAA20_NRT", date="2024-08-01")
        assert path.name == "VIIRS_NOAA20_NRT_20240801.csv"
        assert path.parent.name == "FIRMS"

        output = firms.load_file("VIIRS_NOAA20_NRT", date="2024-08-01")
        assert isinstance(output, Table)
        assert len(output) == 3

    @patch("requests.get", spec=True)
    def test_default_date(_, mock, key, text_response):
        mock.return_value = text_response(CSV)
        path = firms.download_file("MODIS_NRT")
        today = datetime.date.today()
        assert path.name == f"MODIS_NRT_{today:%Y%m%d}.csv"

    @patch("requests.get", spec=True)
    def test_existing(_, mock, key, text_response, tmp_path):
        mock.return_value = text_response(CSV)
        firms.download_file("MODIS_NRT", parent=tmp_path, filename="fires.csv")
        firms.download_file("MODIS_NRT", parent=tmp_path, filename="fires.csv")
        assert mock.call_count == 1


class TestRecentFires:
    @patch("requests.get", spec=True)
    def test_confidence(_, mock, key, text_response):
        mock.return_value = text_response(CSV)
        output = firms.recent_fires("MODIS_NRT", min_confidence=70)
        assert output.data["confidence"].tolist() == [90, 75]
        assert "/-125,24,-66,50/1" in mock.call_args.args[0]

    @patch("requests.get", spec=True)
    def test_categorical(_, mock, key, text_response):
        mock.return_value = text_response(
            "latitude,longitude,confidence\n34.1,-118.2,h\n34.2,-118.3,l\n"
        )
        output = firms.recent_fires(min_confidence=70)
        assert len(output) == 2


class TestHotspotsByDate:
    @patch("requests.get", spec=True)
    def test(_, mock, key, text_response):
        mock.return_value = text_response(CSV)
        output = firms.hotspots_by_date("MODIS_NRT", region="california")
        assert list(output) == ["2024-08-01", "2024-08-02"]
        assert len(output["2024-08-01"]) == 2
        assert "/7" in mock.call_args.args[0]

    @patch("requests.get", spec=True)
    def test_no_dates(_, mock, key, text_response):
        mock.return_value = text_response("latitude,longitude\n1,2\n")
        output = firms.hotspots_by_date()
        assert list(output) == ["all"]


@pytest.mark.web(api="firms")
class TestLive:
    def test_recent(_):
        if firms.get_map_key() is None:
            pytest.skip("FIRMS_MAP_KEY is not set")
        output = firms.recent_fires(region="california")
        assert isinstance(output, Table)
