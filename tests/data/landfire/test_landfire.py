from unittest.mock import patch

import pytest

from wfdata.data import landfire
from wfdata.data._utils import requests
from wfdata.errors import HTTPStatusError

URL = "https://landfire.gov/data-downloads/US_250/LF2024_FBFM40_250_CONUS.zip"


class TestInfo:
    def test(_):
        output = landfire.info()
        assert "LANDFIRE" in output
        assert "fire_regime" in output


class TestDownloadProduct:
    @patch("requests.get", spec=True)
    @patch("requests.head", spec=True)
    def test(_, head, get, response, data_dir):
        head.return_value = response(200)
        get.return_value = response(200, b"zipped rasters")
        path = landfire.download_product("FBFM40", "conus", "LF2024")

        assert path.name == "LF2024_FBFM40_250_CONUS.zip"
        assert path.parent.name == "LANDFIRE"
        assert path.read_bytes() == b"zipped rasters"
        assert head.call_args.args[0] == URL
        assert get.call_args.args[0] == URL

    @patch("requests.get", spec=True)
    @patch("requests.head", spec=True)
    def test_not_published(_, head, get, response, tmp_path, assert_contains):
        head.return_value = response(404)
        with pytest.raises(HTTPStatusError) as error:
            landfire.download_product("FBFM40", "hawaii", "LF2001", parent=tmp_path)
        assert_contains(
            error, "LANDFIRE FBFM40 is not available for hawaii LF2001 (HTTP status 404)"
        )
        assert error.value.status == 404
        get.assert_not_called()
        assert list(tmp_path.iterdir()) == []

    @patch("requests.get", spec=True)
    @patch("requests.head", spec=True)
    def test_existing(_, head, get, tmp_path):
        path = tmp_path / "LF2024_FBFM40_250_CONUS.zip"
        path.write_bytes(b"existing")
        output = landfire.download_product("fbfm40", "conus", "lf2024", parent=tmp_path)
        assert output == path.resolve()
        assert path.read_bytes() == b"existing"
        head.assert_not_called()
        get.assert_not_called()

    @patch("requests.get", spec=True)
    @patch("requests.head", spec=True)
    def test_force(_, head, get, response, tmp_path):
        path = tmp_path / "fuels.zip"
        path.write_bytes(b"old")
        head.return_value = response(200)
        get.return_value = response(200, b"new")
        landfire.download_product(
            "FBFM40", "conus", "LF2024", parent=tmp_path, filename="fuels.zip", force=True
        )
        assert path.read_bytes() == b"new"


class TestListDownloads:
    def test_empty(_):
        assert landfire.list_downloads() == []

    def test(_, data_dir):
        folder = data_dir / "LANDFIRE"
        folder.mkdir(parents=True)
        (folder / "b.zip").write_bytes(b"")
        (folder / "a.zip").write_bytes(b"")
        assert landfire.list_downloads() == ["a.zip", "b.zip"]


@pytest.mark.web(api="landfire")
class TestLive:
    def test_capabilities(_):
        url = landfire.wcs_capabilities_url("conus", "LF2024")
        assert requests.head(url, 60, "LANDFIRE") == 200
