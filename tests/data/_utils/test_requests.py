from unittest.mock import patch

import pytest
from requests import Response
from requests.exceptions import ConnectTimeout, ReadTimeout

from wfdata.data._utils import requests as _requests
from wfdata.errors import HTTPStatusError, InvalidJSONError

#####
# Testing Fixtures
#####


@pytest.fixture
def args():
    url = "https://services3.arcgis.com/example/query"
    params = {"where": "1=1", "f": "json"}
    timeout = None
    servers = ["WFIGS", "NIFC Open Data"]
    outages = ["some url", "another url"]
    return url, params, timeout, servers, outages


#####
# Utils
#####


class TestValidate:
    def test_outages(_):
        timeout, servers, outages = _requests._validate(
            None, ["server 1", "server 2"], ["outage 1", "outage 2"]
        )
        assert timeout is None
        assert servers == ["server 1", "server 2"]
        assert outages == ["outage 1", "outage 2"]

    def test_no_outages(_):
        timeout, servers, outages = _requests._validate(
            None, ["server 1", "server 2"], None
        )
        assert timeout is None
        assert servers == ["server 1", "server 2"]
        assert outages == [None, None]

    def test_single_server(_):
        timeout, servers, outages = _requests._validate(
            15, "test server", "test outage"
        )
        assert timeout == 15
        assert servers == ["test server"]
        assert outages == ["test outage"]

    def test_invalid_timeout(_, assert_contains):
        with pytest.raises(TypeError) as error:
            _requests._validate("invalid", "server", None)
        assert_contains(error, "dtype of timeout")


class TestCheckConnections:
    def test_outages(_):
        connections = ["WFIGS", "NIFC Open Data"]
        outages = ["some url", "another url"]
        output = _requests._check_connections(connections, outages)
        assert output == (
            " Try checking:\n"
            "  * If WFIGS is down (some url)\n"
            "  * If NIFC Open Data is down (another url)\n"
            "If a connection is down, then wait a bit and try again later.\n"
            'Otherwise, try increasing "timeout" to a longer interval.'
        )

    def test_no_outages(_):
        connections = ["WFIGS", "NIFC Open Data"]
        outages = [None, None]
        output = _requests._check_connections(connections, outages)
        assert output == (
            " Try checking:\n"
            "  * If WFIGS is down\n"
            "  * If NIFC Open Data is down\n"
            "If a connection is down, then wait a bit and try again later.\n"
            'Otherwise, try increasing "timeout" to a longer interval.'
        )


class TestConnectTimeout:
    def test(_, assert_contains):
        servers = ["WFIGS", "NIFC Open Data"]
        outages = ["some url", "another url"]
        with pytest.raises(ConnectTimeout) as error:
            raise _requests._connect_timeout(servers, outages)
        assert_contains(
            error,
            (
                "Took too long to connect to the WFIGS server. Try checking:\n"
                "  * If your internet connection is down\n"
                "  * If WFIGS is down (some url)\n"
                "  * If NIFC Open Data is down (another url)\n"
            ),
        )


class TestReadTimeout:
    def test(_, assert_contains):
        servers = ["WFIGS", "NIFC Open Data"]
        outages = ["some url", "another url"]
        with pytest.raises(ReadTimeout) as error:
            raise _requests._read_timeout(servers, outages)
        assert_contains(
            error,
            (
                "The WFIGS server took too long to respond. Try checking:\n"
                "  * If WFIGS is down (some url)\n"
            ),
        )


#####
# Requests
#####


class TestQueryUrl:
    def test(_):
        base = "https://www.example.gov"
        params = {"where": "ACRES > 1000", "outFields": "*"}
        output = _requests.query_url(base, params, decode=False)
        assert output == r"https://www.example.gov/?where=ACRES+%3E+1000&outFields=%2A"

    def test_decode(_):
        base = "https://www.example.gov"
        params = {"test": "(in_parens)", "another": 5}
        output = _requests.query_url(base, params, decode=True)
        assert output == r"https://www.example.gov/?test=(in_parens)&another=5"


class TestResponse:
    @patch("requests.get", spec=True)
    def test_unchecked(_, mock, response, args):
        mock.return_value = response(500, b"Server error")
        output = _requests.response(*args)
        assert output.status_code == 500


class TestGet:
    @patch("requests.get", spec=True)
    def test_valid(_, mock, response, args):
        mock.return_value = response(200, b"Some content")
        output = _requests.get(*args)
        assert isinstance(output, Response)

    @patch("requests.get", spec=True)
    def test_connect_timeout(_, mock, args, assert_contains):
        mock.side_effect = ConnectTimeout("Took too long")
        with pytest.raises(ConnectTimeout) as error:
            _requests.get(*args)
        assert_contains(error, "Took too long to connect to the WFIGS server")

    @patch("requests.get", spec=True)
    def test_read_timeout(_, mock, args, assert_contains):
        mock.side_effect = ReadTimeout("Took too long")
        with pytest.raises(ReadTimeout) as error:
            _requests.get(*args)
        assert_contains(error, "The WFIGS server took too long to respond")

    @patch("requests.get", spec=True)
    def test_http_error(_, mock, response, args, assert_contains):
        mock.return_value = response(404, b"File not found")
        with pytest.raises(HTTPStatusError) as error:
            _requests.get(*args)
        assert error.value.status == 404
        assert_contains(
            error,
            "There was a problem connecting with the WFIGS server (HTTP status 404).",
        )


class TestContent:
    @patch("requests.get", spec=True)
    def test(_, mock, response, args):
        mock.return_value = response(200, b"Here is some content")
        output = _requests.content(*args)
        assert isinstance(output, bytes)
        assert output == b"Here is some content"


class TestJson:
    @patch("requests.get", spec=True)
    def test_valid(_, mock, json_response, args):
        content = {
            "text": "Some text",
            "number": 2.2,
            "list": [1, 2, 3],
        }
        mock.return_value = json_response(content)
        output = _requests.json(*args)
        assert isinstance(output, dict)
        assert output == content

    @patch("requests.get", spec=True)
    def test_invalid(_, mock, response, args, assert_contains):
        mock.return_value = response(200, b"This is not valid JSON")
        with pytest.raises(InvalidJSONError) as error:
            _requests.json(*args)
        assert_contains(error, "The WFIGS response was not valid JSON")


class TestHead:
    @patch("requests.head", spec=True)
    def test(_, mock, response):
        mock.return_value = response(404)
        output = _requests.head("https://www.example.gov/file.zip", 10, "LANDFIRE")
        assert output == 404

    @patch("requests.head", spec=True)
    def test_timeout(_, mock, assert_contains):
        mock.side_effect = ConnectTimeout("Took too long")
        with pytest.raises(ConnectTimeout) as error:
            _requests.head("https://www.example.gov/file.zip", 10, "LANDFIRE")
        assert_contains(error, "Took too long to connect to the LANDFIRE server")


class TestDownload:
    @patch("requests.get", spec=True)
    def test(_, mock, tmp_path, response, args):
        mock.return_value = response(200, b"This is some file")
        path = tmp_path / "test.txt"
        output = _requests.download(path, *args)

        assert output == path
        assert output.read_text() == "This is some file"
        assert mock.call_args.kwargs["stream"] == True

    @patch("requests.get", spec=True)
    def test_creates_parent(_, mock, tmp_path, response, args):
        mock.return_value = response(200, b"data")
        path = tmp_path / "nested" / "folder" / "test.zip"
        _requests.download(path, *args)
        assert path.read_bytes() == b"data"

    @patch("requests.get", spec=True)
    def test_failed(_, mock, tmp_path, response, args):
        mock.return_value = response(404, b"Not found")
        path = tmp_path / "test.zip"
        with pytest.raises(HTTPStatusError):
            _requests.download(path, *args)
        assert not path.exists()
        assert list(tmp_path.iterdir()) == []


#####
# Live requests
#####


@pytest.mark.web(api="wfigs")
class TestLive:
    @staticmethod
    def args():
        url = (
            "https://services3.arcgis.com/T4QMspbfLg3qTGWY/ArcGIS/rest/services/"
            "WFIGS_Interagency_Perimeters_Current/FeatureServer/0/query"
        )
        params = {"where": "1=1", "returnCountOnly": "true", "f": "json"}
        return url, params, 60, ["WFIGS"], None

    def test_content(self):
        output = _requests.content(*self.args())
        assert isinstance(output, bytes)

    def test_json(self):
        output = _requests.json(*self.args())
        assert "count" in output
