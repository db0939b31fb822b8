import json
from urllib.parse import parse_qs, urlsplit

import pytest
from requests import Response

#####
# Options
#####


def pytest_addoption(parser):
    parser.addoption(
        "--web",
        action="store_true",
        default=False,
        help="Run tests that query live web services",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "web(api): Tests that query live web services. Use --web to run"
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--web"):
        return
    skip = pytest.mark.skip(reason="Use --web to run tests that query live services")
    for item in items:
        if "web" in item.keywords:
            item.add_marker(skip)


#####
# Fixtures
#####


@pytest.fixture
def assert_contains():
    def assert_contains(error, *strings):
        message = error.value.args[0]
        for string in strings:
            assert string in message

    return assert_contains


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    "Saves downloaded files beneath a temporary folder"
    folder = tmp_path / "wfdata"
    monkeypatch.setenv("WFDATA_DIR", str(folder))
    return folder


@pytest.fixture
def response():
    def response(status, content=b"", reason=None):
        output = Response()
        output.status_code = status
        output._content = content
        output._content_consumed = True
        output.reason = reason
        output.encoding = "utf-8"
        return output

    return response


@pytest.fixture
def json_response(response):
    def json_response(content, status=200):
        return response(status, json.dumps(content).encode("utf-8"))

    return json_response


@pytest.fixture
def text_response(response):
    def text_response(text, status=200):
        return response(status, text.encode("utf-8"))

    return text_response


@pytest.fixture
def geojson():
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "id": 1,
                "geometry": {"type": "Point", "coordinates": [-118.5, 34.2]},
                "properties": {"NAME": "Example Fire", "ACRES": 1250.5},
            },
            {
                "type": "Feature",
                "id": 2,
                "geometry": {"type": "Point", "coordinates": [-120.1, 38.7]},
                "properties": {"NAME": "Another Fire", "ACRES": 30.0},
            },
        ],
    }


@pytest.fixture
def parse():
    "Splits a URL into its base and a dict of query parameters"

    def parse(url):
        parts = urlsplit(url)
        base = f"{parts.scheme}://{parts.netloc}{parts.path}"
        params = {key: values[0] for key, values in parse_qs(parts.query).items()}
        return base, params

    return parse
