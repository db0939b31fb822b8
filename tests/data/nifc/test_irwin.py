from unittest.mock import patch

import pytest

from wfdata.data.nifc import irwin
from wfdata.errors import HTTPStatusError


class TestCatalog:
    def test_datasets(_):
        assert [dataset.id for dataset in irwin.datasets()] == [
            "fire_occurrence",
            "usa_current_incidents",
            "usa_current_perimeters",
        ]

    def test_roots(_):
        assert irwin.dataset("fire_occurrence").root == irwin.NIFC_BASE
        assert irwin.dataset("usa_current_perimeters").root == irwin.ESRI_BASE
        assert irwin.dataset("usa_current_perimeters").layer == 1


class TestQueryUrl:
    def test(_):
        url = irwin.query_url("usa_current_incidents", where="DailyAcres > 100")
        assert url.startswith(
            f"{irwin.ESRI_BASE}/USA_Wildfires_v1/FeatureServer/0/query?"
        )
        assert "where=DailyAcres+%3E+100" in url


class TestDownload:
    @patch("requests.get", spec=True)
    def test_http_error(_, mock, response):
        mock.return_value = response(502, b"")
        with pytest.raises(HTTPStatusError) as error:
            irwin.download("usa_current_incidents")
        assert error.value.status == 502
