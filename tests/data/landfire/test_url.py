import pytest

from wfdata.data.landfire import url
from wfdata.errors import UnknownDatasetError

#####
# Downloads
#####


class TestDownloadUrl:
    def test_conus(_):
        output = url.download_url("FBFM40", "conus", "LF2024")
        assert output == "https://landfire.gov/data-downloads/US_250/LF2024_FBFM40_250_CONUS.zip"

    def test_alaska(_):
        output = url.download_url("EVT", "alaska", "LF2022")
        assert output == "https://landfire.gov/data-downloads/AK_230/LF2022_EVT_230_AK.zip"

    def test_topographic(_):
        output = url.download_url("Elev", "conus", "LF2020")
        assert output == "https://landfire.gov/data-downloads/US_Topo_2020/LF2020_Elev_220_US.zip"

    def test_disturbance(_):
        output = url.download_url("Dist", "hawaii", "LF2023")
        assert output == "https://landfire.gov/data-downloads/HI_Disturbance/LF2023_Dist_240_HI.zip"

    def test_historical_disturbance(_):
        output = url.download_url("HDist", "conus", "LF2024")
        assert output == (
            "https://landfire.gov/data-downloads/AnnualDist/"
            "USAnnualDisturbance_1999_present.zip"
        )
        assert url.download_url("HDist", "hawaii", "LF2016").endswith(
            "HIAnnualDisturbance_2011_present.zip"
        )

    def test_case_insensitive(_):
        assert url.download_url("fbfm40", "CONUS", "lf2024") == url.download_url(
            "FBFM40", "conus", "LF2024"
        )

    @pytest.mark.parametrize(
        "args, name",
        (
            (("FBFM99", "conus", "LF2024"), "product"),
            (("FBFM40", "guam", "LF2024"), "region"),
            (("FBFM40", "conus", "LF1999"), "version"),
        ),
    )
    def test_unknown(_, args, name, assert_contains):
        with pytest.raises(UnknownDatasetError) as error:
            url.download_url(*args)
        assert_contains(error, f"Unknown LANDFIRE {name}", "Supported options are")

    def test_not_string(_):
        with pytest.raises(TypeError):
            url.download_url(40, "conus", "LF2024")


#####
# Services
#####


class TestServices:
    def test_wcs(_):
        output = url.wcs_url("conus", "LF2024")
        assert output == "https://edcintl.cr.usgs.gov/geoserver/landfire_wcs/us_250/wcs"

    def test_wms(_):
        output = url.wms_url("Alaska", "LF2016")
        assert output == "https://edcintl.cr.usgs.gov/geoserver/landfire/ak_200/ows"

    def test_wcs_capabilities(_):
        output = url.wcs_capabilities_url("hawaii", "LF2022")
        assert output == (
            "https://edcintl.cr.usgs.gov/geoserver/landfire_wcs/hi_230/wcs"
            "?request=GetCapabilities&service=WCS"
        )

    def test_wms_capabilities(_):
        output = url.wms_capabilities_url("conus", "LF2024")
        assert output == (
            "https://edcintl.cr.usgs.gov/geoserver/landfire/us_250/ows"
            "?service=WMS&request=GetCapabilities"
        )
