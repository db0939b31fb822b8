import datetime

import pytest

from wfdata.data._core import Dataset, Registry, Source
from wfdata.data._core.protocols import ArcGIS, DailyArchive

ROOT = "https://services3.arcgis.com/example/ArcGIS/rest/services"


@pytest.fixture
def dataset():
    return Dataset(
        id="perimeters",
        source="TEST",
        root=ROOT,
        resource="Perimeters",
        name="Perimeters",
        description="Test perimeters",
        category="perimeters",
        geometry="polygon",
        layer=0,
    )


@pytest.fixture
def smoke():
    return Dataset(
        id="smoke",
        source="TEST",
        root="https://www.example.gov/HMS",
        resource="Smoke_Polygons/Shapefile",
        name="Smoke",
        description="Test smoke polygons",
        category="smoke",
        geometry="polygon",
        prefix="hms_smoke",
        extension="zip",
        start=datetime.date(2005, 1, 1),
        archive=True,
    )


@pytest.fixture
def source(dataset):
    return Source(Registry("TEST", [dataset]), ArcGIS(), "Test server")


@pytest.fixture
def archive_source(smoke):
    return Source(Registry("TEST", [smoke]), DailyArchive(), "Test archive")
