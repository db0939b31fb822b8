import sqlite3
import zipfile
from unittest.mock import patch

import pandas as pd
import pytest

from wfdata.data.usfs import fpa_fod
from wfdata.errors import DatabaseNotAvailableError

ROWS = [
    (1, "BIG FIRE", 2018, "2018-07-01", "2018-08-01", 5000.0, "G", "Human", "Arson/Incendiarism", "CA", "Butte", 39.7, -121.6),
    (2, "SMALL FIRE", 2018, "2018-06-01", "2018-06-01", 0.1, "A", "Natural", "Natural", "CA", "Shasta", 40.6, -122.4),
    (3, "MEDIUM FIRE", 2019, "2019-05-01", "2019-05-03", 150.0, "D", "Human", "Smoking", "OR", "Lane", 44.0, -123.0),
]


@pytest.fixture
def database():
    path = fpa_fod.database_path()
    path.parent.mkdir(parents=True)
    connection = sqlite3.connect(path)
    connection.execute(
        "CREATE TABLE Fires (FOD_ID INTEGER NOT NULL, FIRE_NAME TEXT, FIRE_YEAR INTEGER, "
        "DISCOVERY_DATE TEXT, CONT_DATE TEXT, FIRE_SIZE REAL, FIRE_SIZE_CLASS TEXT, "
        "NWCG_CAUSE_CLASSIFICATION TEXT, NWCG_GENERAL_CAUSE TEXT, STATE TEXT, "
        "COUNTY TEXT, LATITUDE REAL, LONGITUDE REAL)"
    )
    connection.executemany(f"INSERT INTO Fires VALUES ({','.join('?' * 13)})", ROWS)
    connection.commit()
    connection.close()
    return path


class TestDatabasePath:
    def test(_, data_dir):
        assert fpa_fod.database_path() == data_dir / "FPA_FOD" / "FPA_FOD_20221014.sqlite"


class TestConnect:
    def test_missing(_, assert_contains):
        with pytest.raises(DatabaseNotAvailableError) as error:
            with fpa_fod.connect():
                pass
        assert_contains(error, "The FPA-FOD database has not been downloaded")

    def test_closes(_, database):
        with fpa_fod.connect() as connection:
            connection.execute("SELECT 1")
        with pytest.raises(sqlite3.ProgrammingError):
            connection.execute("SELECT 1")

    def test_closes_on_error(_, database):
        with pytest.raises(sqlite3.OperationalError):
            with fpa_fod.connect() as connection:
                connection.execute("SELECT * FROM Missing")
        with pytest.raises(sqlite3.ProgrammingError):
            connection.execute("SELECT 1")


class TestDownloadDatabase:
    @patch("requests.get", spec=True)
    def test(_, mock, response, tmp_path):
        archive = tmp_path / "source.zip"
        with zipfile.ZipFile(archive, "w") as zip:
            zip.writestr("Data/FPA_FOD_20221014.sqlite", b"database")
        mock.return_value = response(200, archive.read_bytes())

        path = fpa_fod.download_database()
        assert path == fpa_fod.database_path()
        assert path.read_bytes() == b"database"
        assert list(path.parent.iterdir()) == [path]

    @patch("requests.get", spec=True)
    def test_existing(_, mock, database):
        assert fpa_fod.download_database() == database
        mock.assert_not_called()


class TestInfo:
    def test_not_downloaded(_):
        assert "Status: Not downloaded" in fpa_fod.info()

    def test_downloaded(_, database):
        output = fpa_fod.info()
        assert "Status: Downloaded" in output
        assert "Records: 3" in output


class TestQuery:
    def test(_, database):
        output = fpa_fod.query("SELECT FIRE_NAME FROM Fires ORDER BY FIRE_SIZE DESC")
        assert isinstance(output, pd.DataFrame)
        assert output["FIRE_NAME"].tolist() == ["BIG FIRE", "MEDIUM FIRE", "SMALL FIRE"]

    def test_params(_, database):
        output = fpa_fod.query("SELECT FOD_ID FROM Fires WHERE STATE = ?", ["OR"])
        assert output["FOD_ID"].tolist() == [3]

    def test_limit(_, database):
        output = fpa_fod.query("SELECT * FROM Fires;", limit=2)
        assert len(output) == 2

    def test_existing_limit(_, database):
        output = fpa_fod.query("SELECT * FROM Fires LIMIT 1", limit=2)
        assert len(output) == 1

    def test_bound_limit(_, database):
        output = fpa_fod.query("SELECT * FROM Fires LIMIT ?", [1], limit=2)
        assert len(output) == 1

    def test_named_limit(_, database):
        sql = "SELECT * FROM Fires LIMIT :n"
        output = fpa_fod.query(sql, {"n": 1}, limit=2)
        assert len(output) == 1

    def test_not_downloaded(_):
        with pytest.raises(DatabaseNotAvailableError):
            fpa_fod.query("SELECT 1")


class TestTables:
    def test(_, database):
        assert fpa_fod.tables() == ["Fires"]


class TestSchema:
    def test(_, database):
        output = fpa_fod.schema()
        assert output[0] == ("FOD_ID", "INTEGER", False)
        assert output[1] == ("FIRE_NAME", "TEXT", True)
        assert len(output) == 13

    def test_invalid(_, database, assert_contains):
        with pytest.raises(ValueError) as error:
            fpa_fod.schema('Fires"); DROP TABLE Fires; --')
        assert_contains(error, "table may only contain letters and underscores")


class TestCount:
    def test_all(_, database):
        assert fpa_fod.count() == 3

    def test_where(_, database):
        assert fpa_fod.count("STATE = 'CA'") == 2


class TestSummaries:
    def test_states(_, database):
        output = fpa_fod.states()
        assert output.to_dict("list") == {"STATE": ["CA", "OR"], "count": [2, 1]}

    def test_years(_, database):
        output = fpa_fod.years()
        assert output.to_dict("list") == {"year": [2018, 2019], "count": [2, 1]}

    def test_causes(_, database):
        assert len(fpa_fod.causes()) == 3


class TestFires:
    def test_filters(_, database):
        output = fpa_fod.fires(state="CA", min_size=1)
        assert output["FIRE_NAME"].tolist() == ["BIG FIRE"]

    def test_limit(_, database):
        output = fpa_fod.fires(limit=2)
        assert output["FOD_ID"].tolist() == [1, 3]

    def test_cause(_, database):
        output = fpa_fod.fires(cause="Smoking")
        assert output["STATE"].tolist() == ["OR"]

    def test_injection_is_bound(_, database):
        output = fpa_fod.fires(state="CA' OR '1'='1")
        assert output.empty


class TestLargestFires:
    def test(_, database):
        output = fpa_fod.largest_fires(2)
        assert output["FIRE_SIZE"].tolist() == [5000.0, 150.0]

    def test_year(_, database):
        output = fpa_fod.largest_fires(5, year=2018, state="CA")
        assert output["FOD_ID"].tolist() == [1, 2]

    def test_invalid(_):
        with pytest.raises(ValueError):
            fpa_fod.largest_fires(0)
