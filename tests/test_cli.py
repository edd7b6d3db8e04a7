import json

import pytest
import requests
from click.testing import CliRunner

from gribweather import cli
from gribweather.backends.cfgrib_helpers import GribDataset


@pytest.fixture
def grib_file(tmp_path, monkeypatch, wind_dataset):
    monkeypatch.setattr(cli, "configure_logging", lambda: None)
    monkeypatch.setattr(cli, "open_grib_dataset", lambda path, engine=None: GribDataset([wind_dataset]))
    path = tmp_path / "wind.grb"
    path.write_bytes(b"GRIB")
    return path


def test_extract_product_prints_both_results(grib_file):
    result = CliRunner().invoke(cli.main, ["extract", str(grib_file), "--product", "wind"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [item["parameter"] for item in payload] == ["WIND_SPEED", "WIND_DIRECTION"]


def test_extract_single_parameter_honors_max_points(grib_file):
    result = CliRunner().invoke(
        cli.main,
        ["extract", str(grib_file), "--parameter", "wind_speed", "--max-points", "2"],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["parameter"] == "WIND_SPEED"
    assert [point["value"] for point in payload["data"]] == [5.0, 1.0, 1.0]
    assert payload["maxValue"] == 5.0


def test_extract_requires_a_selection(grib_file):
    result = CliRunner().invoke(cli.main, ["extract", str(grib_file)])
    assert result.exit_code != 0
    assert "--product" in result.output


def test_variables_lists_names_and_shapes(grib_file):
    result = CliRunner().invoke(cli.main, ["variables", str(grib_file)])
    assert result.exit_code == 0, result.output
    assert "u10\t(2, 3)" in result.stdout


def test_fetch_reports_backend_errors(monkeypatch, tmp_path):
    monkeypatch.setattr(cli, "configure_logging", lambda: None)

    def offline(url, headers, timeout):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr("gribweather.backends.metno_backend.requests.get", offline)
    result = CliRunner().invoke(cli.main, ["fetch", "waves", "oslofjord", "--work-dir", str(tmp_path)])
    assert result.exit_code == 1
    assert "Download failed" in result.output
