import numpy as np
import pytest

from gribweather.backends.cfgrib_helpers import GribDataset
from gribweather.parameters import VARIABLE_SPECS, get_product, get_spec
from gribweather.parameters.base import VariableSpec
from gribweather.pipeline.errors import AxisNotFound, UnsupportedRank
from gribweather.pipeline.extract import ExtractionPipeline
from gribweather.records import Parameter

FIXED_NOW = 1_700_000_000_000


def _pipeline(**kwargs):
    kwargs.setdefault("fill_values", ())
    kwargs.setdefault("clock", lambda: FIXED_NOW)
    return ExtractionPipeline(**kwargs)


@pytest.mark.parametrize("rank", [2, 3, 4])
def test_every_cell_of_first_slice_becomes_a_sample(make_reader, rank):
    lats = tuple(float(x) for x in np.linspace(58.0, 60.0, 4))
    lons = tuple(float(x) for x in np.linspace(9.0, 11.0, 5))
    shape = (2,) * (rank - 2) + (4, 5)
    values = np.random.default_rng(7).uniform(0.5, 4.0, size=shape)
    reader = make_reader({"swh": values}, lats=lats, lons=lons)

    result = _pipeline().extract(reader, get_spec(Parameter.WAVE_HEIGHT))

    plane = values.reshape((-1, 4, 5))[0]
    assert len(result.samples) == 20
    assert [s.value for s in result.samples] == pytest.approx(plane.ravel().tolist())
    assert result.min_value == pytest.approx(plane.min())
    assert result.max_value == pytest.approx(plane.max())
    assert result.source_variables == ("swh",)


def test_range_covers_points_dropped_by_decimation(make_reader):
    lats = tuple(float(x) for x in range(50))
    lons = tuple(float(x) for x in range(100))
    values = np.arange(5000, dtype=float).reshape(50, 100)
    values[0, 1] = 10_000.0
    values[0, 2] = -10_000.0
    reader = make_reader({"tp": values}, lats=lats, lons=lons)

    result = _pipeline(max_points=1000).extract(reader, get_spec(Parameter.PRECIPITATION))

    assert len(result.samples) == 1000
    assert result.samples[1].value == 5.0
    assert result.samples[-1].value == 4995.0
    assert result.max_value == 10_000.0
    assert result.min_value == -10_000.0


def test_nan_cells_are_dropped(make_reader):
    values = np.array([[1.0, np.nan, 3.0], [np.nan, np.nan, 0.5]])
    result = _pipeline().extract(make_reader({"VHM0": values}), get_spec(Parameter.WAVE_HEIGHT))
    assert [s.value for s in result.samples] == [1.0, 3.0, 0.5]
    assert (result.min_value, result.max_value) == (0.5, 3.0)


def test_configured_fill_values_are_dropped(make_reader):
    values = np.array([[1.0, 9999.0, 3.0], [9999.0, 2.0, 9999.0]])
    pipeline = _pipeline(fill_values=[9999.0])
    result = pipeline.extract(make_reader({"swh": values}), get_spec(Parameter.WAVE_HEIGHT))
    assert [s.value for s in result.samples] == [1.0, 3.0, 2.0]
    assert result.max_value == 3.0


def test_all_invalid_grid_reports_zero_range(make_reader):
    values = np.full((2, 3), np.nan)
    result = _pipeline().extract(make_reader({"swh": values}), get_spec(Parameter.WAVE_HEIGHT))
    assert result.is_empty
    assert (result.min_value, result.max_value) == (0.0, 0.0)


def test_missing_variable_gives_empty_result(make_reader):
    result = _pipeline().extract(make_reader({"unrelated": np.ones((2, 3))}), get_spec(Parameter.CURRENT_SPEED))
    assert result.parameter is Parameter.CURRENT_SPEED
    assert result.samples == ()
    assert result.to_dict() == {"data": [], "minValue": 0.0, "maxValue": 0.0, "parameter": "CURRENT_SPEED"}


@pytest.mark.parametrize("parameter", list(Parameter))
def test_missing_axes_fail_for_every_parameter(make_reader, parameter):
    reader = make_reader({"swh": np.ones((2, 3))}, with_axes=False)
    with pytest.raises(AxisNotFound):
        _pipeline().extract(reader, get_spec(parameter))


def test_unsupported_rank_propagates(make_reader):
    reader = make_reader({"swh": np.ones((2, 3))})
    reader.datasets[0]["swh5"] = (("a", "b", "c", "latitude", "longitude"), np.ones((1, 1, 1, 2, 3)))
    custom = VariableSpec(parameter=Parameter.WAVE_HEIGHT, direct_names=("swh5",))
    with pytest.raises(UnsupportedRank):
        _pipeline().extract(reader, custom)


class FailingReader(GribDataset):
    def read(self, name):
        raise OSError(f"Unexpected end of GRIB file while reading {name}")


@pytest.mark.parametrize("parameter", [Parameter.WAVE_HEIGHT, Parameter.WIND_SPEED])
def test_reader_io_errors_are_not_reported_as_missing(dataset_builder, parameter):
    reader = FailingReader([dataset_builder({"swh": np.ones((2, 3)), "u10": np.ones((2, 3)), "v10": np.ones((2, 3))})])
    with pytest.raises(OSError):
        _pipeline().extract(reader, get_spec(parameter))


def test_wind_is_derived_from_components(wind_dataset):
    reader = GribDataset([wind_dataset])
    specs = get_product("wind").specs(VARIABLE_SPECS)

    speed, direction = _pipeline().extract_many(reader, specs)

    assert speed.parameter is Parameter.WIND_SPEED
    assert direction.parameter is Parameter.WIND_DIRECTION
    # the NaN u-component cell is skipped in both
    assert len(speed.samples) == 5
    assert len(direction.samples) == 5
    assert speed.samples[0].value == 5.0
    assert [s.value for s in direction.samples[1:3]] == pytest.approx([270.0, 180.0])
    assert speed.source_variables == ("u10", "v10")
    assert (speed.min_value, speed.max_value) == (1.0, 5.0)


def test_timestamp_comes_from_dataset_valid_time(wind_dataset):
    result = _pipeline().extract(GribDataset([wind_dataset]), get_spec(Parameter.WIND_SPEED))
    expected = int(np.datetime64("2024-01-01T06:00", "ms").astype("int64"))
    assert {s.timestamp for s in result.samples} == {expected}


def test_timestamp_falls_back_to_clock(make_reader):
    result = _pipeline().extract(make_reader({"swh": np.ones((2, 3))}), get_spec(Parameter.WAVE_HEIGHT))
    assert {s.timestamp for s in result.samples} == {FIXED_NOW}


def test_results_serialize_to_wire_shape(make_reader):
    result = _pipeline().extract(make_reader({"swh": np.full((2, 3), 1.5)}), get_spec(Parameter.WAVE_HEIGHT))
    payload = result.to_dict()
    assert payload["parameter"] == "WAVE_HEIGHT"
    assert payload["minValue"] <= payload["maxValue"]
    assert payload["data"][0] == {"latitude": 60.0, "longitude": 10.0, "value": 1.5, "timestamp": FIXED_NOW}
    frame = result.to_dataframe()
    assert list(frame.columns) == ["latitude", "longitude", "value", "timestamp", "parameter"]
    assert len(frame) == 6
