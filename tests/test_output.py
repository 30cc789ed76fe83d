"""
Tests for trace output, parameter tables and the batch harness.

These tests verify:
    1. CSV traces carry metadata, parameters and headers
    2. CSV rows mirror the in-memory trace
    3. Output paths follow the seed/BDtime layout
    4. Parameter tables skip comments and reject bad input
    5. The batch harness runs every combination and honours rerun
"""

import csv

import numpy as np
import pytest

from factory_sim.config import load_parameters
from factory_sim.errors import ConfigurationError
from factory_sim.harness import run_batch, run_factory_simulation
from factory_sim.output.paths import output_paths, outputs_exist
from factory_sim.output.trace import CsvTraceWriter, ENTITY_HEADER, STATE_HEADER, TraceRecorder
from factory_sim.params_io import iter_parameter_rows, parameters_for, read_parameter_table


PARAMETER_CSV = """\
# parameter set for the blade-fitting line
mean_interarrival_time,mean_construction_time,mean_interbreakdown_time,mean_repair_time
60.0,45.0,2880.0,180.0
# slower arrivals
90.0,45.0,1440.0,120.0
"""


def _params(**overrides):
    values = dict(
        seed=3,
        time_limit=2000.0,
        mean_interarrival_time=60.0,
        mean_construction_time=45.0,
        mean_interbreakdown_time=500.0,
        mean_repair_time=100.0,
    )
    values.update(overrides)
    return load_parameters(**values)


def _read_csv(path):
    """Return (comment lines, header, data rows)."""
    with open(path, newline="") as f:
        lines = f.read().splitlines()
    comments = [line for line in lines if line.startswith("#")]
    rows = list(csv.reader(line for line in lines if not line.startswith("#")))
    return comments, rows[0], rows[1:]


class TestCsvTraceWriter:
    """Tests for the CSV sink."""

    def test_headers_and_metadata(self, tmp_path):
        params = _params()
        entities, state = tmp_path / "entities.csv", tmp_path / "state.csv"
        with CsvTraceWriter(entities, state, params, created_by="test_output.py"):
            pass

        for path, header in [(entities, ENTITY_HEADER), (state, STATE_HEADER)]:
            comments, file_header, rows = _read_csv(path)
            assert comments[0] == "# file created by code in test_output.py"
            assert comments[1].startswith("# file created on ")
            assert "# parameter seed = 3" in comments
            assert "# parameter mean_repair_time = 100.0" in comments
            assert tuple(file_header) == header
            assert rows == []

    def test_rows_mirror_trace(self, tmp_path):
        params = _params()
        recorder = TraceRecorder()
        run_factory_simulation(params, sink=recorder)

        entities, state = tmp_path / "entities.csv", tmp_path / "state.csv"
        with CsvTraceWriter(entities, state, params) as writer:
            run_factory_simulation(params, sink=writer)

        _, _, state_rows = _read_csv(state)
        _, _, entity_rows = _read_csv(entities)
        assert len(state_rows) == len(recorder.events)
        assert len(entity_rows) == len(recorder.jobs)
        assert state_rows[0] == [str(v) for v in recorder.events[0].as_row()]
        assert entity_rows[-1] == [str(v) for v in recorder.jobs[-1].as_row()]

    def test_state_row_format(self, tmp_path):
        recorder = TraceRecorder()
        run_factory_simulation(_params(time_limit=1.0), sink=recorder)
        # first event: arrival at t=0, two events pending after it was popped
        assert recorder.event_rows()[0] == (0.0, 1, "order_arrival", 1, 0, 0, 0)

    def test_without_parameters(self, tmp_path):
        entities, state = tmp_path / "e.csv", tmp_path / "s.csv"
        CsvTraceWriter(entities, state).close()
        comments, _, _ = _read_csv(state)
        assert not any(c.startswith("# parameter") for c in comments)


class TestOutputPaths:
    """Tests for the output directory layout."""

    def test_layout(self, tmp_path):
        entities, state = output_paths(tmp_path, 4, 2880.0)
        assert entities == tmp_path / "seed4" / "BDtime2880.0" / "entities.csv"
        assert state == tmp_path / "seed4" / "BDtime2880.0" / "state.csv"
        assert entities.parent.is_dir()

    def test_no_create(self, tmp_path):
        entities, _ = output_paths(tmp_path, 1, 10.0, create=False)
        assert not entities.parent.exists()

    def test_outputs_exist(self, tmp_path):
        entities, state = output_paths(tmp_path, 1, 10.0)
        assert not outputs_exist(entities, state)
        entities.write_text("")
        state.write_text("")
        assert outputs_exist(entities, state)


class TestParameterTable:
    """Tests for reading parameter CSVs."""

    def test_reads_rows_skipping_comments(self, tmp_path):
        path = tmp_path / "parameter_set.csv"
        path.write_text(PARAMETER_CSV)

        rows = list(iter_parameter_rows(read_parameter_table(path)))

        assert len(rows) == 2
        assert rows[0] == {
            "mean_interarrival_time": 60.0,
            "mean_construction_time": 45.0,
            "mean_interbreakdown_time": 2880.0,
            "mean_repair_time": 180.0,
        }
        assert rows[1]["mean_interbreakdown_time"] == 1440.0

    def test_initial_breakdown_column(self, tmp_path):
        path = tmp_path / "params.csv"
        path.write_text(
            "mean_interarrival_time,mean_construction_time,mean_interbreakdown_time,"
            "mean_repair_time,initial_breakdown_time\n"
            "60,45,2880,180,30\n"
        )
        (row,) = iter_parameter_rows(read_parameter_table(path))
        assert parameters_for(row, seed=1, time_limit=100.0).initial_breakdown_time == 30.0

    def test_missing_column(self, tmp_path):
        path = tmp_path / "params.csv"
        path.write_text("mean_interarrival_time,mean_construction_time\n1,2\n")
        with pytest.raises(ConfigurationError, match="mean_repair_time"):
            read_parameter_table(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            read_parameter_table(tmp_path / "nope.csv")

    def test_invalid_value_in_row(self, tmp_path):
        path = tmp_path / "params.csv"
        path.write_text(
            "mean_interarrival_time,mean_construction_time,mean_interbreakdown_time,mean_repair_time\n"
            "60,0,2880,180\n"
        )
        (row,) = iter_parameter_rows(read_parameter_table(path))
        with pytest.raises(ConfigurationError):
            parameters_for(row, seed=1, time_limit=100.0)


class TestBatchHarness:
    """Tests for repeated runs."""

    ROWS = [
        {"mean_interarrival_time": 60.0, "mean_construction_time": 45.0,
         "mean_interbreakdown_time": 500.0, "mean_repair_time": 50.0},
        {"mean_interarrival_time": 90.0, "mean_construction_time": 45.0,
         "mean_interbreakdown_time": 800.0, "mean_repair_time": 50.0},
    ]

    def test_timing_shape(self):
        perf_times = run_batch(self.ROWS, seeds=[1, 2, 3], time_limits=[100.0, 1000.0])
        assert isinstance(perf_times, np.ndarray)
        assert perf_times.shape == (3, 2)
        assert (perf_times > 0).all()

    def test_writes_every_combination(self, tmp_path):
        run_batch(self.ROWS, seeds=[1, 2], time_limits=[500.0], output_root=tmp_path)
        for seed in (1, 2):
            for bd in (500.0, 800.0):
                entities, state = output_paths(tmp_path, seed, bd, create=False)
                assert outputs_exist(entities, state)

    def test_skips_existing_when_not_rerunning(self, tmp_path):
        run_batch(self.ROWS, seeds=[1], time_limits=[500.0], output_root=tmp_path)
        perf_times = run_batch(self.ROWS, seeds=[1], time_limits=[500.0], output_root=tmp_path, rerun=False)
        assert (perf_times == 0.0).all()

    def test_bad_row_aborts(self):
        rows = [dict(self.ROWS[0], mean_repair_time=-1.0)]
        with pytest.raises(ConfigurationError):
            run_batch(rows, seeds=[1], time_limits=[100.0])
