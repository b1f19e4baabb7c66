from pathlib import Path

import pytest

from schedsim.errors import WorkloadFormatError
from schedsim.models import Process
from schedsim.workload_io import load_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":2,"arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[0].priority == 1
    assert procs[1].priority is None
    assert procs[1].arrival_time == 1


def test_load_json_object_with_processes_key(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"processes": [{"pid": "P7", "arrival_time": 2, "burst_time": 4}]}')
    procs = load_workload(p)
    assert procs == [Process(7, 2, 4)]


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nP1,0,3,1\n2,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == 1
    assert procs[1].pid == 2
    assert procs[1].priority is None


def test_invalid_entry(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,0,x\n")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_unsupported_format(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_invalid_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text("{not json")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_fractional_json_times_rejected(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid": 1, "arrival_time": 0.9, "burst_time": 2.7}]')
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_whole_number_floats_accepted(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid": 1, "arrival_time": 0.0, "burst_time": 3.0, "priority": 2.0}]')
    assert load_workload(p) == [Process(1, 0, 3, 2)]


def test_boolean_values_rejected(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid": 1, "arrival_time": 0, "burst_time": true}]')
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_fractional_csv_times_rejected(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\n1,0,2.5\n")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_missing_file(tmp_path: Path):
    with pytest.raises(WorkloadFormatError):
        load_workload(tmp_path / "nope.json")


def test_non_utf8_file(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_bytes(b"pid,arrival_time,burst_time\n\xff\xfe,0,1\n")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)
