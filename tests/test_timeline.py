import pytest

from schedsim.errors import TimelineConsistencyError
from schedsim.metrics import compute_metrics, summarize
from schedsim.models import ExecutionSlice, Process, Timeline
from schedsim.timeline import assemble_timeline, validate_timeline


def test_assembler_fills_idle_gaps():
    procs = [Process(1, 1, 2), Process(2, 6, 1)]
    decisions = [ExecutionSlice(1, 1, 2), ExecutionSlice(2, 6, 1)]
    timeline = assemble_timeline(decisions, procs)

    assert [(s.pid, s.start_time, s.duration) for s in timeline] == [
        (None, 0, 1),
        (1, 1, 2),
        (None, 3, 3),
        (2, 6, 1),
    ]
    assert timeline.makespan == 7
    assert timeline.idle_time == 4
    assert timeline.busy_time == 3


def test_assembler_rejects_overlap():
    procs = [Process(1, 0, 3), Process(2, 0, 2)]
    with pytest.raises(TimelineConsistencyError):
        assemble_timeline([ExecutionSlice(1, 0, 3), ExecutionSlice(2, 2, 2)], procs)


def test_assembler_rejects_start_before_arrival():
    with pytest.raises(TimelineConsistencyError):
        assemble_timeline([ExecutionSlice(1, 0, 2)], [Process(1, 1, 2)])


def test_assembler_rejects_incomplete_work():
    procs = [Process(1, 0, 3), Process(2, 0, 2)]
    with pytest.raises(TimelineConsistencyError):
        assemble_timeline([ExecutionSlice(1, 0, 3)], procs)


def test_assembler_rejects_unknown_pid():
    with pytest.raises(TimelineConsistencyError):
        assemble_timeline([ExecutionSlice(9, 0, 1)], [Process(1, 0, 1)])


def test_consistency_error_is_an_assertion():
    assert issubclass(TimelineConsistencyError, AssertionError)


def test_validate_timeline_detects_gap():
    timeline = Timeline((ExecutionSlice(1, 0, 2), ExecutionSlice(1, 3, 1)))
    with pytest.raises(TimelineConsistencyError):
        validate_timeline(timeline)


def test_validate_timeline_requires_start_at_zero():
    with pytest.raises(TimelineConsistencyError):
        validate_timeline(Timeline((ExecutionSlice(1, 1, 2),)))


def test_metrics_from_split_slices():
    procs = [Process(1, 0, 4, 2), Process(2, 2, 2, 1)]
    timeline = Timeline((ExecutionSlice(1, 0, 2), ExecutionSlice(2, 2, 2), ExecutionSlice(1, 4, 2)))
    m = compute_metrics(timeline, procs)

    p1 = m.for_process(1)
    assert (p1.start_time, p1.completion_time, p1.turnaround_time, p1.waiting_time) == (0, 6, 6, 2)
    p2 = m.for_process(2)
    assert (p2.start_time, p2.completion_time, p2.turnaround_time, p2.waiting_time) == (2, 4, 2, 0)

    assert m.total_waiting == 2
    assert m.total_turnaround == 8
    assert m.total_time == 6
    assert m.busy_time == 6
    assert m.cpu_utilization == 1.0
    assert m.throughput == pytest.approx(2 / 6)


def test_metrics_missing_process_is_fatal():
    timeline = Timeline((ExecutionSlice(1, 0, 2),))
    with pytest.raises(TimelineConsistencyError):
        compute_metrics(timeline, [Process(1, 0, 2), Process(2, 0, 1)])


def test_summarize_averages():
    procs = [Process(1, 0, 5), Process(2, 1, 3), Process(3, 2, 1)]
    timeline = Timeline((ExecutionSlice(1, 0, 5), ExecutionSlice(2, 5, 3), ExecutionSlice(3, 8, 1)))
    summary = summarize(compute_metrics(timeline, procs))

    assert summary["avg_waiting"] == pytest.approx(10 / 3)
    assert summary["avg_turnaround"] == pytest.approx((5 + 7 + 7) / 3)
    assert summary["avg_response"] == pytest.approx(10 / 3)
