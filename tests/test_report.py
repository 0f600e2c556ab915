from __future__ import annotations

from timing.registry import Timing
from timing.report import format_server_timing, to_token
from timing.schemas import Entry


def test_server_timing_uses_milliseconds():
    entries = [
        Entry(name="db", entry_type="measure", start_time=1.0, duration=0.0125),
        Entry(name="total", entry_type="measure", start_time=1.0, duration=0.040125),
    ]
    assert format_server_timing(entries) == "db;dur=12.500, total;dur=40.125"


def test_server_timing_marks_have_zero_duration_and_desc():
    entries = [Entry(name="requestStart", entry_type="mark", start_time=1.0)]
    assert format_server_timing(entries, include_type=True) == 'requestStart;dur=0.000;desc="mark"'


def test_names_are_sanitized_to_tokens():
    assert to_token("db query/users") == "db_query_users"
    assert to_token("a:b") == "a_b"
    assert to_token("ok-name.v1") == "ok-name.v1"


def test_empty_names_are_skipped():
    entries = [
        Entry(name="", entry_type="mark", start_time=1.0),
        Entry(name="x", entry_type="measure", start_time=1.0, duration=0.001),
    ]
    assert format_server_timing(entries) == "x;dur=1.000"


def test_registry_measures_render_in_order(clock):
    t = Timing(request_time_float=clock.now, clock=clock)
    clock.advance(0.002)
    t.mark("parsed")
    clock.advance(0.003)
    t.measure("parse", "requestStart", "parsed")
    t.measure("total")
    assert format_server_timing(t.get_entries_by_type("measure")) == "parse;dur=2.000, total;dur=5.000"
