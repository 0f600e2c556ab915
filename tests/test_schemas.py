from __future__ import annotations

import pytest
from pydantic import ValidationError

from timing.schemas import Entry, TimingReport


def test_entry_serializes_with_camel_case_keys():
    e = Entry(name="a", entry_type="mark", start_time=2.5)
    assert e.model_dump(by_alias=True) == {
        "name": "a",
        "entryType": "mark",
        "startTime": 2.5,
        "duration": 0.0,
    }


def test_entry_accepts_alias_and_field_names():
    by_alias = Entry.model_validate({"name": "m", "entryType": "measure", "startTime": 1.0, "duration": 0.5})
    by_field = Entry(name="m", entry_type="measure", start_time=1.0, duration=0.5)
    assert by_alias == by_field
    assert by_alias.end_time == 1.5


def test_entry_type_is_restricted():
    with pytest.raises(ValidationError):
        Entry(name="r", entry_type="resource", start_time=0.0)


def test_report_defaults():
    report = TimingReport()
    assert report.entries == []
    assert report.total is None
