"""
Per-request timing registry.

Records named timestamps ("marks") and named durations ("measures") in the
manner of the W3C User Timing interface, with two differences:

- The reference point for measures without an explicit start mark is the
  request start time handed to the constructor, recorded as `requestStart`.
- Names map 1:1 to entries. Recording a name again replaces the previous
  entry, so `get_entry_by_name` takes the place of `getEntriesByName`.

All times are float seconds since the Unix epoch.
"""

import logging
import math
import time
from operator import attrgetter
from typing import Callable, Dict, List, Mapping, Optional

from timing.errors import UnknownMarkError
from timing.schemas import MARK, MEASURE, Entry, TimingReport
from utils.logging import log_event, setup_logger

REQUEST_START = "requestStart"

timing_logger = setup_logger(name="timing", level=logging.INFO)

Clock = Callable[[], float]

def _parse_seconds(value: object) -> Optional[float]:
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    return seconds if math.isfinite(seconds) else None

class Timing:
    def __init__(
        self,
        request_time_float: Optional[float] = None,
        request_time: Optional[int] = None,
        clock: Clock = time.time,
    ):
        '''
        Args:
            request_time_float (Optional[float]): High resolution request start.
            request_time (Optional[int]): Whole-second request start, used when no float is given.
            clock (Clock): Source of the current time for marks and open-ended measures.
        '''
        self._clock = clock
        if request_time_float is not None:
            self.request_start = float(request_time_float)
        elif request_time is not None:
            self.request_start = float(request_time)
        else:
            self.request_start = clock()

        self._entries: Dict[str, Entry] = {}
        self.clear_marks()

    @classmethod
    def from_environ(cls, environ: Mapping[str, object], clock: Clock = time.time) -> "Timing":
        '''
        Builds a registry from REQUEST_TIME_FLOAT / REQUEST_TIME in a WSGI-style environ.
        Unparseable or non-finite values are skipped.
        '''
        request_time_float = _parse_seconds(environ.get("REQUEST_TIME_FLOAT"))
        request_time = _parse_seconds(environ.get("REQUEST_TIME"))
        return cls(
            request_time_float=request_time_float,
            request_time=int(request_time) if request_time is not None else None,
            clock=clock,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def _record(self, entry: Entry) -> Entry:
        # re-insert so dict order is order of last write
        self._entries.pop(entry.name, None)
        self._entries[entry.name] = entry
        return entry

    def mark(self, mark_name: str) -> Entry:
        '''
        Stores the current time under mark_name, replacing any entry of that name.
        Args:
            mark_name (str): The name associated with the timestamp.
        Returns:
            Entry: The mark that has been created.
        '''
        entry = self._record(Entry(name=mark_name, entry_type=MARK, start_time=self._clock(), duration=0.0))
        log_event(timing_logger, logging.DEBUG, "Mark Recorded", name=mark_name, start_time=entry.start_time)
        return entry

    def clear_marks(self, mark_name: Optional[str] = None) -> None:
        '''
        Args:
            mark_name (Optional[str]): The entry to remove. If not given, every
                entry is dropped and only `requestStart` remains.
        '''
        if mark_name is not None:
            self._entries.pop(mark_name, None)
        else:
            self._entries = {
                REQUEST_START: Entry(
                    name=REQUEST_START,
                    entry_type=MARK,
                    start_time=self.request_start,
                    duration=0.0,
                )
            }
        log_event(timing_logger, logging.DEBUG, "Marks Cleared", name=mark_name)

    def _resolve(self, mark_name: str) -> float:
        entry = self.get_entry_by_name(mark_name)
        if entry is None:
            log_event(timing_logger, logging.WARNING, "Unknown Mark", name=mark_name)
            raise UnknownMarkError(mark_name)
        return entry.start_time

    def measure(self, measure_name: str, start_mark: str = REQUEST_START, end_mark: Optional[str] = None) -> Entry:
        '''
        Stores the duration between two marks under measure_name.

        With only measure_name, the duration runs from `requestStart` to now.
        With start_mark, it runs from the latest start_mark to now.
        With both, it runs from the latest start_mark to the latest end_mark.

        Args:
            measure_name (str): Name of the measure. Replaces any entry of that name.
            start_mark (str): Entry whose start time opens the measure.
            end_mark (Optional[str]): Entry whose start time closes the measure. Now when None.
        Returns:
            Entry: The measure that has been created.
        Raises:
            UnknownMarkError: start_mark or end_mark is not recorded. Nothing is written.
        '''
        start_time = self._resolve(start_mark)
        end_time = self._resolve(end_mark) if end_mark is not None else self._clock()

        entry = self._record(
            Entry(name=measure_name, entry_type=MEASURE, start_time=start_time, duration=end_time - start_time)
        )
        log_event(
            timing_logger,
            logging.DEBUG,
            "Measure Recorded",
            name=measure_name,
            start_mark=start_mark,
            end_mark=end_mark,
            duration=entry.duration,
        )
        return entry

    def get_entries(self) -> List[Entry]:
        '''
        Returns:
            List[Entry]: All entries in chronological order. Ties keep recording order.
        '''
        return sorted(self._entries.values(), key=attrgetter("start_time"))

    def get_entries_by_type(self, entry_type: str) -> List[Entry]:
        '''
        Args:
            entry_type (str): "mark" or "measure".
        Returns:
            List[Entry]: Entries of that type in chronological order.
        '''
        return [e for e in self.get_entries() if e.entry_type == entry_type]

    def get_entry_by_name(self, name: str) -> Optional[Entry]:
        return self._entries.get(name)

    def report(self) -> TimingReport:
        total = self.get_entry_by_name("total")
        return TimingReport(
            entries=self.get_entries(),
            total=total.duration if total is not None and total.entry_type == MEASURE else None,
        )
