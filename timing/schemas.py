from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

MARK = "mark"
MEASURE = "measure"

EntryType = Literal["mark", "measure"]

class Entry(BaseModel):
    """A named point in time (mark) or a named duration (measure). Times are in seconds."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    name: str
    entry_type: EntryType
    start_time: float
    duration: float = 0.0

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

class TimingReport(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    entries: List[Entry] = []
    total: Optional[float] = None
