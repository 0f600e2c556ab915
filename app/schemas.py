from typing import List, Optional
from pydantic import BaseModel, Field

from timing.registry import REQUEST_START

class MeasureRequest(BaseModel):
    name: str
    start_mark: str = REQUEST_START
    end_mark: Optional[str] = None

class MarksRequest(BaseModel):
    names: List[str] = Field(default_factory=list)

class UnknownMarkResponse(BaseModel):
    detail: str
    mark: str
