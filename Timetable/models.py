from __future__ import annotations
import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator

from Timetable.timeofday import parse_time

def _new_id() -> str:
    return uuid.uuid4().hex

class Entry(BaseModel):
    """
    One row of the timetable: a time-of-day interval plus a task label.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=_new_id, description="Opaque row handle, never serialized")
    start: Optional[int] = Field(default=None, ge=0, le=24 * 60, description="Minutes since midnight")
    end: Optional[int] = Field(default=None, ge=0, le=24 * 60, description="Minutes since midnight")
    task: str = ""


# --- Serialized document format ---
class SerializedEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    start_time: str = Field(default="", alias="StartTime")
    end_time: str = Field(default="", alias="EndTime")
    task: str = Field(default="", alias="Task")
    is_selected: bool = Field(default=False, alias="IsSelected")

    @field_validator('start_time', 'end_time', mode='before')
    @classmethod
    def validate_time_format(cls, value):
        if value is None:
            return ""
        if not isinstance(value, str):
            raise ValueError("Time must be a string.")
        parse_time(value) # raises ValueError on a malformed time
        return value

    @field_validator('task', mode='before')
    @classmethod
    def none_task_is_empty(cls, value):
        return "" if value is None else value

class TimetableFile(RootModel[List[SerializedEntry]]):
    root: List[SerializedEntry]
    def __iter__(self):
        return iter(self.root)
