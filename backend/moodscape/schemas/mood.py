"""Mood record schemas."""

from pydantic import BaseModel, Field

from moodscape.core.dates import start_of_day, to_local_datetime
from moodscape.core.errors import InvalidInput


class MoodRecord(BaseModel):
    day_key: int
    symbol: str
    note: str = ""
    category_id: int | None = None
    score: int

    model_config = {"from_attributes": True, "frozen": True}


class MoodRecordView(MoodRecord):
    """A mood record joined with its category; category fields are None when missing."""

    category_name: str | None = None
    category_color: str | None = None


class MoodRecordCreate(BaseModel):
    day_key: int = Field(description="Local midnight of the entry's day, epoch milliseconds")
    symbol: str = Field(min_length=1, max_length=32)
    note: str = ""
    category_id: int | None = None
    score: int = Field(ge=1, le=5, description="Mood 1-5")

    def to_record(self) -> MoodRecord:
        """Build the stored record. Raises InvalidInput unless day_key is local midnight."""
        midnight = start_of_day(to_local_datetime(self.day_key))
        if self.day_key != midnight:
            raise InvalidInput(f"day_key {self.day_key} is not local midnight; use {midnight}")
        return MoodRecord(**self.model_dump())


class RecordExistsResponse(BaseModel):
    day_start: int
    exists: bool


class MoodOptionResponse(BaseModel):
    symbol: str
    name: str
    score: int

    model_config = {"from_attributes": True}
