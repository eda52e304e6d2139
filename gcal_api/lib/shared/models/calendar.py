from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class EventRequest(BaseModel):
    """Inbound event description, accepted on create and update."""

    model_config = ConfigDict(populate_by_name=True)

    summary: Optional[str] = None
    location: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("location", "Location")
    )
    description: Optional[str] = None
    start_date_time: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("eventStartDateTime", "start_date_time")
    )
    end_date_time: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("eventEndDateTime", "end_date_time")
    )
    time_zone: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("eventTimeZone", "time_zone")
    )
    attendees: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("eventAttendees", "attendees")
    )
    meeting: bool = False

    @field_validator("attendees", mode="before")
    @classmethod
    def _null_attendees(cls, value):
        return [] if value is None else value
