"""
Dashboard Pydantic schemas.

Response keys are camelCase to match the JSON contract of the browser
client; attributes stay snake_case on the Python side.
"""

from datetime import date as calendar_date
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RecordWithPet(BaseModel):
    """A medical record joined with the name and type of its pet."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    pet_id: int
    record_type: str
    name: str
    date: Optional[calendar_date] = None
    reactions: Optional[str] = None
    severity: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    pet_name: str
    animal_type: str


class DashboardStats(BaseModel):
    """Aggregate counters and short record lists for the dashboard."""

    model_config = ConfigDict(populate_by_name=True)

    total_pets: int = Field(..., alias="totalPets")
    pets_by_type: Dict[str, int] = Field(
        default_factory=dict, alias="petsByType"
    )
    total_records: int = Field(..., alias="totalRecords")
    records_by_type: Dict[str, int] = Field(
        default_factory=dict, alias="recordsByType"
    )
    upcoming_vaccines: List[RecordWithPet] = Field(
        default_factory=list, alias="upcomingVaccines"
    )
    recent_records: List[RecordWithPet] = Field(
        default_factory=list, alias="recentRecords"
    )
