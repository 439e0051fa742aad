from pydantic import BaseModel, Field
from datetime import date
from typing import Optional

class MonthlyDemand(BaseModel):
    """Person-days aggregated over one calendar month."""
    month: str = Field(..., example="Jun 2024")
    person_days: int

class DemandRecordCreate(BaseModel):
    district_id: str
    block_name: str
    date: date
    person_days: int = Field(..., ge=0)
    households_worked: Optional[int] = Field(None, ge=0)
