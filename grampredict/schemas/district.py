from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from grampredict.schemas.forecast import StoredForecast

class DistrictCreate(BaseModel):
    name: str = Field(..., example="Anantapur")
    state: str = Field(..., example="Andhra Pradesh")
    blocks: List[str] = []

class District(DistrictCreate):
    """Schema for a district as returned by the API."""
    id: str

    class Config:
        from_attributes = True

class DistrictSummary(BaseModel):
    """Headline numbers for the dashboard's stats cards."""
    total_districts: int
    active_blocks: int
    assets_by_status: Dict[str, int]
    latest_forecast: Optional[StoredForecast] = None
