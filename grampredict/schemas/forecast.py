from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional

ALL_BLOCKS = "All"
HORIZON_CHOICES = (3, 6, 9, 12)
DEFAULT_HORIZON = 6

class ForecastRequest(BaseModel):
    """An immutable forecast query, built fresh for every fetch."""
    district_id: str
    block_name: str = ALL_BLOCKS
    horizon_months: int = DEFAULT_HORIZON

    class Config:
        frozen = True

class ForecastPoint(BaseModel):
    """One forecast month, e.g. {"month": "Jan 2025", "predicted": 6500}."""
    month: str = Field(..., example="Jan 2025")
    predicted: float = Field(..., ge=0, example=6500)

    class Config:
        from_attributes = True

ForecastSeries = List[ForecastPoint]

class ForecastInvocation(BaseModel):
    """Request body the dashboard posts to generate a forecast.

    Field names follow the dashboard's camelCase wire format. The district is
    optional here so that a missing selection is reported through the
    pipeline's own validation error instead of a schema error.
    """
    district_id: Optional[str] = Field(None, alias="districtId")
    block_name: Optional[str] = Field(None, alias="blockName")
    months: int = Field(DEFAULT_HORIZON, example=6)

    class Config:
        populate_by_name = True

class ForecastResponse(BaseModel):
    forecast: List[ForecastPoint]

class ForecastExportRequest(BaseModel):
    # ends up in the Content-Disposition filename
    district_id: str = Field(..., alias="districtId", pattern=r"^[A-Za-z0-9_-]+$")
    forecast: List[ForecastPoint] = []

    class Config:
        populate_by_name = True

class ForecastChartRequest(BaseModel):
    forecast: List[ForecastPoint] = []

class StoredForecast(BaseModel):
    """A forecast as persisted in the forecasts table."""
    id: str
    district_id: str
    block_name: str
    forecast_months: int
    forecast_data: List[ForecastPoint]
    backend: str
    created_at: datetime

    class Config:
        from_attributes = True
