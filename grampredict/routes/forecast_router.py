import json
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from grampredict.core.config import settings
from grampredict.core.dependencies import require_capability
from grampredict.core.errors import ValidationError
from grampredict.core.policy import Capability
from grampredict.crud import demand as crud_demand
from grampredict.crud import district as crud_district
from grampredict.crud import forecast as crud_forecast
from grampredict.db.session import get_db
from grampredict.models.user import User
from grampredict.schemas.forecast import (
    ALL_BLOCKS,
    ForecastChartRequest,
    ForecastExportRequest,
    ForecastInvocation,
    ForecastResponse,
    StoredForecast,
)
from grampredict.services.forecast_chart import build_forecast_chart
from grampredict.services.forecast_export import export_csv, export_filename
from grampredict.services.forecast_gateway import forecast_gateway
from grampredict.services.request_builder import build_forecast_request
from grampredict.services.seasonal_forecaster import SeasonalForecaster

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/forecast", tags=["Forecast"])


def get_forecast_backend(db: Session = Depends(get_db)):
    """Picks the forecast generator configured by FORECAST_BACKEND."""
    if settings.FORECAST_BACKEND == "prophet":
        return SeasonalForecaster(
            lambda request: crud_demand.load_monthly_history(db, request.district_id, request.block_name)
        )
    return forecast_gateway


@router.post(
    "/",
    response_model=ForecastResponse,
    summary="Generate a person-days forecast for a district or block",
)
async def generate_forecast(
    body: ForecastInvocation,
    db: Session = Depends(get_db),
    backend = Depends(get_forecast_backend),
    current_user: User = Depends(require_capability(Capability.REQUEST_FORECAST)),
):
    """Generates a monthly person-days forecast.

    The request is validated before anything is sent to the backend. Every
    pipeline failure is answered as `{"error": message}`: 400 for invalid
    filters, 502 when the backend fails or returns an unusable reply.

    Args:
        body (ForecastInvocation): `{districtId, blockName, months}`.
        db (Session): The database session dependency.
        backend: The configured forecast generator.
        current_user: The authenticated user dependency.

    Returns:
        ForecastResponse: `{"forecast": [{"month", "predicted"}, ...]}`.
    """
    request = build_forecast_request(body.district_id, body.block_name, body.months)

    district = crud_district.get_district(db, request.district_id)
    if district is None:
        raise ValidationError(f"District {request.district_id} not found")
    blocks = crud_district.get_blocks(district)
    if request.block_name != ALL_BLOCKS and blocks and request.block_name not in blocks:
        raise ValidationError(f"Block '{request.block_name}' is not in district {district.name}")

    series = await backend.generate(request)

    if settings.PERSIST_FORECASTS:
        crud_forecast.save_forecast(db, request, series, backend.backend_name)
    return ForecastResponse(forecast=series)


@router.post("/export", summary="Download a forecast as CSV")
def export_forecast(
    body: ForecastExportRequest,
    current_user: User = Depends(require_capability(Capability.VIEW_DASHBOARD)),
):
    """Returns the forecast as a CSV attachment, or 204 with no body when empty."""
    content = export_csv(body.forecast)
    if content is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    filename = export_filename(body.district_id)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/chart", summary="Plotly figure for a forecast")
def forecast_chart(
    body: ForecastChartRequest,
    current_user: User = Depends(require_capability(Capability.VIEW_DASHBOARD)),
):
    fig = build_forecast_chart(body.forecast)
    return JSONResponse(content=json.loads(fig.to_json()))


@router.get("/history/{district_id}", response_model=List[StoredForecast])
def forecast_history(
    district_id: str,
    block_name: Optional[str] = Query(None),
    limit: int = Query(20, gt=0, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_capability(Capability.VIEW_DASHBOARD)),
):
    """Lists stored forecasts for a district, newest first."""
    return crud_forecast.get_forecasts(db, district_id, block_name, limit)
