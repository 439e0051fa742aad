from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from grampredict.core.dependencies import require_capability
from grampredict.core.policy import Capability
from grampredict.db.session import get_db
from grampredict.crud import district as crud
from grampredict.crud import asset as crud_asset
from grampredict.crud import forecast as crud_forecast
from grampredict.schemas.district import District, DistrictCreate, DistrictSummary
from grampredict.schemas.forecast import StoredForecast

router = APIRouter(
    prefix="/districts",
    tags=["Districts"],
    dependencies=[Depends(require_capability(Capability.VIEW_DASHBOARD))],
)

@router.get("/", response_model=List[District])
def list_districts(db: Session = Depends(get_db)):
    """Lists all districts with their blocks, ordered by name."""
    return crud.get_districts(db)

@router.post(
    "/",
    response_model=District,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_capability(Capability.MANAGE_DISTRICTS))],
)
def create_district(data: DistrictCreate, db: Session = Depends(get_db)):
    """Registers a new district (admin only)."""
    return crud.create_district(db, data)

@router.get("/{district_id}", response_model=District)
def get_district(district_id: str, db: Session = Depends(get_db)):
    district = crud.get_district(db, district_id)
    if not district:
        raise HTTPException(404, "District not found")
    return district

@router.get("/{district_id}/summary", response_model=DistrictSummary)
def get_district_summary(district_id: str, db: Session = Depends(get_db)):
    """Returns the numbers shown in the dashboard's stats cards.

    Args:
        district_id (str): The selected district.
        db (Session): The database session dependency.

    Returns:
        DistrictSummary: District count, block count, asset counts by status
                         and the most recent stored forecast.

    Raises:
        HTTPException: 404 if the district does not exist.
    """
    district = crud.get_district(db, district_id)
    if not district:
        raise HTTPException(404, "District not found")
    latest = crud_forecast.get_latest_forecast(db, district_id)
    return DistrictSummary(
        total_districts=crud.count_districts(db),
        active_blocks=len(crud.get_blocks(district)),
        assets_by_status=crud_asset.count_assets_by_status(db, district_id),
        latest_forecast=StoredForecast.model_validate(latest) if latest else None,
    )
