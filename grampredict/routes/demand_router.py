from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from grampredict.core.dependencies import require_capability
from grampredict.core.policy import Capability
from grampredict.db.session import get_db
from grampredict.crud import demand as crud
from grampredict.crud import district as crud_district
from grampredict.schemas.demand import MonthlyDemand

router = APIRouter(
    prefix="/demand",
    tags=["Demand"],
    dependencies=[Depends(require_capability(Capability.VIEW_DASHBOARD))],
)

@router.get("/{district_id}", response_model=List[MonthlyDemand])
def get_monthly_demand(
    district_id: str,
    block_name: Optional[str] = Query(None),
    months: int = Query(12, gt=0, le=60),
    db: Session = Depends(get_db),
):
    """Returns historical person-days per month for the demand chart.

    Args:
        district_id (str): The selected district.
        block_name (Optional[str]): A single block; omit or pass "All" for the whole district.
        months (int): How many of the most recent months to return.
        db (Session): The database session dependency.

    Returns:
        List[MonthlyDemand]: Monthly totals, oldest first.

    Raises:
        HTTPException: 404 if the district does not exist.
    """
    if not crud_district.get_district(db, district_id):
        raise HTTPException(404, "District not found")
    return crud.get_monthly_person_days(db, district_id, block_name, limit=months)
