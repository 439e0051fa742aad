from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from grampredict.core.dependencies import require_capability
from grampredict.core.policy import AppRole, Capability
from grampredict.db.session import get_db
from grampredict.crud import asset as crud
from grampredict.crud import district as crud_district
from grampredict.models.asset import AssetStatus, AssetType
from grampredict.models.user import User
from grampredict.schemas.asset import Asset, AssetCreate, AssetUpdate

router = APIRouter(prefix="/assets", tags=["Assets"])


def _check_officer_district(user: User, district_id: str) -> None:
    # Officers posted to a district may only manage assets there.
    if user.role == AppRole.PANCHAYAT_OFFICER and user.district_id and user.district_id != district_id:
        raise HTTPException(status.HTTP_403_FORBIDDEN, "Officers can only manage assets in their own district")


@router.get("/", response_model=List[Asset])
def list_assets(
    district_id: Optional[str] = Query(None),
    block_name: Optional[str] = Query(None),
    status_filter: Optional[AssetStatus] = Query(None, alias="status"),
    asset_type: Optional[AssetType] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(500, gt=0, le=1000),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_capability(Capability.VIEW_DASHBOARD)),
):
    """Lists assets for the map, optionally filtered by district, block, status or type."""
    return crud.get_assets(db, district_id, block_name, status_filter, asset_type, skip, limit)


@router.get("/{asset_id}", response_model=Asset)
def get_asset(
    asset_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_capability(Capability.VIEW_DASHBOARD)),
):
    asset = crud.get_asset(db, asset_id)
    if not asset:
        raise HTTPException(404, "Asset not found")
    return asset


@router.post("/", response_model=Asset, status_code=status.HTTP_201_CREATED)
def create_asset(
    data: AssetCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_capability(Capability.CREATE_ASSET)),
):
    """Registers a new asset.
    
    Args:
        data (AssetCreate): The asset details, including coordinates.
        db (Session): The database session dependency.
        current_user: An authenticated user allowed to create assets.
        
    Returns:
        Asset: The newly created asset.
        
    Raises:
        HTTPException: 404 if the district does not exist, 400 if the block is
                       not one of the district's blocks, 403 if an officer
                       targets another district.
    """
    district = crud_district.get_district(db, data.district_id)
    if not district:
        raise HTTPException(404, "District not found")
    blocks = crud_district.get_blocks(district)
    if blocks and data.block_name not in blocks:
        raise HTTPException(400, f"Block '{data.block_name}' is not in district {district.name}")
    _check_officer_district(current_user, data.district_id)
    return crud.create_asset(db, data, created_by=current_user.id)


@router.patch("/{asset_id}", response_model=Asset)
def update_asset(
    asset_id: str,
    data: AssetUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_capability(Capability.UPDATE_ASSET)),
):
    """Updates an asset's condition or details."""
    asset = crud.get_asset(db, asset_id)
    if not asset:
        raise HTTPException(404, "Asset not found")
    _check_officer_district(current_user, asset.district_id)
    return crud.update_asset(db, asset, data)
