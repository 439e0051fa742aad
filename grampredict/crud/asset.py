from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import Dict, List, Optional

from grampredict.models.asset import Asset, AssetStatus, AssetType
from grampredict.schemas.asset import AssetCreate, AssetUpdate

def get_assets(
    db: Session,
    district_id: Optional[str] = None,
    block_name: Optional[str] = None,
    status: Optional[AssetStatus] = None,
    asset_type: Optional[AssetType] = None,
    skip: int = 0,
    limit: int = 500,
) -> List[Asset]:
    """Retrieves assets with optional filtering, newest first.

    Args:
        db (Session): The SQLAlchemy database session.
        district_id (Optional[str]): Only assets in this district.
        block_name (Optional[str]): Only assets in this block.
        status (Optional[AssetStatus]): Only assets in this condition.
        asset_type (Optional[AssetType]): Only assets of this type.
        skip (int): Number of records to skip for pagination.
        limit (int): Maximum number of records to return.

    Returns:
        List[Asset]: The matching Asset objects.
    """
    query = db.query(Asset)
    if district_id:
        query = query.filter(Asset.district_id == district_id)
    if block_name:
        query = query.filter(Asset.block_name == block_name)
    if status:
        query = query.filter(Asset.status == status)
    if asset_type:
        query = query.filter(Asset.asset_type == asset_type)
    return query.order_by(Asset.created_at.desc()).offset(skip).limit(limit).all()

def get_asset(db: Session, asset_id: str) -> Optional[Asset]:
    return db.query(Asset).filter(Asset.id == asset_id).first()

def create_asset(db: Session, data: AssetCreate, created_by: Optional[int] = None) -> Asset:
    asset = Asset(created_by=created_by, **data.model_dump())
    db.add(asset); db.commit(); db.refresh(asset)
    return asset

def update_asset(db: Session, asset: Asset, data: AssetUpdate) -> Asset:
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(asset, field, value)
    db.add(asset); db.commit(); db.refresh(asset)
    return asset

def count_assets_by_status(db: Session, district_id: str) -> Dict[str, int]:
    """Counts a district's assets per status, including statuses with no assets."""
    counts = {s.value: 0 for s in AssetStatus}
    rows = (
        db.query(Asset.status, func.count(Asset.id))
        .filter(Asset.district_id == district_id)
        .group_by(Asset.status)
        .all()
    )
    for status, n in rows:
        counts[AssetStatus(status).value] = n
    return counts
