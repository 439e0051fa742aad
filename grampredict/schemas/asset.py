from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional

from grampredict.models.asset import AssetType, AssetStatus

class AssetBase(BaseModel):
    asset_name: str = Field(..., min_length=1, max_length=200, example="Kothapalli farm pond")
    asset_type: AssetType
    status: AssetStatus = AssetStatus.GOOD
    block_name: str = Field(..., min_length=1)
    village_name: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    description: Optional[str] = None
    photos: Optional[List[str]] = None

class AssetCreate(AssetBase):
    """Schema for registering a new asset in a district."""
    district_id: str = Field(..., min_length=1)

class AssetUpdate(BaseModel):
    """Schema for updating an asset. All fields are optional."""
    asset_name: Optional[str] = Field(None, min_length=1, max_length=200)
    status: Optional[AssetStatus] = None
    description: Optional[str] = None
    photos: Optional[List[str]] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

class Asset(AssetBase):
    """Schema for an asset retrieved from the database."""
    id: str
    district_id: str
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
