import enum

from sqlalchemy import Column, Integer, String, Float, Text, DateTime, JSON, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from grampredict.db.session import Base
from grampredict.models.district import new_uuid

class AssetType(str, enum.Enum):
    POND = "pond"
    ROAD = "road"
    CHECK_DAM = "check_dam"
    WELL = "well"
    CANAL = "canal"
    OTHER = "other"

class AssetStatus(str, enum.Enum):
    GOOD = "good"
    NEEDS_REPAIR = "needs_repair"
    UNDER_CONSTRUCTION = "under_construction"
    DAMAGED = "damaged"


class Asset(Base):
    """A geolocated piece of rural infrastructure built under the scheme.

    Attributes:
        id (str): UUID primary key.
        asset_name (str): Human-readable name, e.g. "Kothapalli farm pond".
        asset_type (AssetType): What kind of structure this is.
        status (AssetStatus): Current condition.
        district_id (str): Foreign key to the owning district.
        block_name (str): Block within the district.
        village_name (str): Village the asset is in.
        latitude (float): WGS84 latitude.
        longitude (float): WGS84 longitude.
        description (str): Optional free text.
        photos (JSON): Optional list of photo URLs.
        created_by (int): The user who registered the asset.
    """
    __tablename__ = "assets"

    id = Column(String(36), primary_key=True, default=new_uuid)
    asset_name = Column(String(200), nullable=False)
    asset_type = Column(SAEnum(AssetType), nullable=False)
    status = Column(SAEnum(AssetStatus), nullable=False, default=AssetStatus.GOOD)
    district_id = Column(String(36), ForeignKey("districts.id"), nullable=False, index=True)
    block_name = Column(String(100), nullable=False)
    village_name = Column(String(100), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    description = Column(Text, nullable=True)
    photos = Column(JSON, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=False), server_default=func.now())
    updated_at = Column(DateTime(timezone=False), server_default=func.now(), onupdate=func.now())

    district = relationship("District", back_populates="assets")
    creator = relationship("User", back_populates="assets")

    def __repr__(self):
        return f"<Asset(id={self.id}, name='{self.asset_name}', type='{self.asset_type}')>"
