import uuid

from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from grampredict.db.session import Base


def new_uuid() -> str:
    return str(uuid.uuid4())


class District(Base):
    """An administrative district and the ordered list of its blocks.

    Attributes:
        id (str): UUID primary key, used as the opaque district identifier everywhere.
        name (str): Display name, e.g. "Anantapur".
        state (str): The state the district belongs to.
        blocks (JSON): Ordered list of block names.
        created_at (datetime): When the record was created.
    """
    __tablename__ = "districts"

    id = Column(String(36), primary_key=True, default=new_uuid)
    name = Column(String(100), nullable=False, index=True)
    state = Column(String(100), nullable=False)
    blocks = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=False), server_default=func.now())

    assets = relationship("Asset", back_populates="district", cascade="all, delete-orphan")
    demand_records = relationship("MgnregaRecord", back_populates="district", cascade="all, delete-orphan")
    forecasts = relationship("ForecastRecord", back_populates="district", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<District(id={self.id}, name='{self.name}')>"
