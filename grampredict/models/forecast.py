from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship
from grampredict.db.session import Base
from grampredict.models.district import new_uuid

class ForecastRecord(Base):
    """A generated forecast kept for audit and comparison.

    Attributes:
        id (str): UUID primary key.
        district_id (str): District the forecast was requested for.
        block_name (str): Block, or "All" for the district aggregate.
        forecast_months (int): Requested horizon.
        forecast_data (JSON): The list of {"month", "predicted"} points.
        backend (str): Which generator produced the numbers ("llm" or "prophet").
        created_at (datetime): When the forecast was stored.
    """
    __tablename__ = "forecasts"

    id = Column(String(36), primary_key=True, default=new_uuid)
    district_id = Column(String(36), ForeignKey("districts.id"), nullable=False, index=True)
    block_name = Column(String(100), nullable=False)
    forecast_months = Column(Integer, nullable=False)
    forecast_data = Column(JSON, nullable=False)
    backend = Column(String(20), nullable=False, default="llm")
    created_at = Column(DateTime(timezone=False), default=datetime.utcnow, nullable=False)

    district = relationship("District", back_populates="forecasts")

    def __repr__(self):
        return f"<ForecastRecord(id={self.id}, district_id={self.district_id}, months={self.forecast_months})>"
