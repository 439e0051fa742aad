from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from grampredict.db.session import Base
from grampredict.models.district import new_uuid

class MgnregaRecord(Base):
    """One reported observation of employment generated in a block.

    Several records can fall in the same month; consumers aggregate by month.
    """
    __tablename__ = "mgnrega_data"

    id = Column(String(36), primary_key=True, default=new_uuid)
    district_id = Column(String(36), ForeignKey("districts.id"), nullable=False, index=True)
    block_name = Column(String(100), nullable=False)
    date = Column(Date, nullable=False, index=True)
    person_days = Column(Integer, nullable=False)
    households_worked = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=False), server_default=func.now())

    district = relationship("District", back_populates="demand_records")

    def __repr__(self):
        return f"<MgnregaRecord(district_id={self.district_id}, block='{self.block_name}', date={self.date})>"
