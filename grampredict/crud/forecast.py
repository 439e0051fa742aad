from sqlalchemy.orm import Session
from typing import List, Optional

from grampredict.models.forecast import ForecastRecord
from grampredict.schemas.forecast import ForecastRequest, ForecastSeries

def save_forecast(db: Session, request: ForecastRequest, series: ForecastSeries, backend: str) -> ForecastRecord:
    """Stores a generated forecast so it can be audited and compared later.

    Args:
        db (Session): The SQLAlchemy database session.
        request (ForecastRequest): The request the forecast answered.
        series (ForecastSeries): The parsed forecast points.
        backend (str): Which generator produced the numbers.

    Returns:
        ForecastRecord: The stored record.
    """
    record = ForecastRecord(
        district_id=request.district_id,
        block_name=request.block_name,
        forecast_months=request.horizon_months,
        forecast_data=[p.model_dump() for p in series],
        backend=backend,
    )
    db.add(record); db.commit(); db.refresh(record)
    return record

def get_forecasts(db: Session, district_id: str, block_name: Optional[str] = None, limit: int = 20) -> List[ForecastRecord]:
    query = db.query(ForecastRecord).filter(ForecastRecord.district_id == district_id)
    if block_name:
        query = query.filter(ForecastRecord.block_name == block_name)
    return query.order_by(ForecastRecord.created_at.desc()).limit(limit).all()

def get_latest_forecast(db: Session, district_id: str) -> Optional[ForecastRecord]:
    return (
        db.query(ForecastRecord)
        .filter(ForecastRecord.district_id == district_id)
        .order_by(ForecastRecord.created_at.desc())
        .first()
    )
