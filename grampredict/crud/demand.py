from sqlalchemy.orm import Session
from typing import Dict, List, Optional
import pandas as pd

from grampredict.models.demand import MgnregaRecord
from grampredict.schemas.demand import DemandRecordCreate
from grampredict.schemas.forecast import ALL_BLOCKS

MONTH_LABEL_FORMAT = "%b %Y"

def create_record(db: Session, data: DemandRecordCreate) -> MgnregaRecord:
    rec = MgnregaRecord(**data.model_dump())
    db.add(rec); db.commit(); db.refresh(rec)
    return rec

def load_monthly_history(db: Session, district_id: str, block_name: Optional[str] = None) -> pd.DataFrame:
    """Aggregates reported person-days into one row per calendar month.

    Args:
        db (Session): The SQLAlchemy database session.
        district_id (str): The district to aggregate.
        block_name (Optional[str]): A single block, or None/"All" for every block.

    Returns:
        pd.DataFrame: Columns `ds` (month start timestamp) and `y` (person-days),
                      sorted chronologically. Empty if there is no history.
    """
    query = (
        db.query(MgnregaRecord.date, MgnregaRecord.person_days)
        .filter(MgnregaRecord.district_id == district_id)
    )
    if block_name and block_name != ALL_BLOCKS:
        query = query.filter(MgnregaRecord.block_name == block_name)
    rows = query.order_by(MgnregaRecord.date.asc()).all()

    if not rows:
        return pd.DataFrame(columns=["ds", "y"])

    df = pd.DataFrame([(r.date, r.person_days) for r in rows], columns=["date", "person_days"])
    df["ds"] = pd.to_datetime(df["date"]).dt.to_period("M").dt.to_timestamp()
    monthly = (
        df.groupby("ds", as_index=False)["person_days"].sum()
          .rename(columns={"person_days": "y"})
          .sort_values(by="ds")
          .reset_index(drop=True)
    )
    monthly["y"] = monthly["y"].astype(float)
    return monthly

def get_monthly_person_days(
    db: Session, district_id: str, block_name: Optional[str] = None, limit: int = 12
) -> List[Dict]:
    """Returns the latest `limit` months of person-days for the history chart.

    Returns:
        List[Dict]: `{"month": "Jun 2024", "person_days": 5400}` entries, oldest first.
    """
    monthly = load_monthly_history(db, district_id, block_name)
    if monthly.empty:
        return []
    recent = monthly.tail(limit)
    return [
        {"month": ds.strftime(MONTH_LABEL_FORMAT), "person_days": int(y)}
        for ds, y in zip(recent["ds"], recent["y"])
    ]
