import argparse
import logging
from typing import Dict, Tuple

import pandas as pd
from sqlalchemy.orm import Session

from grampredict.db.session import SessionLocal, engine, Base
from grampredict.models import asset, forecast, user  # noqa: F401
from grampredict.models.demand import MgnregaRecord
from grampredict.models.district import District

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("district", "state", "block", "date", "person_days")


def ingest_frame(db: Session, df: pd.DataFrame) -> Tuple[int, int]:
    """Loads MGNREGA person-days rows into the database.

    Districts are matched by (name, state) and created on first sight; blocks
    are appended to the district's block list in the order they appear.

    Args:
        db (Session): The SQLAlchemy database session.
        df (pd.DataFrame): Columns district, state, block, date, person_days and
                           optionally households_worked.

    Returns:
        Tuple[int, int]: Number of districts created and records inserted.

    Raises:
        ValueError: If a required column is missing.
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing columns: {', '.join(missing)}")

    df = df.dropna(subset=list(REQUIRED_COLUMNS)).copy()
    df["date"] = pd.to_datetime(df["date"]).dt.date

    districts: Dict[Tuple[str, str], District] = {
        (d.name, d.state): d for d in db.query(District).all()
    }
    created = 0
    for (name, state), group in df.groupby(["district", "state"], sort=False):
        district = districts.get((name, state))
        if district is None:
            district = District(name=name, state=state, blocks=[])
            db.add(district)
            db.flush()
            districts[(name, state)] = district
            created += 1

        blocks = list(district.blocks or [])
        for block in group["block"].unique():
            if block not in blocks:
                blocks.append(block)
        district.blocks = blocks

        for row in group.itertuples(index=False):
            households = getattr(row, "households_worked", None)
            db.add(MgnregaRecord(
                district_id=district.id,
                block_name=row.block,
                date=row.date,
                person_days=int(row.person_days),
                households_worked=None if households is None or pd.isna(households) else int(households),
            ))

    db.commit()
    return created, len(df)


def main():
    parser = argparse.ArgumentParser(description="Load MGNREGA person-days data from a CSV file.")
    parser.add_argument("csv_path", help="CSV with district,state,block,date,person_days[,households_worked]")
    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)
    df = pd.read_csv(args.csv_path)
    db = SessionLocal()
    try:
        districts, records = ingest_frame(db, df)
    finally:
        db.close()
    logger.info("Ingested %d records, created %d districts.", records, districts)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    main()
