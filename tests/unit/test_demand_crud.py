from datetime import date

import pandas as pd
import pytest

from grampredict.crud import demand as crud_demand
from grampredict.crud import district as crud_district
from grampredict.schemas.demand import DemandRecordCreate
from grampredict.utils.ingest_demand import ingest_frame


def add(db, district_id, block, day, person_days):
    crud_demand.create_record(db, DemandRecordCreate(
        district_id=district_id, block_name=block, date=day, person_days=person_days,
    ))


def test_monthly_aggregation_sums_blocks_and_days(db, district):
    add(db, district.id, "Kadiri", date(2024, 6, 1), 1000)
    add(db, district.id, "Kadiri", date(2024, 6, 15), 500)
    add(db, district.id, "Dharmavaram", date(2024, 6, 3), 250)
    add(db, district.id, "Kadiri", date(2024, 7, 1), 2000)

    all_blocks = crud_demand.get_monthly_person_days(db, district.id)
    assert all_blocks == [
        {"month": "Jun 2024", "person_days": 1750},
        {"month": "Jul 2024", "person_days": 2000},
    ]
    assert crud_demand.get_monthly_person_days(db, district.id, "All") == all_blocks

    kadiri = crud_demand.get_monthly_person_days(db, district.id, "Kadiri")
    assert kadiri[0] == {"month": "Jun 2024", "person_days": 1500}

def test_only_latest_months_are_returned(db, district):
    for month in range(1, 13):
        add(db, district.id, "Kadiri", date(2023, month, 1), month)
    for month in range(1, 4):
        add(db, district.id, "Kadiri", date(2024, month, 1), 100 + month)

    rows = crud_demand.get_monthly_person_days(db, district.id, limit=12)
    assert len(rows) == 12
    assert rows[0]["month"] == "Apr 2023"
    assert rows[-1] == {"month": "Mar 2024", "person_days": 103}

def test_history_frame_is_empty_without_records(db, district):
    frame = crud_demand.load_monthly_history(db, district.id)
    assert frame.empty
    assert list(frame.columns) == ["ds", "y"]

def test_ingest_creates_districts_and_blocks(db):
    df = pd.DataFrame([
        {"district": "Gaya", "state": "Bihar", "block": "Bodh Gaya", "date": "2024-06-01", "person_days": 800, "households_worked": 40},
        {"district": "Gaya", "state": "Bihar", "block": "Sherghati", "date": "2024-06-01", "person_days": 600, "households_worked": None},
        {"district": "Gaya", "state": "Bihar", "block": "Bodh Gaya", "date": "2024-07-01", "person_days": 900, "households_worked": 45},
    ])
    created, records = ingest_frame(db, df)
    assert (created, records) == (1, 3)

    gaya = crud_district.get_districts(db)[0]
    assert gaya.name == "Gaya"
    assert crud_district.get_blocks(gaya) == ["Bodh Gaya", "Sherghati"]
    assert crud_demand.get_monthly_person_days(db, gaya.id) == [
        {"month": "Jun 2024", "person_days": 1400},
        {"month": "Jul 2024", "person_days": 900},
    ]

    created_again, _ = ingest_frame(db, df.head(1))
    assert created_again == 0

def test_ingest_rejects_missing_columns(db):
    with pytest.raises(ValueError):
        ingest_frame(db, pd.DataFrame([{"district": "Gaya", "date": "2024-06-01"}]))
