from sqlalchemy.orm import Session
from typing import List, Optional

from grampredict.models.district import District
from grampredict.schemas.district import DistrictCreate

def get_districts(db: Session) -> List[District]:
    """Retrieves all districts ordered by name, as the district picker lists them."""
    return db.query(District).order_by(District.name).all()

def get_district(db: Session, district_id: str) -> Optional[District]:
    return db.query(District).filter(District.id == district_id).first()

def count_districts(db: Session) -> int:
    return db.query(District).count()

def create_district(db: Session, data: DistrictCreate) -> District:
    """Creates a district with its ordered block list.

    Args:
        db (Session): The SQLAlchemy database session.
        data (DistrictCreate): Name, state and blocks of the district.

    Returns:
        District: The newly created District object.
    """
    d = District(name=data.name, state=data.state, blocks=list(data.blocks))
    db.add(d); db.commit(); db.refresh(d)
    return d

def get_blocks(district: District) -> List[str]:
    """Returns the district's blocks, tolerating a malformed JSON column."""
    blocks = district.blocks
    if not isinstance(blocks, list):
        return []
    return [b for b in blocks if isinstance(b, str)]
