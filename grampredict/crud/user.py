from sqlalchemy.orm import Session
from typing import List, Optional

from grampredict.core.policy import AppRole
from grampredict.models.user import User
from grampredict.schemas.user import UserCreate

def get_user(db: Session, user_id: int) -> Optional[User]:
    """Retrieves a single user by their unique ID.

    Args:
        db (Session): The SQLAlchemy database session.
        user_id (int): The ID of the user to retrieve.

    Returns:
        Optional[User]: The User object if found, otherwise None.
    """
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Retrieves a single user by their email address.

    Args:
        db (Session): The SQLAlchemy database session.
        email (str): The email address of the user.

    Returns:
        Optional[User]: The User object if found, otherwise None.
    """
    return db.query(User).filter(User.email == email).first()

def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()

def get_users(db: Session, skip: int = 0, limit: int = 100) -> List[User]:
    return db.query(User).order_by(User.id).offset(skip).limit(limit).all()

def create_user(db: Session, user_in: UserCreate) -> User:
    """Creates a new user in the database.

    Args:
        db (Session): The SQLAlchemy database session.
        user_in (UserCreate): The data for the new user.

    Returns:
        User: The newly created User object.
    """
    db_user = User(
        email=user_in.email,
        username=user_in.username,
        full_name=user_in.full_name,
        role=user_in.role,
        district_id=user_in.district_id,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user

def set_role(db: Session, db_user: User, role: AppRole, district_id: Optional[str] = None) -> User:
    """Changes a user's role, and the district they are posted to.

    Args:
        db (Session): The SQLAlchemy database session.
        db_user (User): The user to update.
        role (AppRole): The new role.
        district_id (Optional[str]): District for panchayat officers; cleared otherwise.

    Returns:
        User: The updated User object.
    """
    db_user.role = role
    db_user.district_id = district_id
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user
