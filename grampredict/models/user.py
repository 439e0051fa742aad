from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from grampredict.db.session import Base
from grampredict.core.policy import AppRole


class User(Base):
    """Represents a dashboard user.

    Attributes:
        id (int): Primary key for the user.
        username (str): The user's unique username.
        email (str): The user's unique email address.
        full_name (str): The user's full name.
        role (AppRole): Decides which capabilities the user has.
        district_id (str): The district a panchayat officer is posted to, if any.
        is_active (bool): Flag indicating if the user's account is active.
        created_at (datetime): When the account was first created.
        assets (relationship): Assets this user has registered.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    full_name = Column(String(100), nullable=True)
    role = Column(SAEnum(AppRole), default=AppRole.PUBLIC, nullable=False)
    district_id = Column(String(36), ForeignKey("districts.id"), nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=False), server_default=func.now())

    assets = relationship("Asset", back_populates="creator")

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
