from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from grampredict.core.policy import AppRole

class UserBase(BaseModel):
    """Base user schema with fields common to all user-related operations."""
    username: Optional[str] = Field(None, min_length=3, max_length=50)
    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(None, max_length=100)
    
class UserCreate(UserBase):
    """Schema for creating a new user. Inherits base fields and makes some required."""
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    role: AppRole = AppRole.PUBLIC
    district_id: Optional[str] = None
        
class User(UserBase):
    """Schema for a user object as returned by the API."""
    id: int
    role: AppRole
    district_id: Optional[str] = None
    is_active: bool = True

    class Config:
        from_attributes = True

class RoleUpdate(BaseModel):
    role: AppRole
    district_id: Optional[str] = None

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
