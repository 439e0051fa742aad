from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session

from grampredict.crud import user as crud_user
from grampredict.crud import district as crud_district
from grampredict.core.dependencies import get_current_user, require_capability
from grampredict.core.policy import AppRole, Capability
from grampredict.db.session import get_db
from grampredict.models.user import User as UserModel
from grampredict.schemas.user import User, RoleUpdate

router = APIRouter(
    prefix="/users",
    tags=["users"],
)

@router.get("/me", response_model=User)
def read_current_user(current_user: UserModel = Depends(get_current_user)):
    """Gets the profile and role of the currently authenticated user."""
    return current_user

@router.get("/", response_model=List[User])
def read_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, gt=0, le=100),
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(require_capability(Capability.MANAGE_USERS)),
):
    """Lists users (admin only)."""
    return crud_user.get_users(db, skip, limit)

@router.put("/{user_id}/role", response_model=User)
def update_role(
    role_in: RoleUpdate,
    user_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(require_capability(Capability.MANAGE_USERS)),
):
    """Changes a user's role.
    
    Panchayat officers must be posted to an existing district; other roles
    have their district cleared.
    
    Args:
        role_in (RoleUpdate): The new role and, for officers, the district.
        user_id (int): The ID of the user to update.
        db (Session): The database session dependency.
        current_user: The authenticated admin.
        
    Returns:
        User: The updated user object.
        
    Raises:
        HTTPException: 404 if the user or district is not found, 400 if an
                       officer has no district.
    """
    db_user = crud_user.get_user(db, user_id)
    if not db_user:
        raise HTTPException(404, "User not found")

    district_id = None
    if role_in.role == AppRole.PANCHAYAT_OFFICER:
        if not role_in.district_id:
            raise HTTPException(400, "Panchayat officers must be assigned a district")
        if not crud_district.get_district(db, role_in.district_id):
            raise HTTPException(404, "District not found")
        district_id = role_in.district_id

    return crud_user.set_role(db, db_user, role_in.role, district_id)
