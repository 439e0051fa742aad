from fastapi import Depends, HTTPException, Header, status
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from grampredict.core.config import settings
from grampredict.core.policy import Capability, has_capability
from grampredict.db.session import get_db
from grampredict.crud import user as crud_user
from grampredict.models.user import User

def get_current_user(
    authorization: str = Header(None),
    db: Session = Depends(get_db),
) -> User:
    """FastAPI dependency to authenticate and retrieve the current user.

    This function inspects the 'Authorization: Bearer <token>' header, decodes
    the JWT, and fetches the corresponding user from the database. It's used
    to protect routes that require user authentication.

    Args:
        authorization (str, optional): The content of the Authorization header.
        db (Session, optional): The database session dependency.

    Returns:
        User: The authenticated user's database object.

    Raises:
        HTTPException: 401 for missing, malformed, or invalid tokens, or
                       404 if the user from the token is not found in the database.
    """
    if authorization is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, 
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = jwt.decode(parts[1], settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, 
            detail=f"Invalid token: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    email = payload.get("sub")
    if email is None or payload.get("purpose") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, 
            detail="Invalid token: not an access token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    
    user = crud_user.get_user_by_email(db, email=email)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")
    
    return user

def require_capability(capability: Capability):
    """Builds a dependency that only lets through users whose role grants `capability`.

    This is the single place role checks happen; routes declare what they
    need instead of comparing role strings themselves.

    Args:
        capability (Capability): The capability the route requires.

    Returns:
        Callable: A FastAPI dependency returning the authenticated user.
    """
    def _checker(current_user: User = Depends(get_current_user)) -> User:
        if not has_capability(current_user.role, capability):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Not enough permissions: {capability.value} required",
            )
        return current_user

    return _checker
