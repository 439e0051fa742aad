from fastapi import APIRouter, HTTPException, Query, Depends, Body
from pydantic import EmailStr
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from grampredict.core.utils import create_magic_token, create_access_token, send_email_link
from grampredict.core.config import settings
from grampredict.db.session import get_db
from grampredict.crud import user as crud_user
from grampredict.schemas.user import UserCreate, Token

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _unique_username(db: Session, email: str) -> str:
    base = email.split("@")[0][:40]
    if len(base) < 3:
        base = f"{base}user"
    username, n = base, 1
    while crud_user.get_user_by_username(db, username):
        n += 1
        username = f"{base}{n}"
    return username


@router.post("/request-token")
async def request_token(email: EmailStr = Body(..., embed=True)):
    """Creates a magic link token and emails it to the user.

    The token is also returned in the response so the dashboard can complete
    the login directly in development setups without email delivery.
    """
    token = create_magic_token(email)
    sent = send_email_link(email, token)
    return {"msg": f"Magic link {'sent' if sent else 'created'} for {email}", "token": token}


@router.get("/verify-token", response_model=Token)
async def verify_token(
    token: str = Query(...),
    db:    Session = Depends(get_db),
):
    """Verifies a magic link token and returns an access token.

    If the user is logging in for the first time, their account is
    automatically created with the public role.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    email = payload.get("sub")
    if not email or payload.get("purpose") != "magic":
        raise HTTPException(status_code=400, detail="Invalid token payload")

    user = crud_user.get_user_by_email(db, email)
    if user is None:
        user_in = UserCreate(username=_unique_username(db, email), email=email)
        user = crud_user.create_user(db, user_in)

    return Token(access_token=create_access_token(user.email))
