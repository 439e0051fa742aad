import logging
from datetime import datetime, timedelta

from jose import jwt
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from grampredict.core.config import settings

logger = logging.getLogger(__name__)

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM

def create_magic_token(email: str) -> str:
    """Creates a JWT token for a passwordless "magic link" login.

    Args:
        email (str): The user's email address to be encoded in the token.

    Returns:
        str: The generated JSON Web Token.
    """
    payload = {
        "sub": email,
        "purpose": "magic",
        "exp": datetime.utcnow() + timedelta(days=settings.MAGIC_TOKEN_EXPIRE_DAYS)
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)

def create_access_token(email: str) -> str:
    """Creates the bearer token the dashboard sends on every API call.

    Args:
        email (str): The authenticated user's email address.

    Returns:
        str: The generated JSON Web Token.
    """
    payload = {
        "sub": email,
        "purpose": "access",
        "exp": datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)

def send_email_link(recipient: str, token: str) -> bool:
    """Sends the magic login link via SendGrid.

    Returns False without sending when no SendGrid key is configured, which
    is the normal case for local development.
    """
    if not settings.SENDGRID_API_KEY:
        logger.info("SENDGRID_API_KEY not set, skipping magic link email to %s", recipient)
        return False

    base_url = settings.FRONTEND_BASE_URL.rstrip('/')
    login_url = f"{base_url}/auth/magic-link?token={token}"

    html = f"""
<p>Namaste,</p>
<p>Use the link below to sign in to the GramPredict dashboard.</p>
<p><a href="{login_url}">Sign in to GramPredict</a></p>
<p>If you did not request this, you can ignore this email. The link expires in {settings.MAGIC_TOKEN_EXPIRE_DAYS} days.</p>
"""

    message = Mail(
        from_email=settings.EMAIL_SENDER,
        to_emails=recipient,
        subject="Your GramPredict sign-in link",
        html_content=html,
    )

    try:
        SendGridAPIClient(settings.SENDGRID_API_KEY).send(message)
        return True
    except Exception as e:
        logger.error("SendGrid error while mailing %s: %s", recipient, e)
        return False
