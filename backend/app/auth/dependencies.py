"""
Identity resolution for FastAPI routes.

Resolves the consultant making the request from a bearer token, either in
the Authorization header or in the ``access_token`` cookie.
"""

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from core.models import MAX_CONSULTANT_ID, Consultant

from ..database import get_db
from .jwt import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="login", auto_error=False)


def get_token_from_request(
    token_header: str | None = Depends(oauth2_scheme),
    access_token_cookie: str | None = Cookie(None, alias="access_token"),
) -> str:
    """Extract the JWT, preferring the Authorization header over the cookie."""
    if token_header:
        return token_header
    if access_token_cookie:
        return access_token_cookie

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Não autenticado.",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_consultor(
    token: str = Depends(get_token_from_request),
    db: Session = Depends(get_db),
) -> Consultant:
    """
    Load the authenticated consultant.

    Steps:
    1) Extract token from header or cookie
    2) Decode JWT and read the subject (consultant id)
    3) Load the consultant or raise 401
    """
    try:
        payload = decode_access_token(token)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciais de autenticação inválidas.",
        ) from None

    subject = payload.get("sub")
    try:
        consultant_id = int(subject)
    except (TypeError, ValueError):
        consultant_id = None

    if consultant_id is None or not 1 <= consultant_id <= MAX_CONSULTANT_ID:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciais de autenticação inválidas.",
        )

    consultant = db.get(Consultant, consultant_id)
    if consultant is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Consultor não encontrado.",
        )
    return consultant
