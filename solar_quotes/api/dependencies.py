"""Dependency injection for FastAPI endpoints"""

import logging
from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from solar_quotes.config import settings
from solar_quotes.domain.models import Principal
from solar_quotes.infrastructure.database.session import get_db
from solar_quotes.services.quote_service import QuoteService

bearer_scheme = HTTPBearer(auto_error=False)


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    """
    Resolve the caller from the bearer token issued by the identity provider.

    Missing token -> 401, invalid or expired token -> 403.
    """
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Access token required")

    try:
        payload = jwt.decode(credentials.credentials, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logging.warning(f"Token verification failed: {e}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid or expired token")

    user_id = payload.get("userId")
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not authenticated")

    return Principal(user_id=str(user_id), role_name=payload.get("roleName"))


def get_quote_service(db: Session = Depends(get_db)) -> QuoteService:
    """Provide a quote service bound to the request's session"""
    return QuoteService(db)
