"""Admin API key check for the reference data management endpoints."""
import secrets
from typing import Optional

from fastapi import HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from medgate.core.config import ADMIN_API_KEY
from medgate.core.logging_config import logger

admin_key_scheme = HTTPBearer(auto_error=False, description="Admin API key")


def verify_admin_key(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(admin_key_scheme)
) -> bool:
    """Accepts only ``Authorization: Bearer <ADMIN_API_KEY>``.

    No header is a 401, a wrong key is a 403.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin API key required for reference data management.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not secrets.compare_digest(credentials.credentials, ADMIN_API_KEY):
        logger.warning("Rejected management request: invalid admin API key")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid API Key for reference data management."
        )
    return True
