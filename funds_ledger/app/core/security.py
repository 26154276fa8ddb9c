"""Bearer-token capability checks for the record routes."""
from typing import Callable, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings, get_settings

GET_RECORDS = "getRecords"
MANAGE_RECORDS = "manageRecords"

ROLE_RIGHTS: dict[str, frozenset[str]] = {
    "user": frozenset({GET_RECORDS}),
    "admin": frozenset({GET_RECORDS, MANAGE_RECORDS}),
}

bearer = HTTPBearer(auto_error=False)


def get_current_role(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    settings: Settings = Depends(get_settings),
) -> str:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please authenticate",
            headers={"WWW-Authenticate": "Bearer"},
        )
    role = settings.api_tokens.get(credentials.credentials)
    if role is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please authenticate",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return role


def require_capability(capability: str) -> Callable[..., str]:
    def _check(role: str = Depends(get_current_role)) -> str:
        if capability not in ROLE_RIGHTS.get(role, frozenset()):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return role

    return _check
