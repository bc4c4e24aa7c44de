from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from gearguard.database import get_db
from gearguard.models.technician import Technician
from gearguard.utils.security import verify_access_token
from gearguard.utils.exceptions import (
    UnauthorizedException,
    AccountInactiveException,
    NotFoundException,
)

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


def _resolve_technician(token: str, db: Session) -> Technician:
    payload = verify_access_token(token)
    technician_id = payload.get("sub")

    if technician_id is None:
        raise UnauthorizedException("Invalid token payload")

    technician = db.query(Technician).filter(Technician.id == int(technician_id)).first()
    if not technician:
        raise NotFoundException("Technician")

    if not technician.isActive:
        raise AccountInactiveException()

    return technician


# ─── Get Current Technician ───────────────────────────────────────────────────
def get_current_technician(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Technician:
    """
    Validate JWT Bearer token and return the logged-in Technician.
    Raises 401 if token is missing, invalid, or expired.
    Raises 403 if account is inactive.
    """
    if not credentials:
        raise UnauthorizedException("No authentication token provided")
    return _resolve_technician(credentials.credentials, db)


def get_optional_technician(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Technician | None:
    """
    Same as get_current_technician, but anonymous callers get None.
    A token that is present but invalid is still rejected.
    """
    if not credentials:
        return None
    return _resolve_technician(credentials.credentials, db)
