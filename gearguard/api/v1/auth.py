from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from gearguard.database import get_db
from gearguard.dependencies import get_current_technician
from gearguard.models.technician import Technician
from gearguard.schemas.auth import LoginRequest, LoginResponse
from gearguard.schemas.common import SuccessResponse, success_response
from gearguard.services.auth_service import auth_service
from gearguard.services.technician_service import serialize_technician

router = APIRouter(prefix="/auth")


# ─── POST /auth/login ─────────────────────────────────────────────────────────
@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    summary="Login and receive an access token",
    response_model=SuccessResponse[LoginResponse],
)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate a technician that has a password set.
    The token is optional on every other endpoint; when sent with
    POST /requests it fills in createdBy.
    """
    result = auth_service.login(db, data)
    return success_response("Login successful", result)


# ─── GET /auth/me ─────────────────────────────────────────────────────────────
@router.get(
    "/me",
    status_code=status.HTTP_200_OK,
    summary="Get current authenticated technician",
    response_model=SuccessResponse,
)
def get_me(current: Technician = Depends(get_current_technician)):
    return success_response("Technician profile retrieved", serialize_technician(current))
