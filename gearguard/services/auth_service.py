import logging

from sqlalchemy.orm import Session

from gearguard.config import settings
from gearguard.models.technician import Technician
from gearguard.schemas.auth import LoginRequest
from gearguard.utils.security import verify_password, create_access_token
from gearguard.utils.exceptions import UnauthorizedException, AccountInactiveException

logger = logging.getLogger(__name__)


class AuthService:

    # ─── Login ────────────────────────────────────────────────────────────────
    def login(self, db: Session, data: LoginRequest) -> dict:
        t = db.query(Technician).filter(Technician.email == str(data.email).lower()).first()

        if not t or not t.password or not verify_password(data.password, t.password):
            logger.info(f"Failed login for {data.email}")
            raise UnauthorizedException("Invalid email or password")

        if not t.isActive:
            raise AccountInactiveException()

        return {
            "accessToken": create_access_token(t.id, t.role.value),
            "tokenType":   "Bearer",
            "expiresIn":   settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            "technician": {
                "id":     t.id,
                "name":   t.name,
                "email":  t.email,
                "role":   t.role.value,
                "teamId": t.teamId,
            },
        }


auth_service = AuthService()
