from pydantic import BaseModel, EmailStr


# ─── Request Schemas ──────────────────────────────────────────────────────────
class LoginRequest(BaseModel):
    email:    EmailStr
    password: str


# ─── Response Schemas ─────────────────────────────────────────────────────────
class TechnicianInToken(BaseModel):
    id:     int
    name:   str
    email:  str
    role:   str
    teamId: int

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    accessToken: str
    tokenType:   str = "Bearer"
    expiresIn:   int          # seconds
    technician:  TechnicianInToken
