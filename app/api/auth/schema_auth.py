from pydantic import BaseModel

from app.api.shared.schemas.schema_shared_enums import RoleUsuarioEnum


class LoginRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    role: RoleUsuarioEnum
    nome: str
    expira_em_min: int
