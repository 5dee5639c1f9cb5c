from pydantic import BaseModel, ConfigDict

from app.api.shared.schemas.schema_shared_enums import RoleUsuarioEnum


class UsuarioCreate(BaseModel):
    # strings vazias são barradas no service, com todas as pendências juntas
    username: str = ""
    nome: str = ""
    password: str = ""
    role: RoleUsuarioEnum = RoleUsuarioEnum.OPERATOR


class UsuarioResponse(BaseModel):
    id: str
    username: str
    nome: str
    role: RoleUsuarioEnum

    model_config = ConfigDict(from_attributes=True)
