from sqlalchemy import Column, DateTime, Enum as SAEnum, String

from app.api.cadastros.models.model_cliente import novo_id
from app.api.shared.schemas.schema_shared_enums import RoleUsuarioEnum
from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class UsuarioModel(Base):
    """Usuário do sistema (operador do caixa ou administrador). Gravado só no banco local."""
    __tablename__ = "usuarios"

    id = Column(String(32), primary_key=True, default=novo_id)
    username = Column(String(50), nullable=False, unique=True)
    nome = Column(String(100), nullable=False)
    role = Column(
        SAEnum(RoleUsuarioEnum, name="usuario_role_enum", native_enum=False, length=20),
        nullable=False,
        default=RoleUsuarioEnum.OPERATOR,
    )
    hashed_password = Column(String(255), nullable=False)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
