from typing import List, Optional

from sqlalchemy.orm import Session

from app.api.cadastros.models.model_usuario import UsuarioModel
from app.api.shared.schemas.schema_shared_enums import RoleUsuarioEnum


class UsuarioRepository:
    """Usuários ficam só no banco local (não sincronizam com o remoto)."""

    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[UsuarioModel]:
        return self.db.query(UsuarioModel).order_by(UsuarioModel.nome).all()

    def get(self, id: str) -> Optional[UsuarioModel]:
        return self.db.get(UsuarioModel, id)

    def get_by_username(self, username: str) -> Optional[UsuarioModel]:
        return self.db.query(UsuarioModel).filter(UsuarioModel.username == username).first()

    def count(self) -> int:
        return self.db.query(UsuarioModel).count()

    def count_admins(self) -> int:
        return self.db.query(UsuarioModel).filter(UsuarioModel.role == RoleUsuarioEnum.ADMIN).count()

    def create(self, user: UsuarioModel) -> UsuarioModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete(self, user: UsuarioModel) -> None:
        self.db.delete(user)
        self.db.commit()
