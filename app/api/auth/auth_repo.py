# app/api/auth/auth_repo.py
from typing import Optional

from sqlalchemy.orm import Session

from app.api.cadastros.models.model_usuario import UsuarioModel


class AuthRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_user_by_username(self, username: str) -> Optional[UsuarioModel]:
        return (
            self.db.query(UsuarioModel)
            .filter(UsuarioModel.username == username)
            .first()
        )

    def get_user_by_id(self, user_id: str) -> Optional[UsuarioModel]:
        return self.db.get(UsuarioModel, user_id)
