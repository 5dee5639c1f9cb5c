from typing import List

from sqlalchemy.orm import Session

from app.api.cadastros.models.model_usuario import UsuarioModel
from app.api.cadastros.repositories.repo_usuario import UsuarioRepository
from app.api.cadastros.schemas.schema_usuario import UsuarioCreate
from app.api.shared.schemas.schema_shared_enums import RoleUsuarioEnum
from app.config.settings import DEFAULT_ADMIN_NAME, DEFAULT_ADMIN_PASSWORD, DEFAULT_ADMIN_USERNAME
from app.core.exceptions import (
    AutorizacaoError,
    RegistroDuplicadoError,
    RegistroNaoEncontradoError,
    ValidacaoPedidoError,
)
from app.core.security import hash_password
from app.utils.logger import logger


class UsuarioService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UsuarioRepository(db)

    def garantir_admin_padrao(self) -> bool:
        """Cria o administrador padrão quando não existe nenhum usuário."""
        if self.repo.count() > 0:
            return False
        self.repo.create(UsuarioModel(
            username=DEFAULT_ADMIN_USERNAME,
            nome=DEFAULT_ADMIN_NAME,
            role=RoleUsuarioEnum.ADMIN,
            hashed_password=hash_password(DEFAULT_ADMIN_PASSWORD),
        ))
        logger.info(f"[Usuários] Administrador padrão criado: {DEFAULT_ADMIN_USERNAME}")
        return True

    def list(self) -> List[UsuarioModel]:
        return self.repo.list()

    def create(self, data: UsuarioCreate) -> UsuarioModel:
        erros = []
        if not data.username.strip():
            erros.append("Usuário é obrigatório")
        if not data.nome.strip():
            erros.append("Nome é obrigatório")
        if not data.password:
            erros.append("Senha é obrigatória")
        if erros:
            raise ValidacaoPedidoError(erros)

        username = data.username.strip()
        if self.repo.get_by_username(username):
            raise RegistroDuplicadoError("Nome de usuário já existe")

        user = self.repo.create(UsuarioModel(
            username=username,
            nome=data.nome.strip(),
            role=data.role,
            hashed_password=hash_password(data.password),
        ))
        logger.info(f"[Usuários] Usuário criado - username={user.username} role={user.role}")
        return user

    def delete(self, id: str, ator: UsuarioModel) -> None:
        user = self.repo.get(id)
        if not user:
            raise RegistroNaoEncontradoError("Usuário não encontrado")
        if user.id == ator.id:
            raise AutorizacaoError("Você não pode excluir seu próprio usuário logado")
        if RoleUsuarioEnum(user.role) == RoleUsuarioEnum.ADMIN and self.repo.count_admins() <= 1:
            raise AutorizacaoError("Não é possível excluir o último administrador")
        self.repo.delete(user)
        logger.info(f"[Usuários] Usuário removido - username={user.username} por {ator.username}")
