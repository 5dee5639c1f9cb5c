# app/core/admin_dependencies.py
from typing import Optional

from fastapi import Depends, HTTPException, status, Request
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from app.api.auth.auth_repo import AuthRepository
from app.api.cadastros.models.model_usuario import UsuarioModel
from app.api.shared.schemas.schema_shared_enums import RoleUsuarioEnum
from app.core.security import SECRET_KEY, ALGORITHM
from app.database.db_connection import get_db
from app.utils.logger import logger

credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Sessão inválida ou expirada",
    headers={"WWW-Authenticate": "Bearer"},
)

forbidden_exception = HTTPException(
    status_code=status.HTTP_403_FORBIDDEN,
    detail="Você não tem permissão para acessar este recurso",
)


def usuario_do_token(access_token: str, db: Session) -> Optional[UsuarioModel]:
    """Valida o JWT e devolve o usuário, ou None se o token não vale mais."""
    try:
        payload = jwt.decode(access_token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"[AUTH] Token rejeitado: {e}")
        return None
    user_id = payload.get("sub")
    if not user_id:
        return None
    return AuthRepository(db).get_user_by_id(user_id)


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
) -> UsuarioModel:
    """
    Recupera o usuário autenticado a partir do header Authorization (Bearer <token>).
    """
    # 1. Pega o token do header Authorization
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        logger.warning("[AUTH] Cabeçalho Authorization ausente ou malformado.")
        raise credentials_exception

    access_token = auth_header.replace("Bearer ", "")

    # 2. Decodifica o JWT (expiração vencida também cai aqui) e busca o usuário no banco local
    user = usuario_do_token(access_token, db)
    if not user:
        raise credentials_exception

    return user


def require_admin(current_user: UsuarioModel = Depends(get_current_user)) -> UsuarioModel:
    """
    Atalho para rotas que só podem ser acessadas por administradores.
    """
    if RoleUsuarioEnum(current_user.role) != RoleUsuarioEnum.ADMIN:
        logger.warning(
            "[AUTH] Acesso negado. role=%s tentou acessar rota admin.",
            current_user.role,
        )
        raise forbidden_exception
    return current_user
