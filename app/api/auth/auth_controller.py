# app/api/auth/auth_controller.py

from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.auth.auth_repo import AuthRepository
from app.api.auth.schema_auth import LoginRequest, TokenResponse
from app.api.cadastros.models.model_usuario import UsuarioModel
from app.api.cadastros.schemas.schema_usuario import UsuarioResponse
from app.api.configuracoes.services.service_configuracao import ConfiguracaoService
from app.core.admin_dependencies import get_current_user
from app.core.security import verify_password, create_access_token
from app.database.db_connection import get_db
from app.utils.logger import logger

router = APIRouter(tags=["auth"], prefix="/api/auth")


@router.post("/token", response_model=TokenResponse)
def login_usuario(
    payload: LoginRequest,
    db: Session = Depends(get_db),
):
    # 1. Busca usuário no banco local
    user = AuthRepository(db).get_user_by_username(payload.username)
    if not user or not verify_password(payload.password, user.hashed_password):
        logger.warning(f"[AUTH] Login recusado para '{payload.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuário ou senha inválidos",
            headers={"WWW-Authenticate": "Bearer"}
        )

    # 2. Validade do token = tempo de sessão configurado
    minutos = ConfiguracaoService(db).tempo_sessao_min
    access_token = create_access_token(
        data={"sub": user.id},
        expires_delta=timedelta(minutes=minutos)
    )
    logger.info(f"[AUTH] Login de {user.username} ({user.role})")

    return TokenResponse(
        access_token=access_token,
        token_type="Bearer",
        role=user.role,
        nome=user.nome,
        expira_em_min=minutos,
    )


@router.get(
    "/me",
    response_model=UsuarioResponse,
    summary="Retorna o usuário atual baseado no token JWT"
)
def obter_usuario_atual(
    current_user: UsuarioModel = Depends(get_current_user),
):
    return current_user
