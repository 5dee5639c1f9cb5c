from fastapi import APIRouter, Depends

from app.api.configuracoes.schemas.schema_configuracao import (
    ConfiguracoesResponse,
    ConfiguracoesUpdate,
)
from app.api.configuracoes.services.dependencies import get_configuracao_service
from app.api.configuracoes.services.service_configuracao import ConfiguracaoService
from app.core.admin_dependencies import get_current_user

router = APIRouter(
    prefix="/api/configuracoes",
    tags=["Configurações"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=ConfiguracoesResponse)
def obter_configuracoes(svc: ConfiguracaoService = Depends(get_configuracao_service)):
    return svc.obter()


@router.patch("", response_model=ConfiguracoesResponse)
def atualizar_configuracoes(
    payload: ConfiguracoesUpdate,
    svc: ConfiguracaoService = Depends(get_configuracao_service),
):
    """Alterar `modo_offline` derruba e refaz as assinaturas de todas as coleções."""
    return svc.atualizar(payload)
