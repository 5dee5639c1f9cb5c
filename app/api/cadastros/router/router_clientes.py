from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from typing import List, Optional

from app.api.cadastros.schemas.schema_cliente import (
    ClienteCreate,
    ClienteHistoricoResponse,
    ClienteOut,
    ClienteUpdate,
)
from app.api.cadastros.services.dependencies import get_cliente_service
from app.api.cadastros.services.service_cliente import ClienteService
from app.core.admin_dependencies import get_current_user
from app.utils.logger import logger

router = APIRouter(
    prefix="/api/cadastros/clientes",
    tags=["Cadastros - Clientes"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[ClienteOut])
def listar_clientes(
    busca: Optional[str] = Query(None, description="Nome ou telefone"),
    svc: ClienteService = Depends(get_cliente_service),
):
    return svc.list(busca)


@router.get("/historico", response_model=ClienteHistoricoResponse)
def buscar_por_telefone(
    telefone: str = Query(..., description="Telefone digitado no caixa"),
    svc: ClienteService = Depends(get_cliente_service),
):
    """Preenche o carrinho a partir do cadastro ou, sem cadastro, do último pedido."""
    return svc.buscar_historico(telefone)


@router.get("/{cliente_id}", response_model=ClienteOut)
def get_cliente(cliente_id: str, svc: ClienteService = Depends(get_cliente_service)):
    return svc.get(cliente_id)


@router.post("", response_model=ClienteOut, status_code=status.HTTP_201_CREATED)
def criar_cliente(payload: ClienteCreate, svc: ClienteService = Depends(get_cliente_service)):
    logger.info(f"[Clientes] Criar - {payload.nome}")
    return svc.create(payload)


@router.put("/{cliente_id}", response_model=ClienteOut)
def atualizar_cliente(
    cliente_id: str,
    payload: ClienteUpdate,
    svc: ClienteService = Depends(get_cliente_service),
):
    logger.info(f"[Clientes] Update - id={cliente_id}")
    return svc.update(cliente_id, payload)


@router.delete("/{cliente_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_cliente(cliente_id: str, svc: ClienteService = Depends(get_cliente_service)):
    svc.delete(cliente_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
