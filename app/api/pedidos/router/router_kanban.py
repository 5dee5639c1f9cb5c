from typing import List, Optional

from fastapi import APIRouter, Depends

from app.api.cadastros.models.model_usuario import UsuarioModel
from app.api.pedidos.schemas.schema_pedido import (
    AvancarStatusRequest,
    CancelarPedidoRequest,
    HistoricoResponse,
    KanbanResponse,
    MoverPedidoRequest,
    MoverPedidoResponse,
    PedidoResponse,
)
from app.api.pedidos.services.dependencies import get_kanban_service
from app.api.pedidos.services.service_pedido_kanban import KanbanService
from app.api.shared.schemas.schema_shared_enums import MOTIVOS_CANCELAMENTO
from app.core.admin_dependencies import get_current_user

router = APIRouter(
    prefix="/api/pedidos/kanban",
    tags=["Pedidos - Kanban"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=KanbanResponse)
def obter_quadro(svc: KanbanService = Depends(get_kanban_service)):
    return svc.quadro()


@router.get("/historico", response_model=HistoricoResponse)
def obter_historico(svc: KanbanService = Depends(get_kanban_service)):
    return svc.historico()


@router.get("/motivos-cancelamento", response_model=List[str])
def listar_motivos_cancelamento():
    return MOTIVOS_CANCELAMENTO


@router.post("/{numero}/avancar", response_model=PedidoResponse)
def avancar_pedido(
    numero: int,
    payload: Optional[AvancarStatusRequest] = None,
    svc: KanbanService = Depends(get_kanban_service),
):
    payload = payload or AvancarStatusRequest()
    return svc.avancar(numero, payload.entregador, payload.sem_entregador)


@router.post("/{numero}/cancelar", response_model=PedidoResponse)
def cancelar_pedido(
    numero: int,
    payload: CancelarPedidoRequest,
    current_user: UsuarioModel = Depends(get_current_user),
    svc: KanbanService = Depends(get_kanban_service),
):
    return svc.cancelar(numero, payload.motivo, current_user.nome)


@router.post("/{numero}/arquivar", response_model=PedidoResponse)
def arquivar_pedido(numero: int, svc: KanbanService = Depends(get_kanban_service)):
    return svc.arquivar(numero)


@router.post("/{numero}/restaurar", response_model=PedidoResponse)
def restaurar_pedido(numero: int, svc: KanbanService = Depends(get_kanban_service)):
    return svc.restaurar(numero)


@router.post("/{numero}/mover", response_model=MoverPedidoResponse)
def mover_pedido(
    numero: int,
    payload: MoverPedidoRequest,
    svc: KanbanService = Depends(get_kanban_service),
):
    """Arrastar e soltar entre colunas. `movido=false` quando nada mudou."""
    movido, pedido = svc.mover(numero, payload.destino, payload.entregador, payload.sem_entregador)
    return MoverPedidoResponse(movido=movido, pedido=PedidoResponse.model_validate(pedido))
