from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status

from app.api.cadastros.models.model_usuario import UsuarioModel
from app.api.pedidos.schemas.schema_carrinho import CarrinhoResponse
from app.api.pedidos.schemas.schema_pedido import FinalizarPedidoRequest, PedidoResponse
from app.api.pedidos.services.dependencies import get_pedido_service
from app.api.pedidos.services.service_pedido import PedidoService
from app.api.relatorios.services.service_relatorios import buscar_pedidos, historico_cliente
from app.core.admin_dependencies import get_current_user
from app.utils.telefone import normalizar_telefone

router = APIRouter(
    prefix="/api/pedidos",
    tags=["Pedidos"],
    dependencies=[Depends(get_current_user)],
)


@router.post("", response_model=PedidoResponse, status_code=status.HTTP_201_CREATED)
def finalizar_pedido(
    background_tasks: BackgroundTasks,
    payload: Optional[FinalizarPedidoRequest] = None,
    current_user: UsuarioModel = Depends(get_current_user),
    svc: PedidoService = Depends(get_pedido_service),
):
    """
    Envia o carrinho para a cozinha. Todas as pendências voltam juntas em
    `erros` (400) e nada é gravado.
    """
    carrinho = payload.carrinho if payload else None
    return svc.finalizar(carrinho, current_user.nome, background_tasks)


@router.get("", response_model=List[PedidoResponse])
def listar_pedidos(
    busca: Optional[str] = Query(None, description="Número, cliente, telefone, entregador, data, tipo, total ou status"),
    svc: PedidoService = Depends(get_pedido_service),
):
    return buscar_pedidos(svc.listar(), busca)


@router.get("/cliente/{telefone}", response_model=List[PedidoResponse])
def historico_do_cliente(telefone: str, svc: PedidoService = Depends(get_pedido_service)):
    """Últimos 10 pedidos do telefone."""
    telefone = normalizar_telefone(telefone)
    return historico_cliente(svc.repo.listar_por_telefone(telefone), telefone)


@router.get("/{numero}", response_model=PedidoResponse)
def obter_pedido(numero: int, svc: PedidoService = Depends(get_pedido_service)):
    return svc.obter(numero)


@router.post("/{numero}/repetir", response_model=CarrinhoResponse)
def repetir_pedido(numero: int, svc: PedidoService = Depends(get_pedido_service)):
    """Substitui o carrinho atual pelos itens e cliente do pedido."""
    return svc.repetir(numero)
