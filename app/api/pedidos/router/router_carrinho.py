from fastapi import APIRouter, Depends

from app.api.pedidos.schemas.schema_carrinho import (
    AdicionarItemRequest,
    CarrinhoResponse,
    DadosCarrinhoRequest,
    ObservacaoRequest,
    QuantidadeRequest,
)
from app.api.pedidos.services.dependencies import get_carrinho_service
from app.api.pedidos.services.service_carrinho import CarrinhoService
from app.core.admin_dependencies import get_current_user

router = APIRouter(
    prefix="/api/pedidos/carrinho",
    tags=["Pedidos - Carrinho"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=CarrinhoResponse)
def obter_carrinho(svc: CarrinhoService = Depends(get_carrinho_service)):
    return svc.resposta(svc.obter())


@router.delete("", response_model=CarrinhoResponse)
def limpar_carrinho(svc: CarrinhoService = Depends(get_carrinho_service)):
    return svc.limpar()


@router.put("/dados", response_model=CarrinhoResponse)
def atualizar_dados(
    payload: DadosCarrinhoRequest,
    svc: CarrinhoService = Depends(get_carrinho_service),
):
    """Cliente, tipo, desconto, pagamento, troco e taxa de entrega."""
    return svc.atualizar_dados(payload)


@router.post("/itens", response_model=CarrinhoResponse)
def adicionar_item(
    payload: AdicionarItemRequest,
    svc: CarrinhoService = Depends(get_carrinho_service),
):
    return svc.adicionar(payload)


@router.put("/itens/{item_id}/quantidade", response_model=CarrinhoResponse)
def alterar_quantidade(
    item_id: str,
    payload: QuantidadeRequest,
    svc: CarrinhoService = Depends(get_carrinho_service),
):
    return svc.alterar_quantidade(item_id, payload.quantidade)


@router.post("/itens/{item_id}/incrementar", response_model=CarrinhoResponse)
def incrementar_item(item_id: str, svc: CarrinhoService = Depends(get_carrinho_service)):
    return svc.incrementar(item_id)


@router.post("/itens/{item_id}/decrementar", response_model=CarrinhoResponse)
def decrementar_item(item_id: str, svc: CarrinhoService = Depends(get_carrinho_service)):
    return svc.decrementar(item_id)


@router.put("/itens/{item_id}/observacao", response_model=CarrinhoResponse)
def alterar_observacao(
    item_id: str,
    payload: ObservacaoRequest,
    svc: CarrinhoService = Depends(get_carrinho_service),
):
    return svc.alterar_observacao(item_id, payload.observacao)


@router.delete("/itens/{item_id}", response_model=CarrinhoResponse)
def remover_item(item_id: str, svc: CarrinhoService = Depends(get_carrinho_service)):
    return svc.remover(item_id)
