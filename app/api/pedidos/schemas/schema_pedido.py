from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.api.pedidos.schemas.schema_carrinho import Carrinho, ClientePedido, ItemCarrinho
from app.api.shared.schemas.schema_shared_enums import (
    MeioPagamentoEnum,
    StatusPedidoEnum,
    TipoPedidoEnum,
)


class PedidoResponse(BaseModel):
    numero: int
    criado_em: datetime
    prazo: Optional[datetime] = None
    tipo: TipoPedidoEnum
    status: StatusPedidoEnum
    cliente: ClientePedido
    itens: List[ItemCarrinho]
    subtotal: float
    desconto: float
    taxa_entrega: float
    total: float
    meio_pagamento: MeioPagamentoEnum
    troco_para: Optional[float] = None
    motivo_cancelamento: Optional[str] = None
    cancelado_por: Optional[str] = None
    cancelado_em: Optional[datetime] = None
    entregador: Optional[str] = None
    operador: Optional[str] = None
    origem: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# ------ Requests ------
class FinalizarPedidoRequest(BaseModel):
    """Sem `carrinho`, o rascunho salvo no caixa é usado."""
    carrinho: Optional[Carrinho] = None


class AvancarStatusRequest(BaseModel):
    entregador: Optional[str] = None
    sem_entregador: bool = Field(False, description="Despacha sem escolher entregador")


class CancelarPedidoRequest(BaseModel):
    motivo: str


class MoverPedidoRequest(BaseModel):
    destino: StatusPedidoEnum
    entregador: Optional[str] = None
    sem_entregador: bool = False


class MoverPedidoResponse(BaseModel):
    movido: bool
    pedido: PedidoResponse


# ------ Kanban ------
class CardKanban(BaseModel):
    pedido: PedidoResponse
    minutos_restantes: Optional[int] = None
    urgencia: Optional[str] = None  # critico | atencao | ok


class KanbanResponse(BaseModel):
    colunas: Dict[StatusPedidoEnum, List[CardKanban]]


class HistoricoDiaResponse(BaseModel):
    dia: date
    pedidos: List[PedidoResponse]


class HistoricoResponse(BaseModel):
    dias: List[HistoricoDiaResponse]
