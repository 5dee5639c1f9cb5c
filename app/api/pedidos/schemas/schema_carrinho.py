"""
Schemas do carrinho (montagem do pedido no caixa).
O rascunho inteiro é salvo no banco local a cada alteração.
"""
from typing import List, Optional, Tuple
from uuid import uuid4

from pydantic import BaseModel, Field

from app.api.catalogo.schemas.schema_catalogo import Produto
from app.api.shared.schemas.schema_shared_enums import (
    MeioPagamentoEnum,
    TipoDescontoEnum,
    TipoPedidoEnum,
)


class ItemCarrinho(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    produto: Produto
    sabores: List[Produto] = Field(default_factory=list)
    tamanho: Optional[int] = None
    preco: float
    quantidade: int = Field(1, ge=1)
    observacao: str = ""

    def nomes_sabores(self) -> List[str]:
        return sorted(s.sabor for s in self.sabores) if self.sabores else [self.produto.sabor]

    def chave(self) -> Tuple:
        """Itens com a mesma chave viram uma linha só, somando a quantidade."""
        return (
            tuple(self.nomes_sabores()),
            self.tamanho,
            round(self.preco, 2),
            self.observacao.strip().lower(),
        )

    def descricao(self) -> str:
        nomes = " / ".join(s.sabor for s in self.sabores) if self.sabores else self.produto.sabor
        if self.tamanho:
            return f"Pizza {self.tamanho} pedaços - {nomes}"
        return nomes


class Desconto(BaseModel):
    tipo: TipoDescontoEnum = TipoDescontoEnum.FIXO
    valor: float = 0


class ClientePedido(BaseModel):
    nome: str = ""
    telefone: str = ""
    endereco: str = ""
    bairro: str = ""
    complemento: str = ""


class Carrinho(BaseModel):
    itens: List[ItemCarrinho] = Field(default_factory=list)
    cliente: ClientePedido = Field(default_factory=ClientePedido)
    tipo: TipoPedidoEnum = TipoPedidoEnum.DELIVERY
    desconto: Desconto = Field(default_factory=Desconto)
    meio_pagamento: Optional[MeioPagamentoEnum] = None
    troco_para: Optional[float] = None
    taxa_entrega: float = 0


class TotaisCarrinho(BaseModel):
    subtotal: float
    desconto: float
    taxa_entrega: float
    total: float


class CarrinhoResponse(BaseModel):
    carrinho: Carrinho
    totais: TotaisCarrinho


# ------ Requests ------
class AdicionarItemRequest(BaseModel):
    sabor: str = Field(..., description="Produto principal (sabor ou nome do item)")
    sabores: Optional[List[str]] = Field(None, description="Sabores da pizza (meio a meio etc.)")
    tamanho: Optional[int] = Field(None, description="Pedaços: 4, 8 ou 12 (só pizzas)")
    observacao: str = ""


class QuantidadeRequest(BaseModel):
    quantidade: int


class ObservacaoRequest(BaseModel):
    observacao: str = ""


class DadosCarrinhoRequest(BaseModel):
    """Atualiza os campos do rascunho que não são itens."""
    cliente: Optional[ClientePedido] = None
    tipo: Optional[TipoPedidoEnum] = None
    desconto: Optional[Desconto] = None
    meio_pagamento: Optional[MeioPagamentoEnum] = None
    troco_para: Optional[float] = None
    taxa_entrega: Optional[float] = Field(None, ge=0)
