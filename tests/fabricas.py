"""Fábricas de pedidos usadas pelos testes."""
from datetime import datetime
from decimal import Decimal

from app.api.pedidos.models.model_pedido import PedidoModel
from app.api.shared.schemas.schema_shared_enums import (
    MeioPagamentoEnum,
    StatusPedidoEnum,
    TipoPedidoEnum,
)
from app.database.sync.backends import LOCAL


def item_pizza(sabores, tamanho=8, preco=45.0, quantidade=1, categoria="Pizzas Salgadas"):
    produtos = [
        {"categoria": categoria, "tipo": "Pizza", "sabor": s, "ingredientes": [], "preco": None, "tamanhos": []}
        for s in sabores
    ]
    return {
        "id": "-".join(sabores),
        "produto": produtos[0],
        "sabores": produtos,
        "tamanho": tamanho,
        "preco": preco,
        "quantidade": quantidade,
        "observacao": "",
    }


def dados_pedido(
    total=50.0,
    taxa=5.0,
    tipo=TipoPedidoEnum.DELIVERY,
    meio=MeioPagamentoEnum.PIX,
    nome="Maria",
    telefone="11999990000",
    criado_em=None,
    itens=None,
):
    total = Decimal(str(total))
    taxa = Decimal(str(taxa))
    return {
        "criado_em": criado_em or datetime(2024, 5, 10, 19, 30, 0),
        "tipo": tipo,
        "status": StatusPedidoEnum.CONFIRMED,
        "cliente": {"nome": nome, "telefone": telefone, "endereco": "Rua A, 10", "bairro": "Centro", "complemento": ""},
        "cliente_telefone": telefone,
        "itens": itens if itens is not None else [item_pizza(["Calabresa"], preco=float(total - taxa))],
        "subtotal": total - taxa,
        "desconto": Decimal("0"),
        "taxa_entrega": taxa,
        "total": total,
        "meio_pagamento": meio,
    }


def novo_pedido(numero, status=StatusPedidoEnum.CONFIRMED, entregador=None, prazo=None, **kwargs):
    """Pedido em memória (não persistido) para as funções puras."""
    dados = dados_pedido(**kwargs)
    dados["status"] = status
    return PedidoModel(numero=numero, entregador=entregador, prazo=prazo, origem=LOCAL, **dados)
