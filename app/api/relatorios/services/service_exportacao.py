"""
Exportação em CSV para planilha (Excel pt-BR).

Separador `;`, BOM UTF-8 no início, decimal com vírgula. Campos de texto
livre (nome, telefone, endereço, entregador, operador, motivo) vão entre
aspas, com aspas internas duplicadas; os opcionais vazios saem como `-`.
"""
import csv
import io
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from app.api.cadastros.models.model_cliente import ClienteModel
from app.api.pedidos.models.model_pedido import PedidoModel
from app.api.shared.schemas.schema_shared_enums import TipoPedidoEnum

BOM = "\ufeff"
SEPARADOR = ";"
VAZIO = "-"

COLUNAS_PEDIDOS = [
    "ID", "Data", "Hora", "Tipo", "Cliente", "Telefone", "Endereço", "Pagamento",
    "Total Produtos", "Taxa Entrega", "Entregador", "Operador", "Total Geral",
    "Status", "Motivo Canc.",
]

COLUNAS_CLIENTES = [
    "Nome", "Telefone", "Endereço", "Bairro", "Pedidos", "Total Gasto", "Último Pedido",
]


def _aspas(texto: Optional[str]) -> str:
    return '"' + (texto or "").replace('"', '""') + '"'


def _aspas_ou_vazio(texto: Optional[str]) -> str:
    return _aspas(texto) if texto else VAZIO


def _valor(valor) -> str:
    return f"{Decimal(str(valor or 0)):.2f}".replace(".", ",")


def _enum(valor) -> str:
    return getattr(valor, "value", valor) or ""


def _linha(campos: Iterable[str]) -> str:
    return SEPARADOR.join(campos)


def exportar_pedidos_csv(pedidos: Iterable[PedidoModel]) -> str:
    linhas = [_linha(COLUNAS_PEDIDOS)]
    for p in pedidos:
        cliente = p.cliente or {}
        total = Decimal(str(p.total or 0))
        taxa = Decimal(str(p.taxa_entrega or 0))
        tipo = "Retirada" if TipoPedidoEnum(p.tipo) == TipoPedidoEnum.RETIRADA else "Entrega"
        linhas.append(_linha([
            str(p.numero),
            p.criado_em.strftime("%d/%m/%Y"),
            p.criado_em.strftime("%H:%M:%S"),
            tipo,
            _aspas(cliente.get("nome")),
            _aspas(cliente.get("telefone")),
            _aspas(cliente.get("endereco")),
            _enum(p.meio_pagamento),
            _valor(total - taxa),
            _valor(taxa),
            _aspas_ou_vazio(p.entregador),
            _aspas_ou_vazio(p.operador),
            _valor(total),
            _enum(p.status),
            _aspas_ou_vazio(p.motivo_cancelamento),
        ]))
    return BOM + "\n".join(linhas)


def exportar_clientes_csv(clientes: Iterable[ClienteModel]) -> str:
    linhas = [_linha(COLUNAS_CLIENTES)]
    for c in clientes:
        ultimo = c.ultimo_pedido_em.strftime("%d/%m/%Y %H:%M") if c.ultimo_pedido_em else VAZIO
        linhas.append(_linha([
            _aspas(c.nome),
            _aspas(c.telefone),
            _aspas(c.endereco),
            _aspas(c.bairro),
            str(c.total_pedidos or 0),
            _valor(c.total_gasto),
            ultimo,
        ]))
    return BOM + "\n".join(linhas)


def _numero(texto: str) -> float:
    return float(texto.replace(".", "").replace(",", "."))


def _opcional(texto: str) -> Optional[str]:
    return None if texto == VAZIO else texto


def ler_csv_pedidos(conteudo: str) -> List[Dict]:
    """Lê de volta o CSV de pedidos (usado para conferir a exportação)."""
    leitor = csv.reader(io.StringIO(conteudo.lstrip(BOM)), delimiter=SEPARADOR)
    cabecalho = next(leitor, None)
    if cabecalho != COLUNAS_PEDIDOS:
        raise ValueError("Cabeçalho do CSV de pedidos não reconhecido")

    pedidos = []
    for linha in leitor:
        if not linha:
            continue
        campos = dict(zip(COLUNAS_PEDIDOS, linha))
        pedidos.append({
            "numero": int(campos["ID"]),
            "criado_em": datetime.strptime(f"{campos['Data']} {campos['Hora']}", "%d/%m/%Y %H:%M:%S"),
            "tipo": TipoPedidoEnum.RETIRADA if campos["Tipo"] == "Retirada" else TipoPedidoEnum.DELIVERY,
            "cliente": {
                "nome": campos["Cliente"],
                "telefone": campos["Telefone"],
                "endereco": campos["Endereço"],
            },
            "meio_pagamento": campos["Pagamento"],
            "total_produtos": _numero(campos["Total Produtos"]),
            "taxa_entrega": _numero(campos["Taxa Entrega"]),
            "entregador": _opcional(campos["Entregador"]),
            "operador": _opcional(campos["Operador"]),
            "total": _numero(campos["Total Geral"]),
            "status": campos["Status"],
            "motivo_cancelamento": _opcional(campos["Motivo Canc."]),
        })
    return pedidos
