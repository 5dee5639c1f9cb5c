"""
Relatórios do CRM.

Funções puras sobre a lista de pedidos em memória: nada é gravado, tudo é
recalculado a cada chamada. Pedidos cancelados ficam fora de todos os
totais; arquivados contam como venda.
"""
from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from app.api.cadastros.models.model_funcionario import FuncionarioModel
from app.api.configuracoes.schemas.schema_configuracao import EscalaItem
from app.api.pedidos.models.model_pedido import PedidoModel
from app.api.relatorios.schemas.schema_relatorios import (
    Comparativo,
    ComparacaoIntervalosResponse,
    ComparativosResponse,
    DevedorFiado,
    EntregadorResumo,
    FechamentoDiarioResponse,
    FiadoPeriodos,
    FinanceiroResponse,
    ProdutoRanking,
    ResumoIntervalo,
    TicketMedio,
)
from app.api.shared.schemas.schema_shared_enums import (
    MeioPagamentoEnum,
    StatusPedidoEnum,
    TipoPedidoEnum,
)

TOP_PRODUTOS_FECHAMENTO = 8
HISTORICO_CLIENTE = 10


def _dec(valor) -> Decimal:
    return Decimal(str(valor or 0))


def _decimal_to_float(valor: Decimal) -> float:
    """Converte Decimal para float com 2 casas decimais (meia para cima)."""
    return float(valor.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _valido(pedido: PedidoModel) -> bool:
    return StatusPedidoEnum(pedido.status) != StatusPedidoEnum.CANCELED


def _validos(pedidos: Iterable[PedidoModel]) -> List[PedidoModel]:
    return [p for p in pedidos if _valido(p)]


def _no_intervalo(pedido: PedidoModel, inicio: date, fim: date) -> bool:
    return inicio <= pedido.criado_em.date() <= fim


def _inicio_semana(dia: date) -> date:
    """Semana começa no domingo."""
    return dia - timedelta(days=(dia.weekday() + 1) % 7)


def _is_fiado(pedido: PedidoModel) -> bool:
    return MeioPagamentoEnum(pedido.meio_pagamento) == MeioPagamentoEnum.FIADO


def _is_delivery(pedido: PedidoModel) -> bool:
    return TipoPedidoEnum(pedido.tipo) == TipoPedidoEnum.DELIVERY


# ---------------------------------------------------------------------- #
# Blocos reutilizados
# ---------------------------------------------------------------------- #
def por_meio_pagamento(pedidos: Sequence[PedidoModel]) -> Dict[str, float]:
    totais: Dict[str, Decimal] = {m.value: Decimal("0") for m in MeioPagamentoEnum}
    for p in pedidos:
        totais[MeioPagamentoEnum(p.meio_pagamento).value] += _dec(p.total)
    return {k: _decimal_to_float(v) for k, v in totais.items()}


def resumo_entregadores(pedidos: Sequence[PedidoModel]) -> List[EntregadorResumo]:
    entregas: Dict[str, int] = defaultdict(int)
    taxas: Dict[str, Decimal] = defaultdict(Decimal)
    for p in pedidos:
        if _is_delivery(p) and p.entregador:
            entregas[p.entregador] += 1
            taxas[p.entregador] += _dec(p.taxa_entrega)
    resumo = [
        EntregadorResumo(nome=nome, entregas=entregas[nome], taxas=_decimal_to_float(taxas[nome]))
        for nome in entregas
    ]
    return sorted(resumo, key=lambda e: e.taxas, reverse=True)


def devedores_fiado(pedidos: Sequence[PedidoModel]) -> List[DevedorFiado]:
    """Fiado agrupado pelo telefone (ou pelo nome quando não há telefone)."""
    grupos: Dict[str, dict] = {}
    for p in pedidos:
        if not _is_fiado(p):
            continue
        cliente = p.cliente or {}
        chave = cliente.get("telefone") or cliente.get("nome") or ""
        grupo = grupos.setdefault(chave, {
            "nome": cliente.get("nome") or "",
            "telefone": cliente.get("telefone"),
            "total": Decimal("0"),
            "pedidos": [],
        })
        grupo["total"] += _dec(p.total)
        grupo["pedidos"].append(p.numero)
    devedores = [
        DevedorFiado(nome=g["nome"], telefone=g["telefone"], total=_decimal_to_float(g["total"]), pedidos=g["pedidos"])
        for g in grupos.values()
    ]
    return sorted(devedores, key=lambda d: d.total, reverse=True)


def top_produtos(pedidos: Iterable[PedidoModel], n: int = TOP_PRODUTOS_FECHAMENTO) -> List[ProdutoRanking]:
    """Pizza com vários sabores conta cada sabor uma vez por unidade vendida."""
    contagem: Dict[str, int] = defaultdict(int)
    categorias: Dict[str, Optional[str]] = {}
    for p in _validos(pedidos):
        for item in p.itens or []:
            quantidade = int(item.get("quantidade") or 1)
            sabores = item.get("sabores") or [item.get("produto") or {}]
            for sabor in sabores:
                nome = sabor.get("sabor")
                if not nome:
                    continue
                contagem[nome] += quantidade
                categorias[nome] = sabor.get("categoria")
    ranking = sorted(contagem.items(), key=lambda kv: (-kv[1], kv[0]))[:n]
    return [ProdutoRanking(nome=nome, categoria=categorias.get(nome), quantidade=qtd) for nome, qtd in ranking]


def custo_diario_equipe(funcionarios: Iterable[FuncionarioModel], escala: Iterable[EscalaItem]) -> Decimal:
    """Custo fixo do dia: valor por período x períodos, sem os entregadores."""
    por_id = {f.id: f for f in funcionarios}
    custo = Decimal("0")
    for item in escala:
        funcionario = por_id.get(item.funcionario_id)
        if funcionario is not None and not funcionario.entregador:
            custo += _dec(funcionario.valor_periodo) * item.periodos
    return custo


# ---------------------------------------------------------------------- #
# Relatórios
# ---------------------------------------------------------------------- #
def comparativos(pedidos: Iterable[PedidoModel], hoje: date) -> ComparativosResponse:
    ontem = hoje - timedelta(days=1)
    inicio_semana = _inicio_semana(hoje)
    inicio_semana_anterior = inicio_semana - timedelta(days=7)
    inicio_mes = hoje.replace(day=1)
    fim_mes_anterior = inicio_mes - timedelta(days=1)
    inicio_mes_anterior = fim_mes_anterior.replace(day=1)

    z = Decimal("0")
    t = {k: z for k in ("hoje", "ontem", "semana", "semana_ant", "mes", "mes_ant", "f_hoje", "f_semana", "f_mes")}
    qtd = {"hoje": 0, "semana": 0, "mes": 0}

    for p in _validos(pedidos):
        dia = p.criado_em.date()
        total = _dec(p.total)
        fiado = _is_fiado(p)

        if dia == hoje:
            t["hoje"] += total
            qtd["hoje"] += 1
            if fiado:
                t["f_hoje"] += total
        elif dia == ontem:
            t["ontem"] += total

        if inicio_semana <= dia <= hoje:
            t["semana"] += total
            qtd["semana"] += 1
            if fiado:
                t["f_semana"] += total
        elif inicio_semana_anterior <= dia < inicio_semana:
            t["semana_ant"] += total

        if inicio_mes <= dia <= hoje:
            t["mes"] += total
            qtd["mes"] += 1
            if fiado:
                t["f_mes"] += total
        elif inicio_mes_anterior <= dia <= fim_mes_anterior:
            t["mes_ant"] += total

    def media(chave: str) -> float:
        return _decimal_to_float(t[chave] / qtd[chave]) if qtd[chave] else 0.0

    f = _decimal_to_float
    return ComparativosResponse(
        hoje=Comparativo(atual=f(t["hoje"]), anterior=f(t["ontem"])),
        semana=Comparativo(atual=f(t["semana"]), anterior=f(t["semana_ant"])),
        mes=Comparativo(atual=f(t["mes"]), anterior=f(t["mes_ant"])),
        ticket_medio=TicketMedio(hoje=media("hoje"), semana=media("semana"), mes=media("mes")),
        fiado=FiadoPeriodos(hoje=f(t["f_hoje"]), semana=f(t["f_semana"]), mes=f(t["f_mes"])),
    )


def fechamento_diario(
    pedidos: Iterable[PedidoModel],
    dia: date,
    funcionarios: Iterable[FuncionarioModel] = (),
    escala: Iterable[EscalaItem] = (),
) -> FechamentoDiarioResponse:
    """
    Fechamento do caixa. Líquido em caixa = vendas - taxas - equipe - fiado;
    o fiado entra nas vendas brutas mas não é dinheiro recebido.
    """
    do_dia = [p for p in _validos(pedidos) if p.criado_em.date() == dia]

    total_vendas = sum((_dec(p.total) for p in do_dia), Decimal("0"))
    total_taxas = sum((_dec(p.taxa_entrega) for p in do_dia), Decimal("0"))
    total_fiado = sum((_dec(p.total) for p in do_dia if _is_fiado(p)), Decimal("0"))
    custo_equipe = custo_diario_equipe(funcionarios, escala)
    liquido = total_vendas - total_taxas - custo_equipe - total_fiado

    return FechamentoDiarioResponse(
        dia=dia,
        quantidade=len(do_dia),
        total_vendas=_decimal_to_float(total_vendas),
        total_taxas=_decimal_to_float(total_taxas),
        total_sem_taxas=_decimal_to_float(total_vendas - total_taxas),
        por_meio_pagamento=por_meio_pagamento(do_dia),
        entregadores=resumo_entregadores(do_dia),
        entregas=sum(1 for p in do_dia if _is_delivery(p)),
        retiradas=sum(1 for p in do_dia if not _is_delivery(p)),
        top_produtos=top_produtos(do_dia, TOP_PRODUTOS_FECHAMENTO),
        custo_equipe=_decimal_to_float(custo_equipe),
        total_fiado=_decimal_to_float(total_fiado),
        devedores=devedores_fiado(do_dia),
        liquido_em_caixa=_decimal_to_float(liquido),
        ticket_medio=_decimal_to_float(total_vendas / len(do_dia)) if do_dia else 0.0,
    )


def financeiro(pedidos: Iterable[PedidoModel], inicio: date, fim: date) -> FinanceiroResponse:
    periodo = [p for p in _validos(pedidos) if _no_intervalo(p, inicio, fim)]

    total_vendas = sum((_dec(p.total) for p in periodo), Decimal("0"))
    total_taxas = sum((_dec(p.taxa_entrega) for p in periodo), Decimal("0"))
    total_descontos = sum((_dec(p.desconto) for p in periodo), Decimal("0"))
    meios = por_meio_pagamento(periodo)

    return FinanceiroResponse(
        inicio=inicio,
        fim=fim,
        total_vendas=_decimal_to_float(total_vendas),
        total_taxas=_decimal_to_float(total_taxas),
        total_descontos=_decimal_to_float(total_descontos),
        vendas_liquidas=_decimal_to_float(total_vendas - total_taxas),
        por_meio_pagamento=meios,
        entregadores=resumo_entregadores(periodo),
        devedores=devedores_fiado(periodo),
        total_fiado=meios[MeioPagamentoEnum.FIADO.value],
    )


def _resumo_intervalo(pedidos: List[PedidoModel], inicio: date, fim: date, custo_diario: Decimal) -> ResumoIntervalo:
    periodo = [p for p in pedidos if _no_intervalo(p, inicio, fim)]
    dias = abs((fim - inicio).days) + 1
    vendas = sum((_dec(p.total) for p in periodo), Decimal("0"))
    taxas = sum((_dec(p.taxa_entrega) for p in periodo), Decimal("0"))
    custo_fixo = custo_diario * dias
    return ResumoIntervalo(
        inicio=inicio,
        fim=fim,
        dias=dias,
        total_vendas=_decimal_to_float(vendas),
        taxas_entregadores=_decimal_to_float(taxas),
        custo_fixo_equipe=_decimal_to_float(custo_fixo),
        custo_total_equipe=_decimal_to_float(taxas + custo_fixo),
    )


def comparar_intervalos(
    pedidos: Iterable[PedidoModel],
    periodo_a: Tuple[date, date],
    periodo_b: Tuple[date, date],
    funcionarios: Iterable[FuncionarioModel] = (),
    escala: Iterable[EscalaItem] = (),
) -> ComparacaoIntervalosResponse:
    """Dois períodos escolhidos livremente; custo fixo estimado pela escala atual."""
    validos = _validos(pedidos)
    custo_diario = custo_diario_equipe(funcionarios, escala)
    return ComparacaoIntervalosResponse(
        periodo_a=_resumo_intervalo(validos, periodo_a[0], periodo_a[1], custo_diario),
        periodo_b=_resumo_intervalo(validos, periodo_b[0], periodo_b[1], custo_diario),
    )


def _texto_tipo(pedido: PedidoModel) -> str:
    return "entrega" if _is_delivery(pedido) else "retirada"


def buscar_pedidos(pedidos: Iterable[PedidoModel], termo: Optional[str]) -> List[PedidoModel]:
    """
    Busca livre: número, cliente, telefone, entregador, data (dd/mm/aaaa),
    tipo, total com vírgula e status. Mais recentes primeiro.
    """
    ordenados = sorted(pedidos, key=lambda p: p.criado_em, reverse=True)
    if not termo or not termo.strip():
        return ordenados
    t = termo.strip().lower()

    def casa(p: PedidoModel) -> bool:
        cliente = p.cliente or {}
        campos = [
            str(p.numero),
            (cliente.get("nome") or "").lower(),
            cliente.get("telefone") or "",
            (p.entregador or "").lower(),
            p.criado_em.strftime("%d/%m/%Y"),
            _texto_tipo(p),
            f"{_dec(p.total):.2f}".replace(".", ","),
            StatusPedidoEnum(p.status).value.lower(),
        ]
        return any(t in c for c in campos)

    return [p for p in ordenados if casa(p)]


def historico_cliente(pedidos: Iterable[PedidoModel], telefone: str, limite: int = HISTORICO_CLIENTE) -> List[PedidoModel]:
    do_cliente = [p for p in pedidos if (p.cliente or {}).get("telefone") == telefone]
    return sorted(do_cliente, key=lambda p: p.criado_em, reverse=True)[:limite]
