from datetime import date, datetime
from decimal import Decimal

from app.api.cadastros.models.model_funcionario import FuncionarioModel
from app.api.configuracoes.schemas.schema_configuracao import EscalaItem
from app.api.relatorios.services.service_relatorios import (
    buscar_pedidos,
    comparar_intervalos,
    comparativos,
    custo_diario_equipe,
    fechamento_diario,
    financeiro,
    historico_cliente,
    top_produtos,
)
from app.api.shared.schemas.schema_shared_enums import (
    MeioPagamentoEnum,
    StatusPedidoEnum,
    TipoPedidoEnum,
)

from tests.fabricas import item_pizza, novo_pedido

DIA = date(2024, 5, 10)  # sexta-feira


def _as(hora, dia=DIA):
    return datetime(dia.year, dia.month, dia.day, hora, 0)


def _equipe():
    funcionarios = [
        FuncionarioModel(id="f1", nome="Ana", cargo="Pizzaiolo", valor_periodo=Decimal("60"), entregador=False),
        FuncionarioModel(id="f2", nome="João", cargo="Motoboy", valor_periodo=Decimal("0"), entregador=True),
        FuncionarioModel(id="f3", nome="Bia", cargo="Atendente", valor_periodo=Decimal("40"), entregador=False),
    ]
    escala = [
        EscalaItem(funcionario_id="f1", periodos=2),
        EscalaItem(funcionario_id="f2", periodos=2),
        EscalaItem(funcionario_id="f3", periodos=1),
    ]
    return funcionarios, escala


def test_fiado_entra_nas_vendas_mas_nao_no_liquido():
    pedidos = [
        novo_pedido(1001, total=50, taxa=5, criado_em=_as(19), entregador="João", status=StatusPedidoEnum.COMPLETED),
        novo_pedido(1002, total=30, taxa=0, tipo=TipoPedidoEnum.RETIRADA, meio=MeioPagamentoEnum.FIADO,
                    nome="Carlos", telefone="11955556666", criado_em=_as(20)),
        novo_pedido(1003, total=99, taxa=5, criado_em=_as(21), status=StatusPedidoEnum.CANCELED),
        novo_pedido(1004, total=40, taxa=5, criado_em=datetime(2024, 5, 9, 20, 0)),
    ]
    funcionarios, escala = _equipe()

    fechamento = fechamento_diario(pedidos, DIA, funcionarios, escala)

    assert fechamento.quantidade == 2
    assert fechamento.total_vendas == 80.0
    assert fechamento.total_taxas == 5.0
    assert fechamento.total_fiado == 30.0
    assert fechamento.custo_equipe == 160.0
    # 80 - 5 - 160 - 30
    assert fechamento.liquido_em_caixa == -115.0
    assert fechamento.por_meio_pagamento["FIADO"] == 30.0
    assert fechamento.por_meio_pagamento["PIX"] == 50.0
    assert fechamento.entregas == 1
    assert fechamento.retiradas == 1
    assert fechamento.ticket_medio == 40.0
    assert [(e.nome, e.entregas, e.taxas) for e in fechamento.entregadores] == [("João", 1, 5.0)]
    assert [(d.nome, d.total, d.pedidos) for d in fechamento.devedores] == [("Carlos", 30.0, [1002])]


def test_custo_da_equipe_ignora_entregadores():
    funcionarios, escala = _equipe()
    assert custo_diario_equipe(funcionarios, escala) == Decimal("160")


def test_devedores_agrupados_por_telefone():
    pedidos = [
        novo_pedido(1001, total=20, meio=MeioPagamentoEnum.FIADO, nome="Carlos", telefone="11955556666", criado_em=_as(18)),
        novo_pedido(1002, total=35, meio=MeioPagamentoEnum.FIADO, nome="Carlos S.", telefone="11955556666", criado_em=_as(19)),
        novo_pedido(1003, total=70, meio=MeioPagamentoEnum.FIADO, nome="Rita", telefone="", criado_em=_as(20)),
    ]
    fechamento = fechamento_diario(pedidos, DIA)
    assert [(d.nome, d.total, d.pedidos) for d in fechamento.devedores] == [
        ("Rita", 70.0, [1003]),
        ("Carlos", 55.0, [1001, 1002]),
    ]


def test_comparativos_semana_comeca_no_domingo():
    pedidos = [
        novo_pedido(1001, total=100, criado_em=_as(19)),                          # hoje (sexta)
        novo_pedido(1002, total=50, criado_em=datetime(2024, 5, 9, 19, 0)),      # ontem
        novo_pedido(1003, total=30, criado_em=datetime(2024, 5, 5, 19, 0)),      # domingo desta semana
        novo_pedido(1004, total=20, criado_em=datetime(2024, 5, 4, 19, 0)),      # sábado passado
        novo_pedido(1005, total=10, criado_em=datetime(2024, 4, 30, 19, 0)),     # mês passado
        novo_pedido(1006, total=60, meio=MeioPagamentoEnum.FIADO, criado_em=_as(20)),
    ]

    resp = comparativos(pedidos, DIA)

    assert (resp.hoje.atual, resp.hoje.anterior) == (160.0, 50.0)
    assert (resp.semana.atual, resp.semana.anterior) == (240.0, 30.0)
    assert (resp.mes.atual, resp.mes.anterior) == (260.0, 10.0)
    assert resp.ticket_medio.hoje == 80.0
    assert resp.fiado.hoje == 60.0


def test_financeiro_por_periodo():
    pedidos = [
        novo_pedido(1001, total=50, taxa=5, criado_em=datetime(2024, 5, 1, 19, 0)),
        novo_pedido(1002, total=40, taxa=5, criado_em=datetime(2024, 5, 3, 19, 0), meio=MeioPagamentoEnum.DINHEIRO),
        novo_pedido(1003, total=40, taxa=5, criado_em=datetime(2024, 5, 20, 19, 0)),
    ]

    resp = financeiro(pedidos, date(2024, 5, 1), date(2024, 5, 10))

    assert resp.total_vendas == 90.0
    assert resp.total_taxas == 10.0
    assert resp.vendas_liquidas == 80.0
    assert resp.por_meio_pagamento["DINHEIRO"] == 40.0
    assert resp.total_fiado == 0.0


def test_comparar_intervalos_conta_os_dias_inclusive():
    pedidos = [
        novo_pedido(1001, total=100, taxa=10, criado_em=datetime(2024, 5, 2, 19, 0)),
        novo_pedido(1002, total=60, taxa=5, criado_em=datetime(2024, 4, 2, 19, 0)),
    ]
    funcionarios, escala = _equipe()

    resp = comparar_intervalos(
        pedidos,
        (date(2024, 5, 1), date(2024, 5, 7)),
        (date(2024, 4, 1), date(2024, 4, 7)),
        funcionarios,
        escala,
    )

    assert resp.periodo_a.dias == 7
    assert resp.periodo_a.total_vendas == 100.0
    assert resp.periodo_a.custo_fixo_equipe == 1120.0
    assert resp.periodo_a.custo_total_equipe == 1130.0
    assert resp.periodo_b.total_vendas == 60.0


def test_top_produtos_conta_cada_sabor():
    pedidos = [
        novo_pedido(1001, itens=[item_pizza(["Calabresa", "Mussarela"], quantidade=2)], criado_em=_as(19)),
        novo_pedido(1002, itens=[item_pizza(["Calabresa"])], criado_em=_as(20)),
        novo_pedido(1003, itens=[item_pizza(["Atum"], quantidade=5)], criado_em=_as(21), status=StatusPedidoEnum.CANCELED),
    ]
    ranking = top_produtos(pedidos)
    assert [(p.nome, p.quantidade) for p in ranking] == [("Calabresa", 3), ("Mussarela", 2)]


def test_busca_livre_de_pedidos():
    pedidos = [
        novo_pedido(1001, total=45.5, nome="Maria", telefone="11911112222", criado_em=_as(19), entregador="João"),
        novo_pedido(1002, total=30, nome="Carlos", telefone="11933334444", tipo=TipoPedidoEnum.RETIRADA,
                    criado_em=datetime(2024, 5, 9, 19, 0)),
    ]
    assert [p.numero for p in buscar_pedidos(pedidos, "")] == [1001, 1002]
    assert [p.numero for p in buscar_pedidos(pedidos, "carlos")] == [1002]
    assert [p.numero for p in buscar_pedidos(pedidos, "45,50")] == [1001]
    assert [p.numero for p in buscar_pedidos(pedidos, "09/05/2024")] == [1002]
    assert [p.numero for p in buscar_pedidos(pedidos, "retirada")] == [1002]
    assert [p.numero for p in buscar_pedidos(pedidos, "joão")] == [1001]


def test_historico_do_cliente_limita_aos_mais_recentes():
    pedidos = [
        novo_pedido(1000 + i, telefone="11911112222", criado_em=datetime(2024, 5, 1 + i, 19, 0))
        for i in range(12)
    ]
    historico = historico_cliente(pedidos, "11911112222")
    assert len(historico) == 10
    assert historico[0].numero == 1011
