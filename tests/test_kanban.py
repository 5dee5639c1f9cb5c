from datetime import date, datetime, timedelta
from types import SimpleNamespace

import pytest

from app.api.pedidos.repositories.repo_pedidos import PedidoRepository
from app.api.pedidos.services.service_pedido_kanban import (
    KanbanService,
    montar_historico,
    montar_quadro,
    urgencia,
)
from app.api.shared.schemas.schema_shared_enums import StatusPedidoEnum, TipoPedidoEnum
from app.core.exceptions import TransicaoInvalidaError, ValidacaoPedidoError

from tests.fabricas import dados_pedido, novo_pedido


class EquipeFake:
    def __init__(self, entregadores):
        self.nomes = entregadores

    def entregadores_escalados(self):
        return [SimpleNamespace(nome=n) for n in self.nomes]


@pytest.fixture
def repo(local, modo):
    return PedidoRepository(local, None, modo)


@pytest.fixture
def kanban(repo):
    return KanbanService(repo, EquipeFake(["João"]))


def test_fluxo_completo_de_entrega(repo, kanban):
    numero = repo.criar(dados_pedido()).numero

    assert kanban.avancar(numero).status == StatusPedidoEnum.KITCHEN
    with pytest.raises(ValidacaoPedidoError):
        kanban.avancar(numero)

    saiu = kanban.avancar(numero, entregador="João")
    assert saiu.status == StatusPedidoEnum.DELIVERY
    assert saiu.entregador == "João"

    assert kanban.avancar(numero).status == StatusPedidoEnum.COMPLETED
    with pytest.raises(TransicaoInvalidaError):
        kanban.avancar(numero)


def test_entregador_fora_da_escala(repo, kanban):
    numero = repo.criar(dados_pedido()).numero
    kanban.avancar(numero)
    with pytest.raises(ValidacaoPedidoError):
        kanban.avancar(numero, entregador="Pedro")


def test_despachar_sem_entregador_e_retirada(repo, kanban):
    entrega = repo.criar(dados_pedido()).numero
    kanban.avancar(entrega)
    assert kanban.avancar(entrega, sem_entregador=True).entregador is None

    retirada = repo.criar(dados_pedido(tipo=TipoPedidoEnum.RETIRADA, taxa=0)).numero
    kanban.avancar(retirada)
    assert kanban.avancar(retirada).status == StatusPedidoEnum.DELIVERY


def test_cancelamento_exige_motivo_e_responsavel(repo, kanban):
    numero = repo.criar(dados_pedido()).numero

    with pytest.raises(ValidacaoPedidoError) as erro:
        kanban.cancelar(numero, "qualquer coisa", "")
    assert len(erro.value.erros) == 2

    cancelado = kanban.cancelar(numero, "Cancelado pelo Cliente", "Ana")
    assert cancelado.status == StatusPedidoEnum.CANCELED
    assert cancelado.motivo_cancelamento == "Cancelado pelo Cliente"
    assert cancelado.cancelado_por == "Ana"
    assert cancelado.cancelado_em is not None

    with pytest.raises(TransicaoInvalidaError):
        kanban.cancelar(numero, "Outros", "Ana")


def test_mover_pedido_cancelado_nao_faz_nada(repo, kanban):
    numero = repo.criar(dados_pedido()).numero
    kanban.cancelar(numero, "Teste", "Ana")

    movido, pedido = kanban.mover(numero, StatusPedidoEnum.KITCHEN)
    assert movido is False
    assert pedido.status == StatusPedidoEnum.CANCELED


def test_mover_so_para_a_proxima_coluna(repo, kanban):
    numero = repo.criar(dados_pedido()).numero

    with pytest.raises(TransicaoInvalidaError):
        kanban.mover(numero, StatusPedidoEnum.DELIVERY)
    with pytest.raises(TransicaoInvalidaError):
        kanban.mover(numero, StatusPedidoEnum.CANCELED)

    movido, pedido = kanban.mover(numero, StatusPedidoEnum.KITCHEN)
    assert movido is True
    assert pedido.status == StatusPedidoEnum.KITCHEN

    movido, _ = kanban.mover(numero, StatusPedidoEnum.KITCHEN)
    assert movido is False


def test_arquivar_e_restaurar(repo, kanban):
    numero = repo.criar(dados_pedido(tipo=TipoPedidoEnum.RETIRADA, taxa=0)).numero
    with pytest.raises(TransicaoInvalidaError):
        kanban.arquivar(numero)

    for _ in range(3):
        kanban.avancar(numero)
    assert kanban.arquivar(numero).status == StatusPedidoEnum.ARCHIVED
    assert kanban.restaurar(numero).status == StatusPedidoEnum.COMPLETED


def test_urgencia_por_minutos_restantes():
    agora = datetime(2024, 5, 10, 20, 0)
    assert urgencia(None, agora) == (None, None)
    assert urgencia(agora + timedelta(minutes=10), agora) == (10, "critico")
    assert urgencia(agora + timedelta(minutes=20), agora) == (20, "atencao")
    assert urgencia(agora + timedelta(minutes=40), agora) == (40, "ok")
    assert urgencia(agora - timedelta(minutes=5), agora) == (-5, "critico")


def test_quadro_mostra_encerrados_so_do_dia():
    hoje = date(2024, 5, 10)
    agora = datetime(2024, 5, 10, 20, 0)
    ontem = datetime(2024, 5, 9, 20, 0)
    pedidos = [
        novo_pedido(1001, prazo=agora + timedelta(minutes=12), criado_em=datetime(2024, 5, 10, 19, 0)),
        novo_pedido(1002, StatusPedidoEnum.COMPLETED, criado_em=datetime(2024, 5, 10, 18, 0)),
        novo_pedido(1003, StatusPedidoEnum.COMPLETED, criado_em=ontem),
        novo_pedido(1004, StatusPedidoEnum.ARCHIVED, criado_em=datetime(2024, 5, 10, 17, 0)),
        novo_pedido(1005, StatusPedidoEnum.KITCHEN, criado_em=ontem),
    ]

    quadro = montar_quadro(pedidos, hoje, agora)
    colunas = {s: [c.pedido.numero for c in cards] for s, cards in quadro.colunas.items()}

    assert colunas[StatusPedidoEnum.CONFIRMED] == [1001]
    assert colunas[StatusPedidoEnum.KITCHEN] == [1005]
    assert colunas[StatusPedidoEnum.COMPLETED] == [1002]
    assert StatusPedidoEnum.ARCHIVED not in colunas
    assert quadro.colunas[StatusPedidoEnum.CONFIRMED][0].urgencia == "critico"


def test_historico_agrupado_por_dia():
    hoje = date(2024, 5, 10)
    pedidos = [
        novo_pedido(1001, StatusPedidoEnum.COMPLETED, criado_em=datetime(2024, 5, 10, 18, 0)),
        novo_pedido(1002, StatusPedidoEnum.CANCELED, criado_em=datetime(2024, 5, 8, 18, 0)),
        novo_pedido(1003, StatusPedidoEnum.COMPLETED, criado_em=datetime(2024, 5, 9, 18, 0)),
        novo_pedido(1004, StatusPedidoEnum.ARCHIVED, criado_em=datetime(2024, 5, 10, 12, 0)),
        novo_pedido(1005, StatusPedidoEnum.CONFIRMED, criado_em=datetime(2024, 5, 7, 12, 0)),
    ]

    historico = montar_historico(pedidos, hoje)

    assert [d.dia for d in historico.dias] == [date(2024, 5, 10), date(2024, 5, 9), date(2024, 5, 8)]
    assert [p.numero for p in historico.dias[0].pedidos] == [1004]
