from datetime import timedelta

import pytest
from fastapi import BackgroundTasks

from app.api.cadastros.repositories.repo_cliente import ClienteRepository
from app.api.cadastros.repositories.repo_funcionario import FuncionarioRepository
from app.api.cadastros.services.service_cliente import ClienteService
from app.api.cadastros.services.service_funcionario import FuncionarioService
from app.api.catalogo.services.service_catalogo import CatalogoService
from app.api.configuracoes.schemas.schema_configuracao import ConfiguracoesUpdate
from app.api.configuracoes.services.service_configuracao import ConfiguracaoService
from app.api.estoque.repositories.repo_estoque import EstoqueRepository
from app.api.estoque.services.service_estoque import EstoqueService
from app.api.pedidos.repositories.repo_pedidos import PedidoRepository
from app.api.pedidos.schemas.schema_carrinho import AdicionarItemRequest, ClientePedido, DadosCarrinhoRequest
from app.api.pedidos.services.service_carrinho import CarrinhoService
from app.api.pedidos.services.service_pedido import PedidoService
from app.api.shared.schemas.schema_shared_enums import MeioPagamentoEnum, StatusPedidoEnum, TipoPedidoEnum
from app.core.exceptions import ValidacaoPedidoError


@pytest.fixture
def servicos(local, remoto, modo, db_local):
    config = ConfiguracaoService(db_local, modo)
    pedidos = PedidoRepository(local, remoto, modo)
    clientes = ClienteService(ClienteRepository(local, remoto, modo), pedidos)
    equipe = FuncionarioService(FuncionarioRepository(local, remoto, modo), config)
    estoque = EstoqueService(EstoqueRepository(local, remoto, modo), CatalogoService())
    carrinho = CarrinhoService(config, CatalogoService(), estoque)
    return PedidoService(pedidos, clientes, config, equipe, carrinho)


def _montar_carrinho(svc: PedidoService):
    svc.carrinho.adicionar(AdicionarItemRequest(sabor="Mussarela", sabores=["Mussarela", "Calabresa"], tamanho=8))
    svc.carrinho.adicionar(AdicionarItemRequest(sabor="Coca-Cola 2L"))
    svc.carrinho.atualizar_dados(DadosCarrinhoRequest(
        cliente=ClientePedido(nome="Maria", telefone="(11) 99999-0000", endereco="Rua A, 10", bairro="Centro"),
        tipo=TipoPedidoEnum.DELIVERY,
        taxa_entrega=6,
        meio_pagamento=MeioPagamentoEnum.DINHEIRO,
        troco_para=100,
    ))


def test_finalizar_grava_pedido_cliente_e_limpa_carrinho(servicos):
    _montar_carrinho(servicos)

    pedido = servicos.finalizar(None, "Caixa 1")

    # Mussarela 45 + Calabresa 48 no tamanho 8 -> 46,50; + Coca 14; + taxa 6
    assert pedido.numero == 1001
    assert pedido.status == StatusPedidoEnum.CONFIRMED
    assert float(pedido.subtotal) == 60.5
    assert float(pedido.total) == 66.5
    assert float(pedido.troco_para) == 100
    assert pedido.operador == "Caixa 1"
    assert pedido.cliente["telefone"] == "11999990000"
    assert pedido.prazo - pedido.criado_em == timedelta(minutes=servicos.config.sla_entrega_min)

    cliente = servicos.clientes.repo.get_by_telefone("11999990000")
    assert cliente.total_pedidos == 1
    assert servicos.carrinho.obter().itens == []


def test_finalizar_cliente_em_segundo_plano(servicos):
    _montar_carrinho(servicos)
    tarefas = BackgroundTasks()

    servicos.finalizar(None, "Caixa 1", tarefas)

    assert len(tarefas.tasks) == 1
    assert servicos.clientes.repo.get_by_telefone("11999990000") is None


def test_finalizar_com_loja_fechada_e_sem_escala(servicos):
    _montar_carrinho(servicos)
    servicos.config.atualizar(ConfiguracoesUpdate(loja_aberta=False, exigir_escala=True))

    with pytest.raises(ValidacaoPedidoError) as erro:
        servicos.finalizar(None, "Caixa 1")

    assert erro.value.erros == ["A loja está fechada", "Nenhum funcionário na escala de hoje"]
    assert len(servicos.carrinho.obter().itens) == 2


def test_repetir_pedido_monta_carrinho_novo(servicos):
    _montar_carrinho(servicos)
    pedido = servicos.finalizar(None, "Caixa 1")

    resp = servicos.repetir(pedido.numero)

    assert len(resp.carrinho.itens) == 2
    assert resp.carrinho.cliente.nome == "Maria"
    assert resp.carrinho.taxa_entrega == 6
    assert resp.carrinho.meio_pagamento is None
    assert resp.totais.total == 66.5


def test_finalizar_recusa_item_bloqueado_depois_de_entrar_no_carrinho(servicos):
    _montar_carrinho(servicos)
    servicos.carrinho.estoque.bloquear("Calabresa")

    with pytest.raises(ValidacaoPedidoError) as erro:
        servicos.finalizar(None, "Caixa 1")

    assert erro.value.erros == ["Calabresa está indisponível"]
    assert servicos.repo.listar() == []
    assert len(servicos.carrinho.obter().itens) == 2
