import pytest

from app.api.catalogo.schemas.schema_catalogo import Produto, TamanhoPizza
from app.api.catalogo.services.service_catalogo import CatalogoService
from app.api.configuracoes.services.service_configuracao import ConfiguracaoService
from app.api.estoque.repositories.repo_estoque import EstoqueRepository
from app.api.estoque.services.service_estoque import EstoqueService
from app.api.pedidos.schemas.schema_carrinho import (
    AdicionarItemRequest,
    Carrinho,
    ClientePedido,
    DadosCarrinhoRequest,
    Desconto,
)
from app.api.pedidos.services.service_carrinho import (
    CarrinhoService,
    adicionar_item,
    alterar_observacao,
    alterar_quantidade,
    calcular_totais,
    produtos_indisponiveis,
    validar,
)
from app.api.shared.schemas.schema_shared_enums import (
    MeioPagamentoEnum,
    TipoDescontoEnum,
    TipoPedidoEnum,
)
from app.core.exceptions import RegistroNaoEncontradoError, ValidacaoPedidoError
from app.database.sync.modo_offline import ModoOffline


def _pizza(sabor, preco_8):
    return Produto(
        categoria="Pizzas Salgadas",
        tipo="Pizza",
        sabor=sabor,
        tamanhos=[TamanhoPizza(pedacos=4, preco=preco_8 - 10), TamanhoPizza(pedacos=8, preco=preco_8)],
    )


A = _pizza("A", 30.0)
B = _pizza("B", 40.0)
REFRI = Produto(categoria="Bebidas", tipo="Refrigerante", sabor="Refri", preco=10.0)


@pytest.fixture
def carrinho_svc(db_local):
    config = ConfiguracaoService(db_local, ModoOffline(False))
    return CarrinhoService(config, CatalogoService([A, B, REFRI]))


def _carrinho_valido(**kwargs) -> Carrinho:
    dados = dict(
        cliente=ClientePedido(nome="Maria", telefone="11999990000", endereco="Rua A, 10", bairro="Centro"),
        tipo=TipoPedidoEnum.DELIVERY,
        taxa_entrega=5,
        meio_pagamento=MeioPagamentoEnum.PIX,
    )
    dados.update(kwargs)
    carrinho = Carrinho(**dados)
    adicionar_item(carrinho.itens, A, 35.0, 8, [A, B])
    return carrinho


# ---------------- Totais ----------------
def test_meio_a_meio_com_taxa_de_entrega(carrinho_svc):
    carrinho_svc.adicionar(AdicionarItemRequest(sabor="A", sabores=["A", "B"], tamanho=8))
    resp = carrinho_svc.atualizar_dados(DadosCarrinhoRequest(taxa_entrega=5))

    item = resp.carrinho.itens[0]
    assert item.preco == 35.0
    assert resp.totais.subtotal == 35.0
    assert resp.totais.taxa_entrega == 5.0
    assert resp.totais.total == 40.0


def test_desconto_fixo_limitado_ao_subtotal():
    carrinho = _carrinho_valido(desconto=Desconto(tipo=TipoDescontoEnum.FIXO, valor=100))
    totais = calcular_totais(carrinho.itens, carrinho.desconto, carrinho.taxa_entrega, carrinho.tipo)
    assert totais.desconto == 35.0
    assert totais.total == 5.0


def test_desconto_percentual_e_negativo():
    carrinho = _carrinho_valido()
    totais = calcular_totais(carrinho.itens, Desconto(tipo=TipoDescontoEnum.PERCENTUAL, valor=10), 5, TipoPedidoEnum.DELIVERY)
    assert totais.desconto == 3.5
    assert totais.total == 36.5

    totais = calcular_totais(carrinho.itens, Desconto(tipo=TipoDescontoEnum.PERCENTUAL, valor=150), 5, TipoPedidoEnum.DELIVERY)
    assert totais.desconto == 35.0

    totais = calcular_totais(carrinho.itens, Desconto(valor=-10), 5, TipoPedidoEnum.DELIVERY)
    assert totais.desconto == 0


def test_retirada_ignora_taxa_de_entrega():
    carrinho = _carrinho_valido()
    totais = calcular_totais(carrinho.itens, None, 8, TipoPedidoEnum.RETIRADA)
    assert totais.taxa_entrega == 0
    assert totais.total == 35.0


# ---------------- Linhas ----------------
def test_item_igual_soma_quantidade():
    itens = []
    adicionar_item(itens, REFRI, 10.0)
    adicionar_item(itens, REFRI, 10.0)
    assert len(itens) == 1
    assert itens[0].quantidade == 2

    adicionar_item(itens, REFRI, 10.0, observacao="gelada")
    assert len(itens) == 2


def test_sabores_em_ordem_diferente_sao_a_mesma_linha():
    itens = []
    adicionar_item(itens, A, 35.0, 8, [A, B])
    adicionar_item(itens, B, 35.0, 8, [B, A])
    assert len(itens) == 1
    assert itens[0].quantidade == 2


def test_observacao_igual_une_as_linhas():
    itens = []
    adicionar_item(itens, REFRI, 10.0)
    outro = adicionar_item(itens, REFRI, 10.0, observacao="sem gelo")
    resultado = alterar_observacao(itens, outro.id, "")
    assert len(itens) == 1
    assert resultado.quantidade == 2


def test_quantidade_minima_e_um():
    itens = []
    item = adicionar_item(itens, REFRI, 10.0)
    alterar_quantidade(itens, item.id, 0)
    assert item.quantidade == 1
    with pytest.raises(RegistroNaoEncontradoError):
        alterar_quantidade(itens, "inexistente", 2)


# ---------------- Validação ----------------
def test_carrinho_valido_nao_tem_pendencias():
    carrinho = _carrinho_valido()
    totais = calcular_totais(carrinho.itens, carrinho.desconto, carrinho.taxa_entrega, carrinho.tipo)
    assert validar(carrinho, totais, True, False, 0) == []


def test_validacao_agrega_todas_as_pendencias():
    carrinho = Carrinho(tipo=TipoPedidoEnum.DELIVERY)
    totais = calcular_totais(carrinho.itens, carrinho.desconto, carrinho.taxa_entrega, carrinho.tipo)
    erros = validar(carrinho, totais, False, True, 0)
    assert "A loja está fechada" in erros
    assert "Nenhum funcionário na escala de hoje" in erros
    assert "O carrinho está vazio" in erros
    assert "Informe o nome do cliente" in erros
    assert "Informe o endereço de entrega" in erros
    assert "Informe a taxa de entrega" in erros
    assert "Selecione a forma de pagamento" in erros


def test_dinheiro_exige_troco_suficiente():
    carrinho = _carrinho_valido(meio_pagamento=MeioPagamentoEnum.DINHEIRO, troco_para=30)
    totais = calcular_totais(carrinho.itens, carrinho.desconto, carrinho.taxa_entrega, carrinho.tipo)
    assert validar(carrinho, totais, True, False, 0) == ["O valor para troco é menor que o total do pedido"]

    carrinho.troco_para = 50
    assert validar(carrinho, totais, True, False, 0) == []


# ---------------- Rascunho ----------------
def test_rascunho_persiste_entre_instancias(db_local):
    catalogo = CatalogoService([A, B, REFRI])
    modo = ModoOffline(False)
    CarrinhoService(ConfiguracaoService(db_local, modo), catalogo).adicionar(AdicionarItemRequest(sabor="Refri"))

    carrinho = CarrinhoService(ConfiguracaoService(db_local, modo), catalogo).obter()
    assert [i.produto.sabor for i in carrinho.itens] == ["Refri"]


def test_pizza_exige_tamanho(carrinho_svc):
    with pytest.raises(ValidacaoPedidoError):
        carrinho_svc.adicionar(AdicionarItemRequest(sabor="A"))


def test_retirada_zera_taxa_e_troco_some_fora_do_dinheiro(carrinho_svc):
    carrinho_svc.atualizar_dados(DadosCarrinhoRequest(taxa_entrega=7, meio_pagamento=MeioPagamentoEnum.DINHEIRO, troco_para=100))
    resp = carrinho_svc.atualizar_dados(DadosCarrinhoRequest(tipo=TipoPedidoEnum.RETIRADA, meio_pagamento=MeioPagamentoEnum.PIX))
    assert resp.carrinho.taxa_entrega == 0
    assert resp.carrinho.troco_para is None


def test_limpar(carrinho_svc):
    carrinho_svc.adicionar(AdicionarItemRequest(sabor="Refri"))
    carrinho_svc.limpar()
    assert carrinho_svc.obter().itens == []


# ---------------- Disponibilidade ----------------
def test_produtos_indisponiveis_por_sabor_e_ingrediente():
    calabresa = Produto(categoria="Pizzas Salgadas", tipo="Pizza", sabor="Calabresa", ingredientes=["Calabresa", "Cebola"])
    atum = Produto(categoria="Pizzas Salgadas", tipo="Pizza", sabor="Atum", ingredientes=["Atum", "Cebola"])

    erros = produtos_indisponiveis([A, calabresa, atum, calabresa], {"Cebola", "A"})

    assert erros == [
        "A está indisponível",
        "Calabresa está indisponível (sem Cebola)",
        "Atum está indisponível (sem Cebola)",
    ]


def test_carrinho_recusa_item_bloqueado(db_local, local, remoto, modo):
    catalogo = CatalogoService()
    estoque = EstoqueService(EstoqueRepository(local, remoto, modo), catalogo)
    svc = CarrinhoService(ConfiguracaoService(db_local, modo), catalogo, estoque)
    estoque.bloquear("Cebola")

    with pytest.raises(ValidacaoPedidoError) as erro:
        svc.adicionar(AdicionarItemRequest(sabor="Mussarela", sabores=["Mussarela", "Calabresa"], tamanho=8))
    assert erro.value.erros == ["Calabresa está indisponível (sem Cebola)"]

    with pytest.raises(ValidacaoPedidoError):
        svc.adicionar(AdicionarItemRequest(sabor="Calabresa Acebolada"))
    assert svc.obter().itens == []

    svc.adicionar(AdicionarItemRequest(sabor="Mussarela", tamanho=8))
    assert [i.produto.sabor for i in svc.obter().itens] == ["Mussarela"]
