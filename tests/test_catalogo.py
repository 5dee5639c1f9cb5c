import pytest

from app.api.catalogo.schemas.schema_catalogo import Produto, TamanhoPizza
from app.api.catalogo.services.service_catalogo import CatalogoService, max_sabores, preco_pizza
from app.api.catalogo.services.service_disponibilidade import verificar_disponibilidade
from app.core.exceptions import RegistroNaoEncontradoError, ValidacaoPedidoError


def _pizza(sabor, precos, ingredientes=None):
    return Produto(
        categoria="Pizzas Salgadas",
        tipo="Pizza",
        sabor=sabor,
        ingredientes=ingredientes or [],
        tamanhos=[TamanhoPizza(pedacos=p, preco=v) for p, v in zip((4, 8, 12), precos)],
    )


A = _pizza("A", (20.0, 30.0, 45.0), ["Molho de tomate", "Mussarela"])
B = _pizza("B", (25.0, 40.0, 55.0), ["Molho de tomate", "Bacon"])
C = _pizza("C", (22.0, 35.0, 50.0), ["Atum"])
D = _pizza("D", (21.0, 31.0, 46.0))
REFRI = Produto(categoria="Bebidas", tipo="Refrigerante", sabor="Refri 2L", preco=12.0)


def test_preco_pizza_meio_a_meio_e_a_media():
    assert preco_pizza([A, B], 8) == 35.0


def test_preco_pizza_arredonda_meia_para_cima():
    # (30 + 40 + 31) / 3 = 33,666...
    assert preco_pizza([A, B, D], 8) == 33.67
    assert preco_pizza([A, B], 4) == 22.5
    assert preco_pizza([A, B, C], 12) == 50.0


def test_limite_de_sabores_por_tamanho():
    assert max_sabores(4) == 2
    assert max_sabores(8) == 4
    assert max_sabores(12) == 4
    with pytest.raises(ValidacaoPedidoError):
        preco_pizza([A, B, C], 4)


def test_preco_pizza_sem_sabores():
    with pytest.raises(ValidacaoPedidoError):
        preco_pizza([], 8)


def test_disponibilidade_bloqueio_do_proprio_sabor_vem_primeiro():
    assert verificar_disponibilidade(A, {"A", "Mussarela"}) == (False, "A")


def test_disponibilidade_por_ingrediente():
    assert verificar_disponibilidade(B, {"Bacon"}) == (False, "Bacon")
    assert verificar_disponibilidade(A, {"Bacon"}) == (True, None)
    assert verificar_disponibilidade(REFRI, {"Refri 2L"}) == (False, "Refri 2L")


def test_catalogo_lista_com_disponibilidade_e_filtro():
    svc = CatalogoService([A, B, C, REFRI])
    resp = svc.listar_com_disponibilidade({"Bacon"})
    por_sabor = {i.produto.sabor: i for i in resp.produtos}
    assert resp.categorias == ["Pizzas Salgadas", "Bebidas"]
    assert por_sabor["B"].disponivel is False
    assert por_sabor["B"].motivo == "Bacon"
    assert por_sabor["A"].disponivel is True

    filtrado = svc.listar_com_disponibilidade([], termo="atum")
    assert [i.produto.sabor for i in filtrado.produtos] == ["C"]
    assert [p.sabor for p in svc.filtrar(categoria="Bebidas")] == ["Refri 2L"]


def test_catalogo_filtra_por_preco_maximo():
    svc = CatalogoService([A, B, C, REFRI])

    # pizza vale pelo primeiro tamanho: A 20, B 25, C 22; refri 12
    assert [p.sabor for p in svc.filtrar(preco_max=22)] == ["A", "C", "Refri 2L"]
    assert [p.sabor for p in svc.filtrar(categoria="Pizzas Salgadas", preco_max=20)] == ["A"]
    assert svc.filtrar(preco_max=5) == []

    resp = svc.listar_com_disponibilidade({"Bacon"}, preco_max=25)
    assert [i.produto.sabor for i in resp.produtos] == ["A", "B", "C", "Refri 2L"]


def test_catalogo_opcoes_de_bloqueio():
    svc = CatalogoService([A, B, REFRI])
    assert svc.ingredientes() == ["Bacon", "Molho de tomate", "Mussarela"]
    assert svc.itens_unitarios() == ["Refri 2L"]


def test_produto_inexistente():
    with pytest.raises(RegistroNaoEncontradoError):
        CatalogoService([A]).buscar_produto("Z")


def test_cardapio_padrao_tem_pizzas_nos_tres_tamanhos():
    svc = CatalogoService()
    assert svc.pizzas()
    for pizza in svc.pizzas():
        assert [t.pedacos for t in pizza.tamanhos] == [4, 8, 12]
