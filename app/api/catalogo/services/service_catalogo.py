from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

from app.api.catalogo.data.cardapio import CATEGORIAS, PRODUTOS, PRODUTOS_POR_SABOR
from app.api.catalogo.schemas.schema_catalogo import (
    CatalogoResponse,
    Produto,
    ProdutoDisponibilidadeResponse,
)
from app.api.catalogo.services.service_disponibilidade import verificar_disponibilidade
from app.core.exceptions import RegistroNaoEncontradoError, ValidacaoPedidoError

MENOR_TAMANHO = 4


def max_sabores(tamanho: int) -> int:
    """Regra fixa da casa: 2 sabores na pizza de 4 pedaços, 4 nas demais."""
    return 2 if tamanho == MENOR_TAMANHO else 4


def preco_pizza(sabores: List[Produto], tamanho: int) -> float:
    """Média dos preços de cada sabor no tamanho escolhido."""
    if not sabores:
        raise ValidacaoPedidoError(["Selecione ao menos um sabor"])
    limite = max_sabores(tamanho)
    if len(sabores) > limite:
        raise ValidacaoPedidoError([f"A pizza de {tamanho} pedaços aceita no máximo {limite} sabores"])

    precos = []
    for sabor in sabores:
        preco = sabor.preco_no_tamanho(tamanho)
        if preco is None:
            raise ValidacaoPedidoError([f"Sabor {sabor.sabor} não disponível no tamanho {tamanho}"])
        precos.append(Decimal(str(preco)))

    media = sum(precos) / Decimal(len(precos))
    return float(media.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class CatalogoService:
    def __init__(self, produtos: Optional[List[Produto]] = None):
        self.produtos = produtos if produtos is not None else PRODUTOS
        self._por_sabor = (
            PRODUTOS_POR_SABOR if produtos is None else {p.sabor: p for p in self.produtos}
        )

    def categorias(self) -> List[str]:
        if self.produtos is PRODUTOS:
            return CATEGORIAS
        return list(dict.fromkeys(p.categoria for p in self.produtos))

    def buscar_produto(self, sabor: str) -> Produto:
        produto = self._por_sabor.get(sabor)
        if produto is None:
            raise RegistroNaoEncontradoError(f"Produto '{sabor}' não encontrado")
        return produto

    def filtrar(
        self,
        categoria: Optional[str] = None,
        termo: Optional[str] = None,
        preco_max: Optional[float] = None,
    ) -> List[Produto]:
        produtos = self.produtos
        if categoria:
            produtos = [p for p in produtos if p.categoria == categoria]
        if preco_max is not None:
            produtos = [p for p in produtos if p.preco_base <= preco_max]
        if termo and termo.strip():
            t = termo.strip().lower()
            produtos = [
                p for p in produtos
                if t in p.sabor.lower()
                or t in p.tipo.lower()
                or any(t in i.lower() for i in p.ingredientes)
            ]
        return produtos

    def listar_com_disponibilidade(
        self,
        bloqueados: Iterable[str],
        categoria: Optional[str] = None,
        termo: Optional[str] = None,
        preco_max: Optional[float] = None,
    ) -> CatalogoResponse:
        bloqueados = set(bloqueados)
        itens = []
        for produto in self.filtrar(categoria, termo, preco_max):
            disponivel, motivo = verificar_disponibilidade(produto, bloqueados)
            itens.append(ProdutoDisponibilidadeResponse(produto=produto, disponivel=disponivel, motivo=motivo))
        return CatalogoResponse(categorias=self.categorias(), produtos=itens)

    def pizzas(self) -> List[Produto]:
        return [p for p in self.produtos if p.is_pizza]

    def ingredientes(self) -> List[str]:
        """Ingredientes únicos do cardápio, em ordem alfabética."""
        return sorted({i for p in self.produtos for i in p.ingredientes})

    def itens_unitarios(self) -> List[str]:
        """Bebidas e demais itens de preço único, bloqueáveis pelo nome."""
        return sorted(p.sabor for p in self.produtos if not p.is_pizza)

    def preco_pizza(self, sabores: List[str], tamanho: int) -> float:
        return preco_pizza([self.buscar_produto(s) for s in sabores], tamanho)
