"""
Schemas do Catálogo
Produtos são dados estáticos carregados uma vez; pizzas têm faixas de tamanho.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TamanhoPizza(BaseModel):
    pedacos: int = Field(..., description="Quantidade de pedaços (4, 8 ou 12)")
    preco: float

    model_config = ConfigDict(frozen=True)


class Produto(BaseModel):
    categoria: str
    tipo: str
    sabor: str
    ingredientes: List[str] = Field(default_factory=list)
    preco: Optional[float] = None
    tamanhos: List[TamanhoPizza] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def is_pizza(self) -> bool:
        return bool(self.tamanhos)

    @property
    def preco_base(self) -> float:
        """Preço único do item ou o do primeiro tamanho da pizza."""
        if self.preco is not None:
            return self.preco
        return self.tamanhos[0].preco if self.tamanhos else 0.0

    def preco_no_tamanho(self, pedacos: int) -> Optional[float]:
        for tamanho in self.tamanhos:
            if tamanho.pedacos == pedacos:
                return tamanho.preco
        return None


class ProdutoDisponibilidadeResponse(BaseModel):
    produto: Produto
    disponivel: bool
    motivo: Optional[str] = None


class CatalogoResponse(BaseModel):
    categorias: List[str]
    produtos: List[ProdutoDisponibilidadeResponse]


class PrecoPizzaRequest(BaseModel):
    sabores: List[str] = Field(..., min_length=1)
    tamanho: int


class PrecoPizzaResponse(BaseModel):
    sabores: List[str]
    tamanho: int
    max_sabores: int
    preco: float
