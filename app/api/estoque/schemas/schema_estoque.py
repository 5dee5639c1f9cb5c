from typing import List

from pydantic import BaseModel, Field


class BloquearItemRequest(BaseModel):
    nome: str = Field(..., min_length=1, description="Nome do ingrediente ou do produto")


class EstoqueResponse(BaseModel):
    bloqueados: List[str]


class ItensBloqueaveisResponse(BaseModel):
    """Opções da tela de estoque, derivadas do cardápio."""
    ingredientes: List[str]
    itens_unitarios: List[str]
