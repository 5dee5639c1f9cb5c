from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel


class Comparativo(BaseModel):
    atual: float
    anterior: float


class TicketMedio(BaseModel):
    hoje: float
    semana: float
    mes: float


class FiadoPeriodos(BaseModel):
    hoje: float
    semana: float
    mes: float


class ComparativosResponse(BaseModel):
    hoje: Comparativo
    semana: Comparativo
    mes: Comparativo
    ticket_medio: TicketMedio
    fiado: FiadoPeriodos


class ProdutoRanking(BaseModel):
    nome: str
    categoria: Optional[str] = None
    quantidade: int


class EntregadorResumo(BaseModel):
    nome: str
    entregas: int
    taxas: float


class DevedorFiado(BaseModel):
    nome: str
    telefone: Optional[str] = None
    total: float
    pedidos: List[int]


class FechamentoDiarioResponse(BaseModel):
    dia: date
    quantidade: int
    total_vendas: float
    total_taxas: float
    total_sem_taxas: float
    por_meio_pagamento: Dict[str, float]
    entregadores: List[EntregadorResumo]
    entregas: int
    retiradas: int
    top_produtos: List[ProdutoRanking]
    custo_equipe: float
    total_fiado: float
    devedores: List[DevedorFiado]
    liquido_em_caixa: float
    ticket_medio: float


class FinanceiroResponse(BaseModel):
    inicio: date
    fim: date
    total_vendas: float
    total_taxas: float
    total_descontos: float
    vendas_liquidas: float
    por_meio_pagamento: Dict[str, float]
    entregadores: List[EntregadorResumo]
    devedores: List[DevedorFiado]
    total_fiado: float


class ResumoIntervalo(BaseModel):
    inicio: date
    fim: date
    dias: int
    total_vendas: float
    taxas_entregadores: float
    custo_fixo_equipe: float
    custo_total_equipe: float


class ComparacaoIntervalosResponse(BaseModel):
    periodo_a: ResumoIntervalo
    periodo_b: ResumoIntervalo
