from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FuncionarioOut(BaseModel):
    id: str
    nome: str
    cargo: str
    valor_periodo: float
    entregador: bool

    model_config = ConfigDict(from_attributes=True)


class FuncionarioCreate(BaseModel):
    nome: str = ""
    cargo: str = ""
    valor_periodo: Optional[float] = Field(None, ge=0)
    entregador: bool = False


class EscalaFuncionarioOut(BaseModel):
    funcionario: FuncionarioOut
    periodos: int


class EscalaPeriodosRequest(BaseModel):
    periodos: int = Field(..., ge=1, le=2)


class EscalaAtivaResponse(BaseModel):
    itens: List[EscalaFuncionarioOut]
    custo_diario: float
