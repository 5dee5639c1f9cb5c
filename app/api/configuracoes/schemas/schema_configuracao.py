from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EscalaItem(BaseModel):
    funcionario_id: str
    periodos: int = Field(2, ge=1, le=2)


class ConfiguracoesResponse(BaseModel):
    loja_aberta: bool
    exigir_escala: bool
    sla_entrega_min: int
    sla_retirada_min: int
    modo_offline: bool
    tempo_sessao_min: int

    model_config = ConfigDict(from_attributes=True)


class ConfiguracoesUpdate(BaseModel):
    loja_aberta: Optional[bool] = None
    exigir_escala: Optional[bool] = None
    sla_entrega_min: Optional[int] = Field(None, ge=1, le=240)
    sla_retirada_min: Optional[int] = Field(None, ge=1, le=240)
    modo_offline: Optional[bool] = None
    tempo_sessao_min: Optional[int] = Field(None, ge=1, le=24 * 60)


class EscalaResponse(BaseModel):
    itens: List[EscalaItem]
