from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, constr, field_validator, model_validator

from app.utils.telefone import normalizar_telefone


class ClienteOut(BaseModel):
    id: str
    nome: str
    telefone: str
    endereco: Optional[str] = None
    bairro: Optional[str] = None
    complemento: Optional[str] = None
    total_pedidos: int = 0
    total_gasto: float = 0
    ultimo_pedido_em: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ClienteCreate(BaseModel):
    nome: constr(min_length=1, max_length=100)
    telefone: constr(min_length=8, max_length=20)
    endereco: Optional[str] = None
    bairro: Optional[str] = None
    complemento: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def normalize_empty_strings(cls, data):
        """Converte strings vazias para None nos campos opcionais."""
        if isinstance(data, dict):
            for campo in ("endereco", "bairro", "complemento"):
                valor = data.get(campo)
                if isinstance(valor, str):
                    data[campo] = valor.strip() or None
            if isinstance(data.get("nome"), str):
                data["nome"] = data["nome"].strip()
        return data

    @field_validator("telefone")
    @classmethod
    def normalizar(cls, v: str) -> str:
        return normalizar_telefone(v)


class ClienteUpdate(BaseModel):
    nome: Optional[constr(min_length=1, max_length=100)] = None
    telefone: Optional[constr(min_length=8, max_length=20)] = None
    endereco: Optional[str] = None
    bairro: Optional[str] = None
    complemento: Optional[str] = None

    @field_validator("telefone")
    @classmethod
    def normalizar(cls, v: Optional[str]) -> Optional[str]:
        return normalizar_telefone(v) if v else v


class ClienteHistoricoResponse(BaseModel):
    """Busca pelo telefone no caixa: cadastro do CRM ou, na falta dele, o último pedido."""
    cliente: Optional[ClienteOut] = None
    nome: Optional[str] = None
    endereco: Optional[str] = None
    bairro: Optional[str] = None
    complemento: Optional[str] = None
    total_pedidos: int = 0
    origem: Optional[str] = None  # "cadastro" | "pedidos"


class ClientesListResponse(BaseModel):
    itens: List[ClienteOut]
