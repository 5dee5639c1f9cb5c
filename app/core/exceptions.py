"""Erros de domínio levantados pelos services e traduzidos em JSON pelos handlers globais."""
from typing import List, Optional


class PdvError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidacaoPedidoError(PdvError):
    """Agrupa todas as violações encontradas, não só a primeira."""

    status_code = 400

    def __init__(self, erros: List[str]):
        self.erros = list(erros)
        super().__init__("; ".join(self.erros))


class TransicaoInvalidaError(PdvError):
    status_code = 409


class RegistroDuplicadoError(PdvError):
    status_code = 409

    def __init__(self, detail: str, erros: Optional[List[str]] = None):
        super().__init__(detail)
        self.erros = erros or [detail]


class RegistroNaoEncontradoError(PdvError):
    status_code = 404


class AutorizacaoError(PdvError):
    status_code = 403
