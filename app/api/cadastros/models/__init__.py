"""
Models de Cadastros
"""

from app.api.cadastros.models.model_cliente import ClienteModel
from app.api.cadastros.models.model_funcionario import FuncionarioModel
from app.api.cadastros.models.model_usuario import UsuarioModel

__all__ = [
    "ClienteModel",
    "FuncionarioModel",
    "UsuarioModel",
]
