"""
Repositories de Cadastros
"""

from app.api.cadastros.repositories.repo_cliente import ClienteRepository
from app.api.cadastros.repositories.repo_funcionario import FuncionarioRepository

__all__ = ["ClienteRepository", "FuncionarioRepository"]
