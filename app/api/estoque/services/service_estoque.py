from typing import Set

from app.api.catalogo.services.service_catalogo import CatalogoService
from app.api.estoque.repositories.repo_estoque import EstoqueRepository
from app.api.estoque.schemas.schema_estoque import EstoqueResponse, ItensBloqueaveisResponse
from app.core.exceptions import RegistroNaoEncontradoError, ValidacaoPedidoError
from app.utils.logger import logger


class EstoqueService:
    """Existir na lista = bloqueado. O nome pode ser de ingrediente ou de produto."""

    def __init__(self, repo: EstoqueRepository, catalogo: CatalogoService):
        self.repo = repo
        self.catalogo = catalogo

    def listar(self) -> EstoqueResponse:
        return EstoqueResponse(bloqueados=self.repo.listar())

    def bloqueados(self) -> Set[str]:
        return set(self.repo.listar())

    def bloquear(self, nome: str) -> EstoqueResponse:
        nome = (nome or "").strip()
        if not nome:
            raise ValidacaoPedidoError(["Informe o item a bloquear"])
        self.repo.bloquear(nome)
        logger.info(f"[Estoque] Item bloqueado: {nome}")
        return self.listar()

    def desbloquear(self, nome: str) -> EstoqueResponse:
        if not self.repo.desbloquear(nome):
            raise RegistroNaoEncontradoError(f"'{nome}' não está bloqueado")
        logger.info(f"[Estoque] Item liberado: {nome}")
        return self.listar()

    def opcoes(self) -> ItensBloqueaveisResponse:
        return ItensBloqueaveisResponse(
            ingredientes=self.catalogo.ingredientes(),
            itens_unitarios=self.catalogo.itens_unitarios(),
        )
