from decimal import Decimal
from typing import List

from app.api.cadastros.models.model_funcionario import FuncionarioModel
from app.api.cadastros.repositories.repo_funcionario import FuncionarioRepository
from app.api.cadastros.schemas.schema_funcionario import (
    EscalaAtivaResponse,
    EscalaFuncionarioOut,
    FuncionarioCreate,
    FuncionarioOut,
)
from app.api.configuracoes.schemas.schema_configuracao import EscalaItem
from app.api.configuracoes.services.service_configuracao import ConfiguracaoService
from app.core.exceptions import RegistroNaoEncontradoError, ValidacaoPedidoError
from app.utils.logger import logger

PERIODOS_PADRAO = 2


class FuncionarioService:
    """Equipe e escala do dia (a escala fica só no banco local)."""

    def __init__(self, repo: FuncionarioRepository, config: ConfiguracaoService):
        self.repo = repo
        self.config = config

    def list(self) -> List[FuncionarioModel]:
        return self.repo.listar()

    def create(self, data: FuncionarioCreate) -> FuncionarioModel:
        erros = []
        if not data.nome.strip():
            erros.append("Nome é obrigatório")
        if not data.cargo.strip():
            erros.append("Cargo é obrigatório")
        if not data.entregador and data.valor_periodo is None:
            erros.append("Valor por período é obrigatório")
        if erros:
            raise ValidacaoPedidoError(erros)

        valor = 0 if data.entregador else data.valor_periodo
        funcionario = self.repo.create({
            "nome": data.nome.strip(),
            "cargo": data.cargo.strip(),
            "valor_periodo": Decimal(str(valor)),
            "entregador": data.entregador,
        })
        logger.info(f"[Equipe] Funcionário cadastrado - id={funcionario.id} nome={funcionario.nome}")
        return funcionario

    def delete(self, id: str) -> None:
        if not self.repo.delete(id):
            raise RegistroNaoEncontradoError("Funcionário não encontrado")
        escala = [i for i in self.config.escala() if i.funcionario_id != id]
        self.config.salvar_escala(escala)
        logger.info(f"[Equipe] Funcionário removido - id={id}")

    # ------------- Escala ativa -------------
    def alternar_escala(self, funcionario_id: str) -> List[EscalaItem]:
        """Entra na escala com 2 períodos ou sai dela."""
        escala = self.config.escala()
        if any(i.funcionario_id == funcionario_id for i in escala):
            escala = [i for i in escala if i.funcionario_id != funcionario_id]
        else:
            if self.repo.get_by_id(funcionario_id) is None:
                raise RegistroNaoEncontradoError("Funcionário não encontrado")
            escala.append(EscalaItem(funcionario_id=funcionario_id, periodos=PERIODOS_PADRAO))
        return self.config.salvar_escala(escala)

    def definir_periodos(self, funcionario_id: str, periodos: int) -> List[EscalaItem]:
        escala = self.config.escala()
        for item in escala:
            if item.funcionario_id == funcionario_id:
                item.periodos = periodos
                return self.config.salvar_escala(escala)
        raise RegistroNaoEncontradoError("Funcionário não está na escala")

    def escala_ativa(self) -> EscalaAtivaResponse:
        por_id = {f.id: f for f in self.repo.listar()}
        itens = []
        custo = Decimal("0")
        for item in self.config.escala():
            funcionario = por_id.get(item.funcionario_id)
            if funcionario is None:
                continue
            itens.append(EscalaFuncionarioOut(funcionario=FuncionarioOut.model_validate(funcionario), periodos=item.periodos))
            custo += Decimal(str(funcionario.valor_periodo or 0)) * item.periodos
        return EscalaAtivaResponse(itens=itens, custo_diario=float(custo))

    def entregadores_escalados(self) -> List[FuncionarioModel]:
        ids = {i.funcionario_id for i in self.config.escala()}
        return [f for f in self.repo.listar() if f.entregador and f.id in ids]
