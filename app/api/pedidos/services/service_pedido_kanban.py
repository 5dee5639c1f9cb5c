from __future__ import annotations

from collections import OrderedDict
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Tuple

from app.api.cadastros.services.service_funcionario import FuncionarioService
from app.api.pedidos.models.model_pedido import PedidoModel
from app.api.pedidos.repositories.repo_pedidos import PedidoRepository
from app.api.pedidos.schemas.schema_pedido import (
    CardKanban,
    HistoricoDiaResponse,
    HistoricoResponse,
    KanbanResponse,
    PedidoResponse,
)
from app.api.shared.schemas.schema_shared_enums import (
    MOTIVOS_CANCELAMENTO,
    StatusPedidoEnum,
    TipoPedidoEnum,
)
from app.core.exceptions import (
    RegistroNaoEncontradoError,
    TransicaoInvalidaError,
    ValidacaoPedidoError,
)
from app.utils.database_utils import now_trimmed
from app.utils.logger import logger

PROXIMO_STATUS: Dict[StatusPedidoEnum, StatusPedidoEnum] = {
    StatusPedidoEnum.CONFIRMED: StatusPedidoEnum.KITCHEN,
    StatusPedidoEnum.KITCHEN: StatusPedidoEnum.DELIVERY,
    StatusPedidoEnum.DELIVERY: StatusPedidoEnum.COMPLETED,
}

STATUS_TERMINAIS = {
    StatusPedidoEnum.COMPLETED,
    StatusPedidoEnum.CANCELED,
    StatusPedidoEnum.ARCHIVED,
}

COLUNAS_ATIVAS = [StatusPedidoEnum.CONFIRMED, StatusPedidoEnum.KITCHEN, StatusPedidoEnum.DELIVERY]
COLUNAS_DO_DIA = [StatusPedidoEnum.COMPLETED, StatusPedidoEnum.CANCELED]

MINUTOS_CRITICO = 15
MINUTOS_ATENCAO = 30


def urgencia(prazo: Optional[datetime], agora: datetime) -> Tuple[Optional[int], Optional[str]]:
    """Minutos até o prazo e nível: critico (< 15), atencao (< 30) ou ok."""
    if prazo is None:
        return None, None
    minutos = int((prazo - agora).total_seconds() // 60)
    if minutos < MINUTOS_CRITICO:
        return minutos, "critico"
    if minutos < MINUTOS_ATENCAO:
        return minutos, "atencao"
    return minutos, "ok"


def montar_quadro(pedidos: Iterable[PedidoModel], hoje: date, agora: datetime) -> KanbanResponse:
    """
    Colunas do quadro. Ativos aparecem sempre; finalizados e cancelados
    só se foram criados hoje. Arquivados ficam fora.
    """
    colunas: Dict[StatusPedidoEnum, List[CardKanban]] = {s: [] for s in COLUNAS_ATIVAS + COLUNAS_DO_DIA}
    for pedido in sorted(pedidos, key=lambda p: p.criado_em, reverse=True):
        status = StatusPedidoEnum(pedido.status)
        if status in COLUNAS_DO_DIA and pedido.criado_em.date() != hoje:
            continue
        if status not in colunas:
            continue
        minutos, nivel = (None, None)
        if status in COLUNAS_ATIVAS:
            minutos, nivel = urgencia(pedido.prazo, agora)
        colunas[status].append(
            CardKanban(pedido=PedidoResponse.model_validate(pedido), minutos_restantes=minutos, urgencia=nivel)
        )
    return KanbanResponse(colunas=colunas)


def montar_historico(pedidos: Iterable[PedidoModel], hoje: date) -> HistoricoResponse:
    """Finalizados/cancelados de dias anteriores e arquivados, agrupados por data (mais recente primeiro)."""
    dias: "OrderedDict[date, List[PedidoResponse]]" = OrderedDict()
    for pedido in sorted(pedidos, key=lambda p: p.criado_em, reverse=True):
        status = StatusPedidoEnum(pedido.status)
        dia = pedido.criado_em.date()
        antigo = status in COLUNAS_DO_DIA and dia != hoje
        if not (antigo or status == StatusPedidoEnum.ARCHIVED):
            continue
        dias.setdefault(dia, []).append(PedidoResponse.model_validate(pedido))
    return HistoricoResponse(dias=[HistoricoDiaResponse(dia=d, pedidos=p) for d, p in dias.items()])


class KanbanService:
    """Máquina de estados do pedido no quadro da cozinha."""

    def __init__(self, repo: PedidoRepository, funcionarios: FuncionarioService):
        self.repo = repo
        self.funcionarios = funcionarios

    def _obter(self, numero: int) -> PedidoModel:
        pedido = self.repo.buscar(numero)
        if pedido is None:
            raise RegistroNaoEncontradoError(f"Pedido #{numero} não encontrado")
        return pedido

    def _salvar(self, numero: int, status: StatusPedidoEnum, **extras) -> PedidoModel:
        pedido = self.repo.atualizar_status(numero, status, **extras)
        if pedido is None:
            raise RegistroNaoEncontradoError(f"Pedido #{numero} não encontrado")
        return pedido

    def _validar_entregador(self, entregador: Optional[str]) -> str:
        if not entregador or not entregador.strip():
            raise ValidacaoPedidoError(["Selecione o entregador ou despache sem entregador"])
        escalados = {f.nome for f in self.funcionarios.entregadores_escalados()}
        if entregador not in escalados:
            raise ValidacaoPedidoError([f"{entregador} não é um entregador na escala de hoje"])
        return entregador

    def avancar(self, numero: int, entregador: Optional[str] = None, sem_entregador: bool = False) -> PedidoModel:
        pedido = self._obter(numero)
        atual = StatusPedidoEnum(pedido.status)
        destino = PROXIMO_STATUS.get(atual)
        if destino is None:
            raise TransicaoInvalidaError(f"Pedido #{numero} com status {atual.value} não pode avançar")

        extras = {}
        precisa_entregador = (
            destino == StatusPedidoEnum.DELIVERY
            and TipoPedidoEnum(pedido.tipo) == TipoPedidoEnum.DELIVERY
            and not sem_entregador
        )
        if precisa_entregador:
            extras["entregador"] = self._validar_entregador(entregador)

        logger.info(f"[Kanban] Pedido #{numero}: {atual.value} -> {destino.value}")
        return self._salvar(numero, destino, **extras)

    def cancelar(self, numero: int, motivo: str, ator: str) -> PedidoModel:
        erros = []
        if motivo not in MOTIVOS_CANCELAMENTO:
            erros.append("Selecione um motivo de cancelamento válido")
        if not ator or not ator.strip():
            erros.append("Cancelamento precisa de um responsável")
        if erros:
            raise ValidacaoPedidoError(erros)

        pedido = self._obter(numero)
        atual = StatusPedidoEnum(pedido.status)
        if atual in STATUS_TERMINAIS:
            raise TransicaoInvalidaError(f"Pedido #{numero} com status {atual.value} não pode ser cancelado")

        logger.info(f"[Kanban] Pedido #{numero} cancelado por {ator}: {motivo}")
        return self._salvar(
            numero,
            StatusPedidoEnum.CANCELED,
            motivo_cancelamento=motivo,
            cancelado_por=ator,
            cancelado_em=now_trimmed(),
        )

    def arquivar(self, numero: int) -> PedidoModel:
        pedido = self._obter(numero)
        if StatusPedidoEnum(pedido.status) != StatusPedidoEnum.COMPLETED:
            raise TransicaoInvalidaError("Só pedidos finalizados podem ser arquivados")
        return self._salvar(numero, StatusPedidoEnum.ARCHIVED)

    def restaurar(self, numero: int) -> PedidoModel:
        pedido = self._obter(numero)
        if StatusPedidoEnum(pedido.status) != StatusPedidoEnum.ARCHIVED:
            raise TransicaoInvalidaError("Só pedidos arquivados podem ser restaurados")
        return self._salvar(numero, StatusPedidoEnum.COMPLETED)

    def mover(
        self,
        numero: int,
        destino: StatusPedidoEnum,
        entregador: Optional[str] = None,
        sem_entregador: bool = False,
    ) -> Tuple[bool, PedidoModel]:
        """
        Arrastar e soltar. Retorna (movido, pedido).

        Cancelar e arquivar só pelas ações próprias; pedido já encerrado
        não sai do lugar.
        """
        if destino in (StatusPedidoEnum.CANCELED, StatusPedidoEnum.ARCHIVED):
            raise TransicaoInvalidaError("Use a ação de cancelar ou arquivar para esse status")

        pedido = self._obter(numero)
        atual = StatusPedidoEnum(pedido.status)
        if atual in STATUS_TERMINAIS or atual == destino:
            return False, pedido
        if PROXIMO_STATUS.get(atual) != destino:
            raise TransicaoInvalidaError(
                f"Pedido #{numero} só pode ir de {atual.value} para {PROXIMO_STATUS[atual].value}"
            )
        return True, self.avancar(numero, entregador, sem_entregador)

    def quadro(self, hoje: Optional[date] = None, agora: Optional[datetime] = None) -> KanbanResponse:
        agora = agora or now_trimmed()
        return montar_quadro(self.repo.listar(), hoje or agora.date(), agora)

    def historico(self, hoje: Optional[date] = None) -> HistoricoResponse:
        return montar_historico(self.repo.listar(), hoje or now_trimmed().date())
