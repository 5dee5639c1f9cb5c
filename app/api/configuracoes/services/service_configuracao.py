from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.api.configuracoes.repositories.repo_configuracao import ConfiguracaoRepository
from app.api.configuracoes.schemas.schema_configuracao import (
    ConfiguracoesResponse,
    ConfiguracoesUpdate,
    EscalaItem,
)
from app.config.settings import ACCESS_TOKEN_EXPIRE_MINUTES, SLA_ENTREGA_MINUTOS, SLA_RETIRADA_MINUTOS
from app.database.sync.modo_offline import ModoOffline, modo_offline as modo_global
from app.utils.logger import logger

LOJA_ABERTA = "loja_aberta"
EXIGIR_ESCALA = "exigir_escala"
SLA_ENTREGA = "sla_entrega_min"
SLA_RETIRADA = "sla_retirada_min"
MODO_OFFLINE = "modo_offline"
TEMPO_SESSAO = "tempo_sessao_min"
ESCALA_ATIVA = "escala_ativa"
CARRINHO = "carrinho"

PADROES: Dict[str, Any] = {
    LOJA_ABERTA: True,
    EXIGIR_ESCALA: False,
    SLA_ENTREGA: SLA_ENTREGA_MINUTOS,
    SLA_RETIRADA: SLA_RETIRADA_MINUTOS,
    MODO_OFFLINE: False,
    TEMPO_SESSAO: ACCESS_TOKEN_EXPIRE_MINUTES,
}


class ConfiguracaoService:
    def __init__(self, db: Session, modo: Optional[ModoOffline] = None):
        self.repo = ConfiguracaoRepository(db)
        self.modo = modo or modo_global

    def _get(self, chave: str) -> Any:
        return self.repo.get(chave, PADROES.get(chave))

    def obter(self) -> ConfiguracoesResponse:
        valores = {chave: self._get(chave) for chave in PADROES}
        # o flag em memória é a fonte de verdade do modo (pode vir de FORCE_OFFLINE)
        valores[MODO_OFFLINE] = self.modo.offline
        return ConfiguracoesResponse(**valores)

    def atualizar(self, payload: ConfiguracoesUpdate) -> ConfiguracoesResponse:
        for chave, valor in payload.model_dump(exclude_unset=True).items():
            if valor is None:
                continue
            if chave == MODO_OFFLINE:
                self.definir_modo_offline(valor)
                continue
            self.repo.set(chave, valor)
            logger.info(f"[Configurações] {chave} = {valor}")
        return self.obter()

    def definir_modo_offline(self, offline: bool) -> bool:
        self.repo.set(MODO_OFFLINE, offline)
        return self.modo.definir(offline)

    def restaurar_modo_offline(self) -> None:
        """Aplica no flag em memória o modo salvo na última execução."""
        if self.repo.get(MODO_OFFLINE, False):
            self.modo.definir(True)

    # ------------- Atalhos usados pelos outros serviços -------------
    @property
    def loja_aberta(self) -> bool:
        return bool(self._get(LOJA_ABERTA))

    @property
    def exigir_escala(self) -> bool:
        return bool(self._get(EXIGIR_ESCALA))

    @property
    def sla_entrega_min(self) -> int:
        return int(self._get(SLA_ENTREGA))

    @property
    def sla_retirada_min(self) -> int:
        return int(self._get(SLA_RETIRADA))

    @property
    def tempo_sessao_min(self) -> int:
        return int(self._get(TEMPO_SESSAO))

    # ------------- Escala ativa -------------
    def escala(self) -> List[EscalaItem]:
        return [EscalaItem(**item) for item in (self.repo.get(ESCALA_ATIVA) or [])]

    def salvar_escala(self, itens: List[EscalaItem]) -> List[EscalaItem]:
        self.repo.set(ESCALA_ATIVA, [i.model_dump() for i in itens])
        return itens

    # ------------- Rascunho do carrinho -------------
    def carrinho(self) -> Optional[Dict[str, Any]]:
        return self.repo.get(CARRINHO)

    def salvar_carrinho(self, rascunho: Dict[str, Any]) -> None:
        self.repo.set(CARRINHO, rascunho)

    def limpar_carrinho(self) -> None:
        self.repo.delete(CARRINHO)
