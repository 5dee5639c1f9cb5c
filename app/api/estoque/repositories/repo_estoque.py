from typing import List, Optional

from sqlalchemy.orm import Session

from app.api.estoque.models.model_item_bloqueado import ItemBloqueadoModel
from app.database.sync.colecao import ColecaoSincronizada
from app.utils.database_utils import now_trimmed


class EstoqueRepository(ColecaoSincronizada[str]):
    """Nomes bloqueados (ingredientes ou produtos). O snapshot é a lista de nomes."""

    nome = "itens_bloqueados"

    def _listar(self, db: Session) -> List[str]:
        return [r.nome for r in db.query(ItemBloqueadoModel).order_by(ItemBloqueadoModel.nome).all()]

    @staticmethod
    def _inserir(db: Session, nome: str) -> str:
        if db.get(ItemBloqueadoModel, nome) is None:
            db.add(ItemBloqueadoModel(nome=nome, bloqueado_em=now_trimmed()))
        return nome

    @staticmethod
    def _remover(db: Session, nome: str) -> Optional[str]:
        item = db.get(ItemBloqueadoModel, nome)
        if item is None:
            return None
        db.delete(item)
        return nome

    def bloquear(self, nome: str) -> str:
        return self._executar(
            "bloquear",
            lambda db: self._inserir(db, nome),
            lambda db: self._inserir(db, nome),
            espelho=self._inserir,
        )

    def desbloquear(self, nome: str) -> bool:
        removido = self._executar(
            "desbloquear",
            lambda db: self._remover(db, nome),
            lambda db: self._remover(db, nome),
            espelho=lambda db, _: self._remover(db, nome),
            local_se_vazio=True,
        )
        return removido is not None
