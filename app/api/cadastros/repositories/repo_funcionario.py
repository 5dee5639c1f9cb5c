from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.api.cadastros.models.model_funcionario import FuncionarioModel
from app.api.cadastros.models.model_cliente import novo_id
from app.database.sync.colecao import ColecaoSincronizada, copiar_registro


class FuncionarioRepository(ColecaoSincronizada[FuncionarioModel]):
    nome = "funcionarios"

    def _listar(self, db: Session) -> List[FuncionarioModel]:
        return db.query(FuncionarioModel).order_by(FuncionarioModel.nome).all()

    def get_by_id(self, id: str) -> Optional[FuncionarioModel]:
        return self._buscar("get_by_id", lambda db: db.get(FuncionarioModel, id))

    def create(self, dados: Dict[str, Any]) -> FuncionarioModel:
        dados = {"id": novo_id(), **dados}

        def inserir(db: Session) -> FuncionarioModel:
            funcionario = FuncionarioModel(**dados)
            db.add(funcionario)
            db.flush()
            return funcionario

        return self._executar(
            "create",
            inserir,
            inserir,
            espelho=lambda db, f: db.merge(copiar_registro(f)),
        )

    def delete(self, id: str) -> bool:
        def remover(db: Session) -> Optional[str]:
            funcionario = db.get(FuncionarioModel, id)
            if funcionario is None:
                return None
            db.delete(funcionario)
            return id

        def espelho(db: Session, removido: Optional[str]) -> None:
            db.query(FuncionarioModel).filter(FuncionarioModel.id == removido).delete(synchronize_session=False)

        return self._executar("delete", remover, remover, espelho=espelho, local_se_vazio=True) is not None
