from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.api.cadastros.models.model_cliente import ClienteModel, novo_id
from app.database.sync.colecao import ColecaoSincronizada, copiar_registro
from app.utils.database_utils import now_trimmed


class ClienteRepository(ColecaoSincronizada[ClienteModel]):
    nome = "clientes"

    def _listar(self, db: Session) -> List[ClienteModel]:
        return db.query(ClienteModel).order_by(ClienteModel.nome).all()

    # ------------- Leituras -------------
    def get_by_telefone(self, telefone: str) -> Optional[ClienteModel]:
        return self._buscar(
            "get_by_telefone",
            lambda db: db.query(ClienteModel).filter(ClienteModel.telefone == telefone).first(),
        )

    def get_by_id(self, id: str) -> Optional[ClienteModel]:
        return self._buscar("get_by_id", lambda db: db.get(ClienteModel, id))

    def buscar(self, termo: str) -> List[ClienteModel]:
        like = f"%{termo.strip()}%"

        def consulta(db: Session) -> List[ClienteModel]:
            return (
                db.query(ClienteModel)
                .filter(or_(ClienteModel.nome.ilike(like), ClienteModel.telefone.ilike(like)))
                .order_by(ClienteModel.nome)
                .all()
            )

        return self._ler("buscar", consulta)

    def conflitos(self, telefone: str, nome: str, ignorar_id: Optional[str] = None) -> List[ClienteModel]:
        """Clientes com o mesmo telefone ou o mesmo nome (sem diferenciar maiúsculas)."""

        def consulta(db: Session) -> List[ClienteModel]:
            q = db.query(ClienteModel).filter(
                or_(
                    ClienteModel.telefone == telefone,
                    func.lower(ClienteModel.nome) == nome.strip().lower(),
                )
            )
            if ignorar_id:
                q = q.filter(ClienteModel.id != ignorar_id)
            return q.all()

        return self._ler("conflitos", consulta)

    # ------------- Escritas -------------
    def create(self, dados: Dict[str, Any]) -> ClienteModel:
        dados = {"id": novo_id(), "total_pedidos": 0, "total_gasto": 0, **dados}

        def inserir(db: Session) -> ClienteModel:
            cliente = ClienteModel(**dados)
            db.add(cliente)
            db.flush()
            return cliente

        return self._executar("create", inserir, inserir, espelho=self._espelhar_cliente)

    def update(self, id: str, dados: Dict[str, Any]) -> Optional[ClienteModel]:
        def aplicar(db: Session) -> Optional[ClienteModel]:
            cliente = db.get(ClienteModel, id)
            if cliente is None:
                return None
            for campo, valor in dados.items():
                setattr(cliente, campo, valor)
            db.flush()
            return cliente

        return self._executar("update", aplicar, aplicar, espelho=self._espelhar_cliente, local_se_vazio=True)

    def delete(self, id: str) -> bool:
        def remover(db: Session) -> Optional[str]:
            cliente = db.get(ClienteModel, id)
            if cliente is None:
                return None
            db.delete(cliente)
            return id

        removido = self._executar("delete", remover, remover, espelho=self._espelhar_remocao, local_se_vazio=True)
        return removido is not None

    def registrar_pedido(self, dados: Dict[str, Any], total: float) -> ClienteModel:
        """
        Upsert pelo telefone ao finalizar um pedido.

        Nome e endereço são sobrescritos; bairro e complemento em branco
        mantêm o valor anterior.
        """
        total_dec = Decimal(str(total))

        def upsert(db: Session) -> ClienteModel:
            agora = now_trimmed()
            cliente = db.query(ClienteModel).filter(ClienteModel.telefone == dados["telefone"]).first()
            if cliente is None:
                cliente = ClienteModel(
                    id=novo_id(),
                    telefone=dados["telefone"],
                    nome=dados.get("nome") or "",
                    endereco=dados.get("endereco"),
                    bairro=dados.get("bairro"),
                    complemento=dados.get("complemento"),
                    total_pedidos=1,
                    total_gasto=total_dec,
                    ultimo_pedido_em=agora,
                )
                db.add(cliente)
            else:
                cliente.nome = dados.get("nome") or cliente.nome
                cliente.endereco = dados.get("endereco")
                cliente.bairro = dados.get("bairro") or cliente.bairro
                cliente.complemento = dados.get("complemento") or cliente.complemento
                cliente.total_pedidos = (cliente.total_pedidos or 0) + 1
                cliente.total_gasto = Decimal(str(cliente.total_gasto or 0)) + total_dec
                cliente.ultimo_pedido_em = agora
            db.flush()
            return cliente

        return self._executar("registrar_pedido", upsert, upsert, espelho=self._espelhar_cliente)

    # ------------- Espelho local -------------
    @staticmethod
    def _espelhar_cliente(db: Session, cliente: Optional[ClienteModel]) -> None:
        if cliente is None:
            return
        # telefone é único: um cadastro local antigo com o mesmo telefone dá lugar ao remoto
        db.query(ClienteModel).filter(
            ClienteModel.telefone == cliente.telefone,
            ClienteModel.id != cliente.id,
        ).delete(synchronize_session=False)
        db.merge(copiar_registro(cliente))

    @staticmethod
    def _espelhar_remocao(db: Session, id: Optional[str]) -> None:
        if id is not None:
            db.query(ClienteModel).filter(ClienteModel.id == id).delete(synchronize_session=False)
