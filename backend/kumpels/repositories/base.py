"""
Repository Base.
Operaciones comunes de persistencia para los modelos SQLModel.
"""
from typing import TypeVar, Generic, Optional, Type, Any
from datetime import datetime
from sqlmodel import Session, select, func

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Repository base genérico.

    ``agregar`` solo prepara la escritura; ``guardar`` y ``eliminar``
    confirman la transacción. Los modelos con ``updated_at`` lo refrescan
    en cada escritura.

    Uso:
        class CamaRepository(BaseRepository[Cama]):
            def __init__(self, session: Session):
                super().__init__(session, Cama)
    """

    def __init__(self, session: Session, model: Type[T]):
        self.session = session
        self.model = model

    def obtener_por_id(self, id: str) -> Optional[T]:
        return self.session.get(self.model, id)

    def crear_desde_dict(self, data: dict) -> T:
        """Crea y confirma un registro a partir de sus campos."""
        return self.guardar(self.model(**data))

    def agregar(self, obj: T) -> T:
        """Agrega el registro a la sesión sin confirmar (escrituras en lote)."""
        if hasattr(obj, "updated_at"):
            obj.updated_at = datetime.utcnow()
        self.session.add(obj)
        return obj

    def guardar(self, obj: T) -> T:
        """Agrega, confirma y recarga el registro."""
        self.agregar(obj)
        self.session.commit()
        self.session.refresh(obj)
        return obj

    def eliminar(self, obj: T) -> None:
        self.session.delete(obj)
        self.session.commit()

    def contar_query(self, query: Any) -> int:
        """Filas que retornaría una query (para paginación)."""
        return self.session.exec(select(func.count()).select_from(query.subquery())).one()
