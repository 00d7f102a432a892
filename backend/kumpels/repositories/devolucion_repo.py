"""
Repositories de Devoluciones Manuales y Causas de Devolución.
"""
from typing import Optional, List
from sqlmodel import Session, select

from kumpels.repositories.base import BaseRepository
from kumpels.models.devolucion import CausaDevolucion, DevolucionManual
from kumpels.models.enums import EstadoDevolucionManualEnum


class CausaDevolucionRepository(BaseRepository[CausaDevolucion]):
    """Repository para el catálogo de causas de devolución."""

    def __init__(self, session: Session):
        super().__init__(session, CausaDevolucion)

    def obtener_por_codigo(self, codigo: int) -> Optional[CausaDevolucion]:
        query = select(CausaDevolucion).where(CausaDevolucion.codigo == codigo)
        return self.session.exec(query).first()

    def listar_activas(self) -> List[CausaDevolucion]:
        """Causas activas ordenadas por código."""
        query = (
            select(CausaDevolucion)
            .where(CausaDevolucion.activa == True)  # noqa: E712
            .order_by(CausaDevolucion.codigo)
        )
        return list(self.session.exec(query).all())


class DevolucionManualRepository(BaseRepository[DevolucionManual]):
    """Repository para devoluciones manuales."""

    def __init__(self, session: Session):
        super().__init__(session, DevolucionManual)

    def listar(
        self,
        paciente_id: Optional[str] = None,
        estado: Optional[EstadoDevolucionManualEnum] = None,
        generado_por: Optional[str] = None,
        revisado_por: Optional[str] = None,
    ) -> List[DevolucionManual]:
        """
        Lista devoluciones manuales, más recientes primero.

        Args:
            paciente_id: Filtrar por paciente
            estado: Filtrar por estado de revisión
            generado_por: Usuario que registró la devolución
            revisado_por: Usuario que la revisó
        """
        query = select(DevolucionManual)
        if paciente_id:
            query = query.where(DevolucionManual.paciente_id == paciente_id)
        if estado:
            query = query.where(DevolucionManual.estado == estado)
        if generado_por:
            query = query.where(DevolucionManual.generado_por == generado_por)
        if revisado_por:
            query = query.where(DevolucionManual.revisado_por == revisado_por)
        return list(self.session.exec(query.order_by(DevolucionManual.created_at.desc())).all())
