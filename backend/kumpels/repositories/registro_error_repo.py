"""
Repository de Registros de Error de Proceso.
"""
from typing import Optional, List
from sqlmodel import Session, select

from kumpels.repositories.base import BaseRepository
from kumpels.models.registro_error import RegistroErrorProceso
from kumpels.models.enums import PasoProcesoEnum, TipoRegistroEnum


class RegistroErrorRepository(BaseRepository[RegistroErrorProceso]):
    """Repository para registros de error de proceso."""

    def __init__(self, session: Session):
        super().__init__(session, RegistroErrorProceso)

    def listar(
        self,
        paciente_id: Optional[str] = None,
        proceso_medicacion_id: Optional[str] = None,
        paso: Optional[PasoProcesoEnum] = None,
        tipo: Optional[TipoRegistroEnum] = None,
        incluir_resueltos: bool = False,
    ) -> List[RegistroErrorProceso]:
        """
        Lista registros más recientes primero.

        Args:
            paciente_id: Filtrar por paciente
            proceso_medicacion_id: Filtrar por proceso de medicación
            paso: Filtrar por paso del proceso
            tipo: Filtrar por tipo de registro
            incluir_resueltos: Si False, solo registros sin resolver
        """
        query = select(RegistroErrorProceso)
        if paciente_id:
            query = query.where(RegistroErrorProceso.paciente_id == paciente_id)
        if proceso_medicacion_id:
            query = query.where(RegistroErrorProceso.proceso_medicacion_id == proceso_medicacion_id)
        if paso:
            query = query.where(RegistroErrorProceso.paso == paso)
        if tipo:
            query = query.where(RegistroErrorProceso.tipo == tipo)
        if not incluir_resueltos:
            query = query.where(RegistroErrorProceso.resuelto_en.is_(None))
        return list(self.session.exec(query.order_by(RegistroErrorProceso.reportado_en.desc())).all())

    def pacientes_con_errores(self, paciente_ids: List[str]) -> set[str]:
        """IDs de los pacientes indicados que tienen algún registro de tipo ERROR."""
        if not paciente_ids:
            return set()
        query = select(RegistroErrorProceso.paciente_id).where(
            RegistroErrorProceso.paciente_id.in_(paciente_ids),
            RegistroErrorProceso.tipo == TipoRegistroEnum.ERROR,
        )
        return set(self.session.exec(query).all())
