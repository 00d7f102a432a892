"""
Repositories de Proceso Diario y Proceso de Medicación.
"""
from typing import Optional, List
from datetime import datetime
from sqlmodel import Session, select, func

from kumpels.repositories.base import BaseRepository
from kumpels.models.proceso_diario import ProcesoDiario
from kumpels.models.proceso_medicacion import ProcesoMedicacion
from kumpels.models.enums import (
    EstadoProcesoDiarioEnum,
    EstadoProcesoEnum,
    PasoProcesoEnum,
)
from kumpels.utils.fechas import rango_del_dia


class ProcesoDiarioRepository(BaseRepository[ProcesoDiario]):
    """Repository para operaciones de procesos diarios."""

    def __init__(self, session: Session):
        super().__init__(session, ProcesoDiario)

    def obtener_por_fecha(self, fecha: datetime) -> Optional[ProcesoDiario]:
        """
        Obtiene el proceso diario de un día calendario.

        Args:
            fecha: Cualquier instante del día buscado

        Returns:
            El proceso diario o None
        """
        inicio, fin = rango_del_dia(fecha)
        query = select(ProcesoDiario).where(
            ProcesoDiario.fecha >= inicio,
            ProcesoDiario.fecha < fin
        )
        return self.session.exec(query).first()

    def obtener_activo_del_dia(self, fecha: Optional[datetime] = None) -> Optional[ProcesoDiario]:
        """Proceso diario ACTIVO del día indicado (por defecto, hoy)."""
        proceso = self.obtener_por_fecha(fecha or datetime.utcnow())
        if proceso and proceso.estado == EstadoProcesoDiarioEnum.ACTIVO:
            return proceso
        return None

    def listar(
        self,
        fecha: Optional[datetime] = None,
        estado: Optional[EstadoProcesoDiarioEnum] = None,
        iniciado_por: Optional[str] = None,
    ) -> List[ProcesoDiario]:
        """
        Lista procesos diarios ordenados por fecha descendente.

        Args:
            fecha: Día específico
            estado: Estado del proceso diario
            iniciado_por: ID del usuario que lo inició
        """
        query = select(ProcesoDiario)
        if fecha:
            inicio, fin = rango_del_dia(fecha)
            query = query.where(ProcesoDiario.fecha >= inicio, ProcesoDiario.fecha < fin)
        if estado:
            query = query.where(ProcesoDiario.estado == estado)
        if iniciado_por:
            query = query.where(ProcesoDiario.iniciado_por == iniciado_por)
        return list(self.session.exec(query.order_by(ProcesoDiario.fecha.desc())).all())


class ProcesoMedicacionRepository(BaseRepository[ProcesoMedicacion]):
    """Repository para operaciones de procesos de medicación."""

    def __init__(self, session: Session):
        super().__init__(session, ProcesoMedicacion)

    def obtener_por_clave(
        self,
        paciente_id: str,
        paso: PasoProcesoEnum,
        proceso_diario_id: Optional[str]
    ) -> Optional[ProcesoMedicacion]:
        """
        Busca el proceso único de (paciente, paso, proceso diario).

        Un proceso diario nulo se compara como valor: solo encuentra
        procesos sin proceso diario.
        """
        query = select(ProcesoMedicacion).where(
            ProcesoMedicacion.paciente_id == paciente_id,
            ProcesoMedicacion.paso == paso,
        )
        if proceso_diario_id is None:
            query = query.where(ProcesoMedicacion.proceso_diario_id.is_(None))
        else:
            query = query.where(ProcesoMedicacion.proceso_diario_id == proceso_diario_id)
        return self.session.exec(query).first()

    def listar(
        self,
        paciente_id: Optional[str] = None,
        paso: Optional[PasoProcesoEnum] = None,
        estado: Optional[EstadoProcesoEnum] = None,
        proceso_diario_id: Optional[str] = None,
    ) -> List[ProcesoMedicacion]:
        """Lista procesos filtrados, más recientes primero."""
        query = select(ProcesoMedicacion)
        if paciente_id:
            query = query.where(ProcesoMedicacion.paciente_id == paciente_id)
        if paso:
            query = query.where(ProcesoMedicacion.paso == paso)
        if estado:
            query = query.where(ProcesoMedicacion.estado == estado)
        if proceso_diario_id:
            query = query.where(ProcesoMedicacion.proceso_diario_id == proceso_diario_id)
        return list(self.session.exec(query.order_by(ProcesoMedicacion.created_at.desc())).all())

    def listar_por_pacientes(
        self,
        paciente_ids: List[str],
        paso: PasoProcesoEnum,
        estados: List[EstadoProcesoEnum],
        proceso_diario_id: Optional[str] = None,
        incluir_sin_proceso_diario: bool = False,
    ) -> List[ProcesoMedicacion]:
        """
        Procesos de un paso y estados dados para varios pacientes.

        Args:
            paciente_ids: Pacientes a considerar
            paso: Paso del proceso
            estados: Estados aceptados
            proceso_diario_id: Restringe al proceso diario indicado
            incluir_sin_proceso_diario: Acepta también procesos sin proceso diario
        """
        if not paciente_ids:
            return []
        query = select(ProcesoMedicacion).where(
            ProcesoMedicacion.paciente_id.in_(paciente_ids),
            ProcesoMedicacion.paso == paso,
            ProcesoMedicacion.estado.in_(estados),
        )
        if proceso_diario_id:
            if incluir_sin_proceso_diario:
                query = query.where(
                    (ProcesoMedicacion.proceso_diario_id == proceso_diario_id)
                    | (ProcesoMedicacion.proceso_diario_id.is_(None))
                )
            else:
                query = query.where(ProcesoMedicacion.proceso_diario_id == proceso_diario_id)
        return list(self.session.exec(query.order_by(ProcesoMedicacion.created_at)).all())

    def contar_por_proceso_diario(self, proceso_diario_id: str) -> int:
        query = select(func.count()).select_from(ProcesoMedicacion).where(
            ProcesoMedicacion.proceso_diario_id == proceso_diario_id
        )
        return self.session.exec(query).first() or 0

    def existe_completado(self, proceso_diario_id: str, paso: PasoProcesoEnum) -> bool:
        """Indica si el proceso diario tiene algún proceso del paso en COMPLETED."""
        query = select(ProcesoMedicacion.id).where(
            ProcesoMedicacion.proceso_diario_id == proceso_diario_id,
            ProcesoMedicacion.paso == paso,
            ProcesoMedicacion.estado == EstadoProcesoEnum.COMPLETADO,
        )
        return self.session.exec(query).first() is not None
