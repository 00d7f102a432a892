"""
Repositories de Línea y Servicio.
"""
from typing import Optional, List
from sqlmodel import Session, select, func

from kumpels.repositories.base import BaseRepository
from kumpels.models.linea import Linea
from kumpels.models.servicio import Servicio
from kumpels.models.paciente import Paciente
from kumpels.models.enums import EstadoPacienteEnum, NombreLineaEnum


class LineaRepository(BaseRepository[Linea]):
    """Repository para operaciones de líneas."""

    def __init__(self, session: Session):
        super().__init__(session, Linea)

    def obtener_por_nombre(self, nombre: NombreLineaEnum) -> Optional[Linea]:
        """
        Obtiene una línea por su código (LINE_1..LINE_5).

        Args:
            nombre: Código de la línea

        Returns:
            La línea o None
        """
        query = select(Linea).where(Linea.nombre == nombre)
        return self.session.exec(query).first()

    def listar_activas(self) -> List[Linea]:
        """Líneas activas ordenadas por nombre visible."""
        query = (
            select(Linea)
            .where(Linea.activa == True)  # noqa: E712
            .order_by(Linea.nombre_visible)
        )
        return list(self.session.exec(query).all())


class ServicioRepository(BaseRepository[Servicio]):
    """Repository para operaciones de servicios."""

    def __init__(self, session: Session):
        super().__init__(session, Servicio)

    def obtener_por_nombre(self, nombre: str) -> Optional[Servicio]:
        """Obtiene un servicio por su nombre exacto."""
        query = select(Servicio).where(Servicio.nombre == nombre)
        return self.session.exec(query).first()

    def listar_activos(self, linea_id: Optional[str] = None) -> List[Servicio]:
        """
        Servicios activos, opcionalmente de una línea.

        Args:
            linea_id: Filtrar por línea

        Returns:
            Servicios ordenados por nombre
        """
        query = select(Servicio).where(Servicio.activo == True)  # noqa: E712
        if linea_id:
            query = query.where(Servicio.linea_id == linea_id)
        return list(self.session.exec(query.order_by(Servicio.nombre)).all())

    def ids_por_linea(self, linea_id: str) -> List[str]:
        """IDs de todos los servicios de una línea."""
        query = select(Servicio.id).where(Servicio.linea_id == linea_id)
        return list(self.session.exec(query).all())

    def contar_pacientes_activos(self, servicio_id: str) -> int:
        """Cantidad de pacientes activos en el servicio."""
        query = select(func.count()).select_from(Paciente).where(
            Paciente.servicio_id == servicio_id,
            Paciente.estado == EstadoPacienteEnum.ACTIVO
        )
        return self.session.exec(query).first() or 0
