"""
Repository de Paciente.
"""
from typing import Optional, List
from sqlmodel import Session, select, or_, func

from kumpels.repositories.base import BaseRepository
from kumpels.models.paciente import Paciente
from kumpels.models.cama import Cama
from kumpels.models.linea import Linea
from kumpels.models.servicio import Servicio
from kumpels.models.enums import EstadoPacienteEnum, NombreLineaEnum


class PacienteRepository(BaseRepository[Paciente]):
    """Repository para operaciones de pacientes."""

    def __init__(self, session: Session):
        super().__init__(session, Paciente)

    def obtener_por_id_externo(self, id_externo: str) -> Optional[Paciente]:
        """
        Obtiene un paciente por su identificador externo.

        Args:
            id_externo: Documento o identificador del sistema clínico

        Returns:
            El paciente o None
        """
        query = select(Paciente).where(Paciente.id_externo == id_externo)
        return self.session.exec(query).first()

    def listar(
        self,
        linea: Optional[NombreLineaEnum] = None,
        cama_id: Optional[str] = None,
        estado: Optional[EstadoPacienteEnum] = None,
        busqueda: Optional[str] = None,
    ) -> List[Paciente]:
        """
        Lista pacientes con filtros combinables.

        Args:
            linea: Código de la línea de la cama (LINE_n)
            cama_id: Filtrar por cama
            estado: Filtrar por estado de hospitalización
            busqueda: Texto buscado sin distinguir mayúsculas en nombre,
                apellido, identificador externo e historia clínica

        Returns:
            Pacientes ordenados por fecha de ingreso descendente
        """
        query = select(Paciente)

        if linea:
            query = (
                query.join(Cama, Paciente.cama_id == Cama.id)
                .join(Linea, Cama.linea_id == Linea.id)
                .where(Linea.nombre == linea)
            )
        if cama_id:
            query = query.where(Paciente.cama_id == cama_id)
        if estado:
            query = query.where(Paciente.estado == estado)
        if busqueda:
            patron = f"%{busqueda.lower()}%"
            query = query.where(
                or_(
                    func.lower(Paciente.nombre).like(patron),
                    func.lower(Paciente.apellido).like(patron),
                    func.lower(Paciente.id_externo).like(patron),
                    func.lower(Paciente.historia_clinica).like(patron),
                )
            )

        query = query.order_by(Paciente.fecha_ingreso.desc())
        return list(self.session.exec(query).all())

    def listar_por_servicios(self, servicio_ids: List[str]) -> List[Paciente]:
        """Pacientes de un conjunto de servicios, en cualquier estado."""
        if not servicio_ids:
            return []
        query = select(Paciente).where(Paciente.servicio_id.in_(servicio_ids))
        return list(self.session.exec(query).all())

    def listar_activos_por_servicios(self, servicio_ids: List[str]) -> List[Paciente]:
        """Pacientes activos de un conjunto de servicios."""
        if not servicio_ids:
            return []
        query = select(Paciente).where(
            Paciente.servicio_id.in_(servicio_ids),
            Paciente.estado == EstadoPacienteEnum.ACTIVO
        )
        return list(self.session.exec(query).all())

    def listar_activos_en_alcance(
        self,
        linea_id: Optional[str] = None,
        servicio_id: Optional[str] = None,
    ) -> List[Paciente]:
        """
        Pacientes activos de una línea (por cama o por servicio) y/o servicio.

        Args:
            linea_id: ID de línea
            servicio_id: ID de servicio

        Returns:
            Lista de pacientes activos
        """
        query = select(Paciente).where(Paciente.estado == EstadoPacienteEnum.ACTIVO)
        if linea_id:
            camas_linea = select(Cama.id).where(Cama.linea_id == linea_id)
            servicios_linea = select(Servicio.id).where(Servicio.linea_id == linea_id)
            query = query.where(
                or_(
                    Paciente.cama_id.in_(camas_linea),
                    Paciente.servicio_id.in_(servicios_linea),
                )
            )
        if servicio_id:
            query = query.where(Paciente.servicio_id == servicio_id)
        return list(self.session.exec(query).all())
