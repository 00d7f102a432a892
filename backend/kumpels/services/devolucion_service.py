"""
Servicio de Devoluciones Manuales.
Registro por enfermería y revisión por el regente de farmacia.
"""
from typing import Optional, List
from datetime import datetime
from sqlmodel import Session
import logging

from kumpels.models.usuario import Usuario, RolEnum
from kumpels.models.devolucion import CausaDevolucion, DevolucionManual, InsumoDevolucion
from kumpels.models.enums import EstadoDevolucionManualEnum
from kumpels.repositories.devolucion_repo import (
    CausaDevolucionRepository,
    DevolucionManualRepository,
)
from kumpels.repositories.paciente_repo import PacienteRepository
from kumpels.schemas.devolucion import (
    DevolucionManualCreate,
    DevolucionManualUpdate,
    InsumoDevolucionCreate,
)
from kumpels.core.exceptions import (
    ValidationError,
    InvalidStateError,
    NotFoundError,
    PermisoDenegadoError,
    PacienteNotFoundError,
)

logger = logging.getLogger("kumpels.devoluciones")

ROLES_REVISION = (RolEnum.REGENTE_FARMACIA, RolEnum.SUPERADMIN)
ESTADOS_REVISION = (
    EstadoDevolucionManualEnum.APROBADA,
    EstadoDevolucionManualEnum.RECHAZADA,
)


class DevolucionService:
    """
    Servicio para devoluciones manuales y su catálogo de causas.

    Una devolución nace PENDING. Solo el regente (o SUPERADMIN) la aprueba
    o rechaza; una vez revisada sus insumos ya no cambian.
    """

    def __init__(self, session: Session):
        self.session = session
        self.repo = DevolucionManualRepository(session)
        self.causa_repo = CausaDevolucionRepository(session)
        self.paciente_repo = PacienteRepository(session)

    def listar_causas(self) -> List[CausaDevolucion]:
        return self.causa_repo.listar_activas()

    def listar(
        self,
        paciente_id: Optional[str] = None,
        estado: Optional[EstadoDevolucionManualEnum] = None,
        generado_por: Optional[str] = None,
        revisado_por: Optional[str] = None,
    ) -> List[DevolucionManual]:
        return self.repo.listar(paciente_id, estado, generado_por, revisado_por)

    def obtener(self, devolucion_id: str) -> DevolucionManual:
        devolucion = self.repo.obtener_por_id(devolucion_id)
        if not devolucion:
            raise NotFoundError("Devolución manual", devolucion_id)
        return devolucion

    def crear(self, data: DevolucionManualCreate, usuario: Usuario) -> DevolucionManual:
        """
        Registra una devolución manual con sus insumos.

        Args:
            data: Paciente, causa, comentarios e insumos
            usuario: Usuario que la genera

        Raises:
            PacienteNotFoundError: Si el paciente no existe
            ValidationError: Si no hay insumos
        """
        if not self.paciente_repo.obtener_por_id(data.paciente_id):
            raise PacienteNotFoundError(data.paciente_id)
        if not data.insumos:
            raise ValidationError("La devolución debe incluir al menos un insumo")

        devolucion = DevolucionManual(
            paciente_id=data.paciente_id,
            generado_por=usuario.id,
            causa=data.causa,
            comentarios=data.comentarios,
            insumos=self._insumos(data.insumos),
        )
        devolucion = self.repo.guardar(devolucion)

        logger.info(
            f"Devolución manual {devolucion.id} registrada por {usuario.email} "
            f"con {len(data.insumos)} insumos"
        )
        return devolucion

    def actualizar(
        self,
        devolucion_id: str,
        data: DevolucionManualUpdate,
        usuario: Usuario
    ) -> DevolucionManual:
        """
        Revisa o modifica una devolución.

        Raises:
            PermisoDenegadoError: Si aprueba, rechaza o reabre un rol sin permiso
            InvalidStateError: Si cambia insumos de una devolución revisada
        """
        devolucion = self.obtener(devolucion_id)

        if data.insumos is not None:
            if devolucion.fue_revisada:
                raise InvalidStateError(
                    "No se pueden modificar los insumos de una devolución revisada"
                )
            if not data.insumos:
                raise ValidationError("La devolución debe incluir al menos un insumo")
            devolucion.insumos = self._insumos(data.insumos)

        if data.estado and data.estado != devolucion.estado:
            revision = data.estado in ESTADOS_REVISION or devolucion.fue_revisada
            if revision and usuario.rol not in ROLES_REVISION:
                logger.warning(
                    f"{usuario.email} ({usuario.rol.value}) intentó revisar la devolución {devolucion.id}"
                )
                raise PermisoDenegadoError(
                    "Solo el regente de farmacia puede revisar o reabrir devoluciones"
                )
            if data.estado in ESTADOS_REVISION:
                devolucion.revisado_por = usuario.id
                devolucion.fecha_aprobacion = datetime.utcnow()
            devolucion.estado = data.estado

        if data.causa is not None:
            devolucion.causa = data.causa
        if data.comentarios is not None:
            devolucion.comentarios = data.comentarios

        devolucion = self.repo.guardar(devolucion)
        logger.info(f"Devolución manual {devolucion.id} en estado {devolucion.estado.value}")
        return devolucion

    def eliminar(self, devolucion_id: str) -> None:
        devolucion = self.obtener(devolucion_id)
        self.repo.eliminar(devolucion)
        logger.info(f"Devolución manual {devolucion_id} eliminada")

    @staticmethod
    def _insumos(insumos: List[InsumoDevolucionCreate]) -> List[InsumoDevolucion]:
        return [InsumoDevolucion(**insumo.model_dump()) for insumo in insumos]
