"""
Servicio de Procesos de Medicación.
Creación y transiciones manuales de estado de cada paso del proceso.
"""
from typing import Optional, List
from datetime import datetime
from sqlmodel import Session
import logging

from kumpels.models.usuario import Usuario, RolEnum
from kumpels.models.proceso_medicacion import ProcesoMedicacion
from kumpels.models.enums import (
    EstadoProcesoEnum,
    PasoProcesoEnum,
    nombre_paso,
    nombre_estado,
)
from kumpels.repositories.proceso_repo import (
    ProcesoDiarioRepository,
    ProcesoMedicacionRepository,
)
from kumpels.repositories.paciente_repo import PacienteRepository
from kumpels.schemas.proceso import ProcesoMedicacionCreate, ProcesoMedicacionUpdate
from kumpels.services.permisos_proceso import puede_realizar_accion, es_transicion_valida
from kumpels.core.exceptions import (
    ConflictError,
    PermisoDenegadoError,
    TransicionInvalidaError,
    PacienteNotFoundError,
    ProcesoDiarioNotFoundError,
    ProcesoMedicacionNotFoundError,
)

logger = logging.getLogger("kumpels.procesos")


class ProcesoMedicacionService:
    """
    Servicio para procesos de medicación.

    Cada paciente tiene a lo sumo un proceso por paso y proceso diario.
    Los cambios manuales de estado siguen la tabla de transiciones; el
    SUPERADMIN puede forzar cualquier cambio.
    """

    def __init__(self, session: Session):
        self.session = session
        self.repo = ProcesoMedicacionRepository(session)
        self.paciente_repo = PacienteRepository(session)
        self.diario_repo = ProcesoDiarioRepository(session)

    def listar(
        self,
        paciente_id: Optional[str] = None,
        paso: Optional[PasoProcesoEnum] = None,
        estado: Optional[EstadoProcesoEnum] = None,
        proceso_diario_id: Optional[str] = None,
    ) -> List[ProcesoMedicacion]:
        return self.repo.listar(paciente_id, paso, estado, proceso_diario_id)

    def obtener(self, proceso_id: str) -> ProcesoMedicacion:
        proceso = self.repo.obtener_por_id(proceso_id)
        if not proceso:
            raise ProcesoMedicacionNotFoundError(proceso_id)
        return proceso

    def crear(self, data: ProcesoMedicacionCreate) -> ProcesoMedicacion:
        """
        Crea un proceso PENDING para un paciente y paso.

        Raises:
            PacienteNotFoundError / ProcesoDiarioNotFoundError: Si no existen
            ConflictError: Si ya hay un proceso para ese paciente, paso y
                proceso diario
        """
        if not self.paciente_repo.obtener_por_id(data.paciente_id):
            raise PacienteNotFoundError(data.paciente_id)

        if data.proceso_diario_id and not self.diario_repo.obtener_por_id(data.proceso_diario_id):
            raise ProcesoDiarioNotFoundError(data.proceso_diario_id)

        if self.repo.obtener_por_clave(data.paciente_id, data.paso, data.proceso_diario_id):
            raise ConflictError(
                f"Ya existe un proceso de {nombre_paso(data.paso)} para este paciente"
            )

        proceso = self.repo.guardar(ProcesoMedicacion(
            paciente_id=data.paciente_id,
            paso=data.paso,
            proceso_diario_id=data.proceso_diario_id,
            notas=data.notas,
            estado=EstadoProcesoEnum.PENDIENTE,
        ))
        logger.info(f"Proceso {data.paso.value} creado para paciente {data.paciente_id}")
        return proceso

    def actualizar(
        self,
        proceso_id: str,
        data: ProcesoMedicacionUpdate,
        usuario: Usuario
    ) -> ProcesoMedicacion:
        """
        Cambia el estado y/o las notas de un proceso.

        Args:
            proceso_id: ID del proceso
            data: Nuevo estado y/o notas
            usuario: Usuario que realiza el cambio

        Returns:
            El proceso actualizado

        Raises:
            PermisoDenegadoError: Si el rol no opera este paso
            TransicionInvalidaError: Si el cambio de estado no está permitido
        """
        proceso = self.obtener(proceso_id)

        accion = "completar" if data.estado == EstadoProcesoEnum.COMPLETADO else "iniciar"
        if not puede_realizar_accion(proceso.paso, usuario.rol, accion):
            logger.warning(
                f"{usuario.email} ({usuario.rol.value}) sin permiso sobre {proceso.paso.value}"
            )
            raise PermisoDenegadoError(
                f"Tu rol no puede modificar el paso {nombre_paso(proceso.paso)}"
            )

        if data.estado and data.estado != proceso.estado:
            es_superadmin = usuario.rol == RolEnum.SUPERADMIN
            if not es_superadmin and not es_transicion_valida(proceso.estado, data.estado):
                raise TransicionInvalidaError(
                    nombre_estado(proceso.estado), nombre_estado(data.estado)
                )
            self._aplicar_estado(proceso, data.estado, usuario)

        if data.notas is not None:
            proceso.notas = data.notas

        proceso = self.repo.guardar(proceso)
        logger.info(f"Proceso {proceso.id} ({proceso.paso.value}) en {proceso.estado.value}")
        return proceso

    def eliminar(self, proceso_id: str, usuario: Usuario) -> None:
        """Elimina un proceso (solo SUPERADMIN)."""
        if usuario.rol != RolEnum.SUPERADMIN:
            raise PermisoDenegadoError("Solo el SUPERADMIN puede eliminar procesos")
        proceso = self.obtener(proceso_id)
        for registro in proceso.registros_error:
            registro.proceso_medicacion_id = None
            self.session.add(registro)
        self.repo.eliminar(proceso)
        logger.info(f"Proceso {proceso_id} eliminado por {usuario.email}")

    @staticmethod
    def _aplicar_estado(
        proceso: ProcesoMedicacion,
        estado: EstadoProcesoEnum,
        usuario: Usuario
    ) -> None:
        """Asigna el estado y marca inicio y cierre la primera vez."""
        ahora = datetime.utcnow()
        proceso.estado = estado
        if estado == EstadoProcesoEnum.EN_PROGRESO and not proceso.iniciado_en:
            proceso.iniciado_en = ahora
            proceso.iniciado_por = usuario.id
        if estado == EstadoProcesoEnum.COMPLETADO and not proceso.completado_en:
            proceso.completado_en = ahora
            proceso.completado_por = usuario.id
