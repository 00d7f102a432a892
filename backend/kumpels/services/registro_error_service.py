"""
Servicio de Registros de Error de Proceso.
"""
from typing import Optional, List
from datetime import datetime
from sqlmodel import Session
import logging

from kumpels.models.usuario import Usuario
from kumpels.models.registro_error import RegistroErrorProceso
from kumpels.models.enums import PasoProcesoEnum, TipoRegistroEnum
from kumpels.repositories.registro_error_repo import RegistroErrorRepository
from kumpels.repositories.paciente_repo import PacienteRepository
from kumpels.repositories.proceso_repo import ProcesoMedicacionRepository
from kumpels.schemas.registro_error import RegistroErrorCreate, RegistroErrorUpdate
from kumpels.core.exceptions import (
    ValidationError,
    NotFoundError,
    PacienteNotFoundError,
    ProcesoMedicacionNotFoundError,
)

logger = logging.getLogger("kumpels.errores_proceso")


class RegistroErrorService:
    """Reportes de error, advertencia o información sobre un paso."""

    def __init__(self, session: Session):
        self.session = session
        self.repo = RegistroErrorRepository(session)
        self.paciente_repo = PacienteRepository(session)
        self.proceso_repo = ProcesoMedicacionRepository(session)

    def listar(
        self,
        paciente_id: Optional[str] = None,
        proceso_medicacion_id: Optional[str] = None,
        paso: Optional[PasoProcesoEnum] = None,
        tipo: Optional[TipoRegistroEnum] = None,
        incluir_resueltos: bool = False,
    ) -> List[RegistroErrorProceso]:
        return self.repo.listar(paciente_id, proceso_medicacion_id, paso, tipo, incluir_resueltos)

    def obtener(self, registro_id: str) -> RegistroErrorProceso:
        registro = self.repo.obtener_por_id(registro_id)
        if not registro:
            raise NotFoundError("Registro de error", registro_id)
        return registro

    def crear(self, data: RegistroErrorCreate, usuario: Usuario) -> RegistroErrorProceso:
        """
        Reporta un registro a nombre del usuario, guardando su rol.

        Raises:
            ValidationError: Si el mensaje está vacío
            PacienteNotFoundError / ProcesoMedicacionNotFoundError: Si no existen
        """
        mensaje = (data.mensaje or "").strip()
        if not mensaje:
            raise ValidationError("El mensaje es obligatorio")

        if not self.paciente_repo.obtener_por_id(data.paciente_id):
            raise PacienteNotFoundError(data.paciente_id)
        if data.proceso_medicacion_id and not self.proceso_repo.obtener_por_id(data.proceso_medicacion_id):
            raise ProcesoMedicacionNotFoundError(data.proceso_medicacion_id)

        registro = self.repo.guardar(RegistroErrorProceso(
            paciente_id=data.paciente_id,
            proceso_medicacion_id=data.proceso_medicacion_id,
            paso=data.paso,
            tipo=data.tipo,
            mensaje=mensaje,
            reportado_por=usuario.id,
            rol_reportante=usuario.rol.value,
        ))
        logger.info(
            f"{data.tipo.value} reportado en {data.paso.value} para paciente "
            f"{data.paciente_id} por {usuario.email}"
        )
        return registro

    def actualizar(
        self,
        registro_id: str,
        data: RegistroErrorUpdate,
        usuario: Usuario
    ) -> RegistroErrorProceso:
        """Resolver marca fecha y usuario; reabrir los limpia."""
        registro = self.obtener(registro_id)

        if data.resuelto is True and not registro.esta_resuelto:
            registro.resuelto_en = datetime.utcnow()
            registro.resuelto_por = usuario.id
        elif data.resuelto is False:
            registro.resuelto_en = None
            registro.resuelto_por = None

        if data.mensaje is not None:
            if not data.mensaje.strip():
                raise ValidationError("El mensaje es obligatorio")
            registro.mensaje = data.mensaje.strip()

        return self.repo.guardar(registro)

    def eliminar(self, registro_id: str) -> None:
        self.repo.eliminar(self.obtener(registro_id))
        logger.info(f"Registro de error {registro_id} eliminado")
