"""
Servicio de Procesos Diarios.
Inicio, actualización y reinicio de la jornada de dispensación.
"""
from typing import Optional, List
from dataclasses import dataclass
from datetime import datetime
from sqlmodel import Session, select
import logging

from kumpels.models.usuario import Usuario, RolEnum
from kumpels.models.proceso_diario import ProcesoDiario
from kumpels.models.proceso_medicacion import ProcesoMedicacion
from kumpels.models.codigo_qr import RegistroEscaneoQR
from kumpels.models.registro_error import RegistroErrorProceso
from kumpels.models.enums import EstadoProcesoDiarioEnum, PasoProcesoEnum
from kumpels.repositories.proceso_repo import (
    ProcesoDiarioRepository,
    ProcesoMedicacionRepository,
)
from kumpels.schemas.proceso import ProcesoDiarioCreate, ProcesoDiarioUpdate
from kumpels.utils.fechas import inicio_del_dia
from kumpels.core.exceptions import (
    ValidationError,
    ConflictError,
    InvalidStateError,
    PermisoDenegadoError,
    ProcesoDiarioNotFoundError,
)

logger = logging.getLogger("kumpels.procesos_diarios")

ROLES_GESTION = (RolEnum.REGENTE_FARMACIA, RolEnum.SUPERADMIN)


@dataclass
class ResultadoReinicio:
    """Cantidades eliminadas al reiniciar."""
    procesos_diarios: int
    procesos_medicacion: int
    escaneos_qr: int


class ProcesoDiarioService:
    """
    Servicio para procesos diarios.

    Solo el regente de farmacia (o SUPERADMIN) inicia, modifica o reinicia
    procesos diarios. Hay a lo sumo un proceso diario por día calendario.
    """

    def __init__(self, session: Session):
        self.session = session
        self.repo = ProcesoDiarioRepository(session)
        self.proceso_repo = ProcesoMedicacionRepository(session)

    def listar(
        self,
        fecha: Optional[datetime] = None,
        estado: Optional[EstadoProcesoDiarioEnum] = None,
        iniciado_por: Optional[str] = None,
    ) -> List[ProcesoDiario]:
        return self.repo.listar(fecha, estado, iniciado_por)

    def obtener(self, proceso_diario_id: str) -> ProcesoDiario:
        proceso = self.repo.obtener_por_id(proceso_diario_id)
        if not proceso:
            raise ProcesoDiarioNotFoundError(proceso_diario_id)
        return proceso

    def obtener_activo_hoy(self) -> Optional[ProcesoDiario]:
        """Proceso diario ACTIVO de hoy, si existe."""
        return self.repo.obtener_activo_del_dia()

    def contar_procesos(self, proceso_diario_id: str) -> int:
        return self.proceso_repo.contar_por_proceso_diario(proceso_diario_id)

    def crear(self, data: ProcesoDiarioCreate, usuario: Usuario) -> ProcesoDiario:
        """
        Inicia el proceso diario de una fecha.

        Args:
            data: Fecha y notas
            usuario: Usuario que lo inicia

        Returns:
            El proceso diario en estado ACTIVE

        Raises:
            PermisoDenegadoError: Si el rol no es regente ni SUPERADMIN
            ValidationError: Si no se indica fecha
            ConflictError: Si ya existe un proceso diario ese día
        """
        self._verificar_rol(usuario, "iniciar procesos diarios")

        if not data.fecha:
            raise ValidationError("La fecha es obligatoria")

        fecha = inicio_del_dia(data.fecha)
        if self.repo.obtener_por_fecha(fecha):
            raise ConflictError(
                f"Ya existe un proceso diario para {fecha.date().isoformat()}"
            )

        proceso = self.repo.guardar(ProcesoDiario(
            fecha=fecha,
            iniciado_por=usuario.id,
            notas=data.notas,
            estado=EstadoProcesoDiarioEnum.ACTIVO,
        ))
        logger.info(f"Proceso diario {fecha.date()} iniciado por {usuario.email}")
        return proceso

    def actualizar(
        self,
        proceso_diario_id: str,
        data: ProcesoDiarioUpdate,
        usuario: Usuario
    ) -> ProcesoDiario:
        """
        Cambia estado o notas de un proceso diario.

        Completar registra la hora de cierre. No se puede cancelar un
        proceso diario con algún predespacho ya completado.
        """
        self._verificar_rol(usuario, "modificar procesos diarios")
        proceso = self.obtener(proceso_diario_id)

        if data.estado == EstadoProcesoDiarioEnum.CANCELADO:
            if self.proceso_repo.existe_completado(proceso.id, PasoProcesoEnum.PREDESPACHO):
                raise InvalidStateError(
                    "No se puede cancelar un proceso diario con predespachos completados"
                )

        if data.estado:
            proceso.estado = data.estado
            if data.estado == EstadoProcesoDiarioEnum.COMPLETADO and not data.completado_en:
                proceso.completado_en = proceso.completado_en or datetime.utcnow()
        if data.completado_en:
            proceso.completado_en = data.completado_en
        if data.notas is not None:
            proceso.notas = data.notas

        proceso = self.repo.guardar(proceso)
        logger.info(f"Proceso diario {proceso.id} actualizado a {proceso.estado.value}")
        return proceso

    def reiniciar(self, usuario: Usuario) -> ResultadoReinicio:
        """Reinicio desde la API; exige rol de regente o SUPERADMIN."""
        self._verificar_rol(usuario, "reiniciar procesos diarios")
        resultado = self.eliminar_procesos()
        logger.warning(f"Procesos reiniciados por {usuario.email}: {resultado}")
        return resultado

    def eliminar_procesos(self) -> ResultadoReinicio:
        """
        Elimina todos los procesos diarios y de medicación.

        En una sola transacción borra los escaneos ligados a procesos
        diarios, los procesos de medicación y los procesos diarios. Los
        registros de error se conservan desvinculados de su proceso.
        """
        escaneos = self.session.exec(
            select(RegistroEscaneoQR).where(RegistroEscaneoQR.proceso_diario_id.is_not(None))
        ).all()
        procesos = self.session.exec(select(ProcesoMedicacion)).all()
        registros = self.session.exec(
            select(RegistroErrorProceso).where(RegistroErrorProceso.proceso_medicacion_id.is_not(None))
        ).all()
        diarios = self.session.exec(select(ProcesoDiario)).all()

        try:
            for registro in registros:
                registro.proceso_medicacion_id = None
                self.session.add(registro)
            for escaneo in escaneos:
                self.session.delete(escaneo)
            self.session.flush()
            for proceso in procesos:
                self.session.delete(proceso)
            self.session.flush()
            for diario in diarios:
                self.session.delete(diario)
            self.session.commit()
        except Exception:
            self.session.rollback()
            logger.error("Error reiniciando procesos diarios", exc_info=True)
            raise

        return ResultadoReinicio(
            procesos_diarios=len(diarios),
            procesos_medicacion=len(procesos),
            escaneos_qr=len(escaneos),
        )

    def obtener_o_crear_hoy(self, usuario: Usuario) -> ProcesoDiario:
        """
        Proceso diario de hoy; si no existe, lo crea como ACTIVE a nombre
        del usuario sin verificar su rol.
        """
        hoy = inicio_del_dia()
        proceso = self.repo.obtener_por_fecha(hoy)
        if proceso:
            return proceso

        proceso = self.repo.guardar(ProcesoDiario(
            fecha=hoy,
            iniciado_por=usuario.id,
            estado=EstadoProcesoDiarioEnum.ACTIVO,
        ))
        logger.info(f"Proceso diario {hoy.date()} creado automáticamente por {usuario.email}")
        return proceso

    @staticmethod
    def _verificar_rol(usuario: Usuario, accion: str) -> None:
        if usuario.rol not in ROLES_GESTION:
            logger.warning(f"{usuario.email} ({usuario.rol.value}) intentó {accion}")
            raise PermisoDenegadoError(
                f"Solo el regente de farmacia puede {accion}"
            )
