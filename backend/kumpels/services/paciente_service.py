"""
Servicio de Pacientes.
Registro, actualización, consulta y eliminación de pacientes.
"""
from typing import Optional, List
from sqlmodel import Session
import logging

from kumpels.models.paciente import Paciente
from kumpels.models.codigo_qr import RegistroEscaneoQR
from kumpels.models.enums import EstadoPacienteEnum, NombreLineaEnum
from kumpels.repositories.paciente_repo import PacienteRepository
from kumpels.repositories.cama_repo import CamaRepository
from kumpels.repositories.linea_repo import ServicioRepository
from kumpels.repositories.proceso_repo import ProcesoMedicacionRepository
from kumpels.repositories.codigo_qr_repo import RegistroEscaneoRepository
from kumpels.repositories.devolucion_repo import DevolucionManualRepository
from kumpels.repositories.registro_error_repo import RegistroErrorRepository
from kumpels.schemas.paciente import PacienteCreate, PacienteUpdate
from kumpels.core.exceptions import (
    ValidationError,
    ConflictError,
    CamaOcupadaError,
    PacienteNotFoundError,
    CamaNotFoundError,
    ServicioNotFoundError,
)

logger = logging.getLogger("kumpels.pacientes")

CAMPOS_OBLIGATORIOS = (
    "id_externo",
    "nombre",
    "apellido",
    "fecha_nacimiento",
    "genero",
    "cama_id",
    "servicio_id",
)


class PacienteService:
    """
    Servicio para gestión de pacientes.

    Maneja:
    - Ingreso con validación de cama y servicio
    - Actualización parcial y cambio de cama
    - Eliminación con todos sus registros asociados
    """

    def __init__(self, session: Session):
        self.session = session
        self.paciente_repo = PacienteRepository(session)
        self.cama_repo = CamaRepository(session)
        self.servicio_repo = ServicioRepository(session)

    def listar(
        self,
        linea: Optional[NombreLineaEnum] = None,
        cama_id: Optional[str] = None,
        estado: Optional[EstadoPacienteEnum] = None,
        busqueda: Optional[str] = None,
    ) -> List[Paciente]:
        return self.paciente_repo.listar(linea, cama_id, estado, busqueda)

    def obtener(self, paciente_id: str) -> Paciente:
        """
        Obtiene un paciente.

        Raises:
            PacienteNotFoundError: Si no existe
        """
        paciente = self.paciente_repo.obtener_por_id(paciente_id)
        if not paciente:
            raise PacienteNotFoundError(paciente_id)
        return paciente

    def crear(self, data: PacienteCreate) -> Paciente:
        """
        Registra el ingreso de un paciente.

        Args:
            data: Datos del paciente

        Returns:
            El paciente creado en estado ACTIVE

        Raises:
            ValidationError: Si falta un campo obligatorio
            ConflictError: Si el identificador externo ya existe o la cama
                está ocupada
            CamaNotFoundError / ServicioNotFoundError: Si no existen
        """
        faltantes = [c for c in CAMPOS_OBLIGATORIOS if not getattr(data, c)]
        if faltantes:
            raise ValidationError(f"Faltan campos obligatorios: {', '.join(faltantes)}")

        if self.paciente_repo.obtener_por_id_externo(data.id_externo):
            raise ConflictError(
                f"Ya existe un paciente con identificador {data.id_externo}"
            )

        self._validar_cama(data.cama_id)
        self._validar_servicio(data.servicio_id)

        valores = data.model_dump(exclude_none=True)
        paciente = self.paciente_repo.crear_desde_dict(valores)

        logger.info(f"Paciente {paciente.nombre_completo} ingresado en cama {paciente.cama_id}")
        return paciente

    def actualizar(self, paciente_id: str, data: PacienteUpdate) -> Paciente:
        """
        Actualiza un paciente con los campos enviados.

        Al cambiar de cama o volver a ACTIVE se verifica que la cama exista
        y no tenga otro paciente activo.
        """
        paciente = self.obtener(paciente_id)
        cambios = data.model_dump(exclude_unset=True)

        id_externo = cambios.get("id_externo")
        if id_externo and id_externo != paciente.id_externo:
            existente = self.paciente_repo.obtener_por_id_externo(id_externo)
            if existente and existente.id != paciente.id:
                raise ConflictError(
                    f"Ya existe un paciente con identificador {id_externo}"
                )

        cama_id = cambios.get("cama_id")
        cambia_cama = bool(cama_id) and cama_id != paciente.cama_id
        estado = cambios.get("estado") or paciente.estado
        cambia_estado = estado != paciente.estado
        if estado == EstadoPacienteEnum.ACTIVO and (cambia_cama or cambia_estado):
            self._validar_cama(cama_id or paciente.cama_id, excluir_paciente_id=paciente.id)
        elif cambia_cama:
            self._validar_cama(cama_id, excluir_paciente_id=paciente.id)

        servicio_id = cambios.get("servicio_id")
        if servicio_id and servicio_id != paciente.servicio_id:
            self._validar_servicio(servicio_id)

        for campo, valor in cambios.items():
            if valor is None and campo in CAMPOS_OBLIGATORIOS:
                continue
            setattr(paciente, campo, valor)

        paciente = self.paciente_repo.guardar(paciente)
        logger.info(f"Paciente {paciente.id} actualizado: {', '.join(cambios)}")
        return paciente

    def eliminar(self, paciente_id: str) -> None:
        """
        Elimina un paciente junto a sus procesos, escaneos, devoluciones
        manuales y registros de error.
        """
        paciente = self.obtener(paciente_id)

        registros = RegistroErrorRepository(self.session).listar(
            paciente_id=paciente_id, incluir_resueltos=True
        )
        escaneos = RegistroEscaneoRepository(self.session).listar_por_paciente(paciente_id)
        devoluciones = DevolucionManualRepository(self.session).listar(paciente_id=paciente_id)
        procesos = ProcesoMedicacionRepository(self.session).listar(paciente_id=paciente_id)

        for obj in [*registros, *escaneos, *devoluciones]:
            self.session.delete(obj)
        self.session.flush()
        for proceso in procesos:
            self.session.delete(proceso)
        self.session.flush()

        self.session.delete(paciente)
        self.session.commit()

        logger.info(
            f"Paciente {paciente_id} eliminado con {len(procesos)} procesos "
            f"y {len(escaneos)} escaneos"
        )

    def listar_escaneos_qr(self, paciente_id: str) -> List[RegistroEscaneoQR]:
        """Escaneos del paciente en orden cronológico."""
        self.obtener(paciente_id)
        return RegistroEscaneoRepository(self.session).listar_por_paciente(paciente_id)

    # ============================================
    # VALIDACIONES
    # ============================================

    def _validar_cama(self, cama_id: str, excluir_paciente_id: Optional[str] = None) -> None:
        cama = self.cama_repo.obtener_por_id(cama_id)
        if not cama:
            raise CamaNotFoundError(cama_id)
        if self.cama_repo.obtener_paciente_activo(cama_id, excluir_paciente_id):
            raise CamaOcupadaError(cama.numero)

    def _validar_servicio(self, servicio_id: str) -> None:
        if not self.servicio_repo.obtener_por_id(servicio_id):
            raise ServicioNotFoundError(servicio_id)
