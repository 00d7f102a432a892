"""
Servicio de Infraestructura.
Consulta de líneas, servicios y camas, y alta de camas.
"""
from typing import Optional, List
from sqlmodel import Session
import logging

from kumpels.models.cama import Cama
from kumpels.repositories.linea_repo import LineaRepository, ServicioRepository
from kumpels.repositories.cama_repo import CamaRepository
from kumpels.schemas.infraestructura import (
    LineaResponse,
    LineaBasica,
    ServicioBasico,
    ServicioResponse,
    CamaEnLinea,
    CamaResponse,
    PacienteEnCama,
    CamaCreate,
)
from kumpels.core.exceptions import (
    ValidationError,
    ConflictError,
    LineaNotFoundError,
)

logger = logging.getLogger("kumpels.infraestructura")


class InfraestructuraService:
    """
    Servicio para líneas, servicios y camas.

    Las listas solo incluyen registros activos.
    """

    def __init__(self, session: Session):
        self.session = session
        self.linea_repo = LineaRepository(session)
        self.servicio_repo = ServicioRepository(session)
        self.cama_repo = CamaRepository(session)

    # ============================================
    # LÍNEAS
    # ============================================

    def listar_lineas(self) -> List[LineaResponse]:
        """
        Líneas activas con sus servicios y camas activas.

        Returns:
            Líneas por nombre visible, servicios por nombre y camas por número
        """
        resultado = []
        for linea in self.linea_repo.listar_activas():
            servicios = sorted(
                (s for s in linea.servicios if s.activo),
                key=lambda s: s.nombre
            )
            camas = sorted(
                (c for c in linea.camas if c.activa),
                key=lambda c: c.numero
            )
            resultado.append(LineaResponse(
                id=linea.id,
                nombre=linea.nombre,
                nombre_visible=linea.nombre_visible,
                descripcion=linea.descripcion,
                activa=linea.activa,
                servicios=[ServicioBasico.model_validate(s) for s in servicios],
                camas=[CamaEnLinea.model_validate(c) for c in camas],
                created_at=linea.created_at,
                updated_at=linea.updated_at,
            ))
        return resultado

    # ============================================
    # SERVICIOS
    # ============================================

    def listar_servicios(self, linea_id: Optional[str] = None) -> List[ServicioResponse]:
        """
        Servicios activos con su línea y cantidad de pacientes activos.

        Args:
            linea_id: Filtrar por línea
        """
        return [
            ServicioResponse(
                id=servicio.id,
                nombre=servicio.nombre,
                descripcion=servicio.descripcion,
                linea_id=servicio.linea_id,
                activo=servicio.activo,
                linea=LineaBasica.model_validate(servicio.linea),
                pacientes_activos=self.servicio_repo.contar_pacientes_activos(servicio.id),
            )
            for servicio in self.servicio_repo.listar_activos(linea_id)
        ]

    # ============================================
    # CAMAS
    # ============================================

    def listar_camas(
        self,
        linea_id: Optional[str] = None,
        disponible: Optional[bool] = None
    ) -> List[CamaResponse]:
        """
        Camas activas con su línea y su paciente activo.

        Args:
            linea_id: Filtrar por línea
            disponible: Si True, solo camas sin paciente activo
        """
        camas = self.cama_repo.listar(linea_id, solo_disponibles=bool(disponible))
        return [self._cama_a_response(cama) for cama in camas]

    def crear_cama(self, data: CamaCreate) -> CamaResponse:
        """
        Crea una cama en una línea.

        Raises:
            ValidationError: Si falta número o línea
            LineaNotFoundError: Si la línea no existe
            ConflictError: Si ya existe ese número en la línea
        """
        if not data.numero or not data.linea_id:
            raise ValidationError("El número de cama y la línea son obligatorios")

        linea = self.linea_repo.obtener_por_id(data.linea_id)
        if not linea:
            raise LineaNotFoundError(data.linea_id)

        if self.cama_repo.obtener_por_linea_y_numero(data.linea_id, data.numero):
            raise ConflictError(
                f"Ya existe una cama con número {data.numero} en esta línea"
            )

        cama = self.cama_repo.guardar(Cama(numero=data.numero, linea_id=data.linea_id))
        logger.info(f"Cama {cama.numero} creada en {linea.nombre_visible}")
        return self._cama_a_response(cama)

    @staticmethod
    def _cama_a_response(cama: Cama) -> CamaResponse:
        paciente = cama.paciente_activo
        return CamaResponse(
            id=cama.id,
            numero=cama.numero,
            linea_id=cama.linea_id,
            activa=cama.activa,
            linea=LineaBasica.model_validate(cama.linea),
            paciente=PacienteEnCama.model_validate(paciente) if paciente else None,
            created_at=cama.created_at,
            updated_at=cama.updated_at,
        )
