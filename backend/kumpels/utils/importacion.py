"""
Importación de pacientes desde CSV.

Columnas esperadas (encabezado obligatorio):
    id_externo, nombre, apellido, fecha_nacimiento, genero, fecha_ingreso,
    linea, cama, servicio, historia_clinica, notas

``linea`` es el código LINE_n y ``cama`` el número dentro de esa línea.
``servicio`` es opcional; si falta se usa el primer servicio activo de la
línea. Los pacientes se crean o actualizan por ``id_externo``.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional
import csv
import io
import logging

from sqlmodel import Session

from kumpels.models.paciente import Paciente
from kumpels.models.enums import GeneroEnum, NombreLineaEnum
from kumpels.repositories.linea_repo import LineaRepository, ServicioRepository
from kumpels.repositories.cama_repo import CamaRepository
from kumpels.repositories.paciente_repo import PacienteRepository
from kumpels.core.exceptions import ValidationError, NotFoundError, CamaOcupadaError

logger = logging.getLogger("kumpels.importacion")

GENEROS = {
    "M": GeneroEnum.MASCULINO,
    "MALE": GeneroEnum.MASCULINO,
    "MASCULINO": GeneroEnum.MASCULINO,
    "F": GeneroEnum.FEMENINO,
    "FEMALE": GeneroEnum.FEMENINO,
    "FEMENINO": GeneroEnum.FEMENINO,
    "OTHER": GeneroEnum.OTRO,
    "OTRO": GeneroEnum.OTRO,
}


@dataclass
class ResumenImportacion:
    creados: int = 0
    actualizados: int = 0
    errores: List[str] = field(default_factory=list)

    @property
    def procesados(self) -> int:
        return self.creados + self.actualizados + len(self.errores)


def _fecha(valor: Optional[str], campo: str) -> datetime:
    try:
        return datetime.fromisoformat((valor or "").strip())
    except ValueError:
        raise ValidationError(f"Fecha inválida en {campo}: {valor!r}")


def _genero(valor: Optional[str]) -> GeneroEnum:
    genero = GENEROS.get((valor or "").strip().upper())
    if not genero:
        raise ValidationError(f"Género inválido: {valor!r}")
    return genero


class ImportadorPacientes:
    """Crea o actualiza pacientes fila por fila; una fila con error no detiene el resto."""

    def __init__(self, session: Session):
        self.session = session
        self.linea_repo = LineaRepository(session)
        self.servicio_repo = ServicioRepository(session)
        self.cama_repo = CamaRepository(session)
        self.paciente_repo = PacienteRepository(session)

    def importar_texto(self, contenido: str) -> ResumenImportacion:
        return self.importar(csv.DictReader(io.StringIO(contenido)))

    def importar(self, filas: Iterable[dict]) -> ResumenImportacion:
        resumen = ResumenImportacion()
        for numero, fila in enumerate(filas, start=2):
            id_externo = (fila.get("id_externo") or "").strip()
            try:
                if not id_externo:
                    raise ValidationError("id_externo es obligatorio")
                creado = self._importar_fila(id_externo, fila)
                self.session.commit()
            except (ValidationError, NotFoundError, CamaOcupadaError) as e:
                self.session.rollback()
                resumen.errores.append(f"Fila {numero} ({id_externo or '-'}): {e.message}")
                logger.warning(f"Fila {numero} omitida: {e.message}")
                continue

            if creado:
                resumen.creados += 1
            else:
                resumen.actualizados += 1

        logger.info(
            f"Importación terminada: {resumen.creados} creados, "
            f"{resumen.actualizados} actualizados, {len(resumen.errores)} errores"
        )
        return resumen

    def _importar_fila(self, id_externo: str, fila: dict) -> bool:
        """Retorna True si el paciente es nuevo."""
        codigo_linea = (fila.get("linea") or "").strip()
        try:
            linea = self.linea_repo.obtener_por_nombre(NombreLineaEnum(codigo_linea))
        except ValueError:
            linea = None
        if not linea:
            raise NotFoundError("Línea", codigo_linea)

        numero_cama = (fila.get("cama") or "").strip()
        cama = self.cama_repo.obtener_por_linea_y_numero(linea.id, numero_cama)
        if not cama:
            raise NotFoundError("Cama", f"{numero_cama} en {codigo_linea}")

        nombre_servicio = (fila.get("servicio") or "").strip()
        if nombre_servicio:
            servicio = self.servicio_repo.obtener_por_nombre(nombre_servicio)
        else:
            servicios = self.servicio_repo.listar_activos(linea.id)
            servicio = servicios[0] if servicios else None
        if not servicio:
            raise NotFoundError("Servicio", nombre_servicio or codigo_linea)

        paciente = self.paciente_repo.obtener_por_id_externo(id_externo)
        ocupante = self.cama_repo.obtener_paciente_activo(
            cama.id, paciente.id if paciente else None
        )
        if ocupante:
            raise CamaOcupadaError(cama.numero)

        nuevo = paciente is None
        if nuevo:
            paciente = Paciente(id_externo=id_externo)

        paciente.nombre = (fila.get("nombre") or "").strip()
        paciente.apellido = (fila.get("apellido") or "").strip()
        if not paciente.nombre or not paciente.apellido:
            raise ValidationError("nombre y apellido son obligatorios")
        paciente.fecha_nacimiento = _fecha(fila.get("fecha_nacimiento"), "fecha_nacimiento")
        paciente.genero = _genero(fila.get("genero"))
        if (fila.get("fecha_ingreso") or "").strip():
            paciente.fecha_ingreso = _fecha(fila.get("fecha_ingreso"), "fecha_ingreso")
        paciente.cama_id = cama.id
        paciente.servicio_id = servicio.id
        paciente.historia_clinica = (fila.get("historia_clinica") or "").strip() or None
        paciente.notas = (fila.get("notas") or "").strip() or None

        self.paciente_repo.agregar(paciente)
        return nuevo
