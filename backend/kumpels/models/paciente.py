"""
Modelo de Paciente.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
import uuid

from kumpels.models.enums import GeneroEnum, EstadoPacienteEnum

if TYPE_CHECKING:
    from kumpels.models.cama import Cama
    from kumpels.models.servicio import Servicio
    from kumpels.models.proceso_medicacion import ProcesoMedicacion
    from kumpels.models.codigo_qr import RegistroEscaneoQR


class Paciente(SQLModel, table=True):
    """
    Modelo de Paciente.

    Paciente hospitalizado al que se le dispensan medicamentos.
    Ocupa una cama de una línea y pertenece a un servicio clínico.
    """
    __tablename__ = "paciente"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True
    )

    # ============================================
    # DATOS PERSONALES
    # ============================================
    id_externo: str = Field(unique=True, index=True)  # Documento / id HIS
    nombre: str
    apellido: str
    fecha_nacimiento: datetime
    genero: GeneroEnum

    # ============================================
    # HOSPITALIZACIÓN
    # ============================================
    fecha_ingreso: datetime = Field(default_factory=datetime.utcnow)
    cama_id: str = Field(foreign_key="cama.id", index=True)
    servicio_id: str = Field(foreign_key="servicio.id", index=True)
    estado: EstadoPacienteEnum = Field(default=EstadoPacienteEnum.ACTIVO, index=True)
    historia_clinica: Optional[str] = Field(default=None, index=True)
    notas: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relaciones
    cama: "Cama" = Relationship(back_populates="pacientes")
    servicio: "Servicio" = Relationship(back_populates="pacientes")
    procesos: List["ProcesoMedicacion"] = Relationship(back_populates="paciente")
    escaneos_qr: List["RegistroEscaneoQR"] = Relationship(back_populates="paciente")

    def __repr__(self) -> str:
        return f"Paciente(id={self.id}, id_externo={self.id_externo})"

    @property
    def nombre_completo(self) -> str:
        """Nombre y apellido del paciente."""
        return f"{self.nombre} {self.apellido}"

    @property
    def esta_activo(self) -> bool:
        """Verifica si el paciente sigue hospitalizado."""
        return self.estado == EstadoPacienteEnum.ACTIVO
