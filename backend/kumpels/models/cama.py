"""
Modelo de Cama.
"""
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
import uuid

from kumpels.models.enums import EstadoPacienteEnum

if TYPE_CHECKING:
    from kumpels.models.linea import Linea
    from kumpels.models.paciente import Paciente


class Cama(SQLModel, table=True):
    """
    Modelo de Cama hospitalaria.

    Cama física de una línea. Puede estar ocupada como máximo por un
    paciente activo; el historial de pacientes que la ocuparon se conserva.
    """
    __tablename__ = "cama"
    __table_args__ = (
        UniqueConstraint("linea_id", "numero", name="uq_cama_linea_numero"),
    )

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True
    )
    numero: str = Field(index=True)  # PC01, UQ10, 213A
    linea_id: str = Field(foreign_key="linea.id", index=True)
    activa: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relaciones
    linea: "Linea" = Relationship(back_populates="camas")
    pacientes: List["Paciente"] = Relationship(back_populates="cama")

    def __repr__(self) -> str:
        return f"Cama(id={self.id}, numero={self.numero})"

    @property
    def paciente_activo(self) -> Optional["Paciente"]:
        """Paciente activo que ocupa la cama, si existe."""
        for paciente in self.pacientes:
            if paciente.estado == EstadoPacienteEnum.ACTIVO:
                return paciente
        return None

    @property
    def esta_disponible(self) -> bool:
        """Verifica si la cama no tiene paciente activo."""
        return self.paciente_activo is None
