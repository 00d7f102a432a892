"""
Modelo de Servicio Hospitalario.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
import uuid

if TYPE_CHECKING:
    from kumpels.models.linea import Linea
    from kumpels.models.paciente import Paciente


class Servicio(SQLModel, table=True):
    """
    Modelo de Servicio Hospitalario.

    Unidad clínica dentro de una línea.
    Ejemplos: UCI PEDIATRICA GENERAL, UCI QUIRÚRGICA, SEGUNDO ADULTOS.
    """
    __tablename__ = "servicio"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True
    )
    nombre: str = Field(index=True)
    descripcion: Optional[str] = Field(default=None)
    linea_id: str = Field(foreign_key="linea.id", index=True)
    activo: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relaciones
    linea: "Linea" = Relationship(back_populates="servicios")
    pacientes: List["Paciente"] = Relationship(back_populates="servicio")

    def __repr__(self) -> str:
        return f"Servicio(id={self.id}, nombre={self.nombre})"
