"""
Modelo de Línea.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
import uuid

from kumpels.models.enums import NombreLineaEnum

if TYPE_CHECKING:
    from kumpels.models.servicio import Servicio
    from kumpels.models.cama import Cama


class Linea(SQLModel, table=True):
    """
    Modelo de Línea hospitalaria.

    Agrupa servicios y camas de una misma zona del hospital
    (por ejemplo "Primer piso - Medicina General"). Las rutas de
    despacho de farmacia se organizan por línea.
    """
    __tablename__ = "linea"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True
    )
    nombre: NombreLineaEnum = Field(unique=True, index=True)
    nombre_visible: str
    descripcion: Optional[str] = Field(default=None)
    activa: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relaciones
    servicios: List["Servicio"] = Relationship(back_populates="linea")
    camas: List["Cama"] = Relationship(back_populates="linea")

    def __repr__(self) -> str:
        return f"Linea(id={self.id}, nombre={self.nombre})"
