"""
Modelo de Proceso de Medicación.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
import uuid

from kumpels.models.enums import PasoProcesoEnum, EstadoProcesoEnum
from kumpels.utils.fechas import horas_entre

if TYPE_CHECKING:
    from kumpels.models.paciente import Paciente
    from kumpels.models.proceso_diario import ProcesoDiario
    from kumpels.models.registro_error import RegistroErrorProceso


class ProcesoMedicacion(SQLModel, table=True):
    """
    Registro de un paso del proceso de medicación de un paciente.

    Un paciente tiene a lo más un proceso por paso dentro de un mismo
    proceso diario. Las devoluciones pueden existir sin proceso diario.
    """
    __tablename__ = "proceso_medicacion"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True
    )
    paciente_id: str = Field(foreign_key="paciente.id", index=True)
    proceso_diario_id: Optional[str] = Field(
        default=None, foreign_key="proceso_diario.id", index=True
    )
    paso: PasoProcesoEnum = Field(index=True)
    estado: EstadoProcesoEnum = Field(default=EstadoProcesoEnum.PENDIENTE, index=True)

    # Trazabilidad
    iniciado_en: Optional[datetime] = Field(default=None)
    iniciado_por: Optional[str] = Field(default=None, foreign_key="usuarios.id")
    completado_en: Optional[datetime] = Field(default=None)
    completado_por: Optional[str] = Field(default=None, foreign_key="usuarios.id")
    notas: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relaciones
    paciente: "Paciente" = Relationship(back_populates="procesos")
    proceso_diario: Optional["ProcesoDiario"] = Relationship(back_populates="procesos")
    registros_error: List["RegistroErrorProceso"] = Relationship(back_populates="proceso_medicacion")

    def __repr__(self) -> str:
        return f"ProcesoMedicacion(id={self.id}, paso={self.paso}, estado={self.estado})"

    @property
    def duracion_horas(self) -> float:
        """Horas entre la creación y la última actualización."""
        return horas_entre(self.created_at, self.updated_at)
