"""
Modelo de Registro de Error de Proceso.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import datetime
import uuid

from kumpels.models.enums import PasoProcesoEnum, TipoRegistroEnum

if TYPE_CHECKING:
    from kumpels.models.proceso_medicacion import ProcesoMedicacion


class RegistroErrorProceso(SQLModel, table=True):
    """
    Nota con fecha (error, advertencia o información) asociada al paso de
    medicación de un paciente.
    """
    __tablename__ = "registro_error_proceso"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True
    )
    paciente_id: str = Field(foreign_key="paciente.id", index=True)
    proceso_medicacion_id: Optional[str] = Field(
        default=None, foreign_key="proceso_medicacion.id", index=True
    )
    paso: PasoProcesoEnum
    tipo: TipoRegistroEnum = Field(default=TipoRegistroEnum.ERROR)
    mensaje: str
    reportado_por: str = Field(foreign_key="usuarios.id")
    rol_reportante: str
    reportado_en: datetime = Field(default_factory=datetime.utcnow, index=True)
    resuelto_en: Optional[datetime] = Field(default=None)
    resuelto_por: Optional[str] = Field(default=None, foreign_key="usuarios.id")

    # Relaciones
    proceso_medicacion: Optional["ProcesoMedicacion"] = Relationship(back_populates="registros_error")

    @property
    def esta_resuelto(self) -> bool:
        return self.resuelto_en is not None
