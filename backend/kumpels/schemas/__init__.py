"""
Schemas Pydantic para validación y serialización.
"""
from kumpels.schemas.paciente import (
    PacienteCreate,
    PacienteUpdate,
    PacienteResponse,
    PacienteDetalleResponse,
)

from kumpels.schemas.infraestructura import (
    LineaResponse,
    ServicioResponse,
    CamaResponse,
    CamaCreate,
)

from kumpels.schemas.proceso import (
    ProcesoDiarioCreate,
    ProcesoDiarioUpdate,
    ProcesoDiarioResponse,
    ReinicioProcesosResponse,
    ProcesoMedicacionCreate,
    ProcesoMedicacionUpdate,
    ProcesoMedicacionResponse,
    ProcesoMedicacionDetalleResponse,
)

from kumpels.schemas.qr import (
    CodigoQRGenerarRequest,
    CodigoQRResponse,
    EscaneoRequest,
    ResultadoEscaneoResponse,
)

from kumpels.schemas.devolucion import (
    DevolucionManualCreate,
    DevolucionManualUpdate,
    DevolucionManualResponse,
)

from kumpels.schemas.registro_error import (
    RegistroErrorCreate,
    RegistroErrorUpdate,
    RegistroErrorResponse,
)

from kumpels.schemas.estadisticas import (
    FiltrosEstadisticas,
    EstadisticasResponse,
)

from kumpels.schemas.responses import (
    MessageResponse,
)

__all__ = [
    # Paciente
    "PacienteCreate",
    "PacienteUpdate",
    "PacienteResponse",
    "PacienteDetalleResponse",
    # Infraestructura
    "LineaResponse",
    "ServicioResponse",
    "CamaResponse",
    "CamaCreate",
    # Procesos
    "ProcesoDiarioCreate",
    "ProcesoDiarioUpdate",
    "ProcesoDiarioResponse",
    "ReinicioProcesosResponse",
    "ProcesoMedicacionCreate",
    "ProcesoMedicacionUpdate",
    "ProcesoMedicacionResponse",
    "ProcesoMedicacionDetalleResponse",
    # QR
    "CodigoQRGenerarRequest",
    "CodigoQRResponse",
    "EscaneoRequest",
    "ResultadoEscaneoResponse",
    # Devoluciones
    "DevolucionManualCreate",
    "DevolucionManualUpdate",
    "DevolucionManualResponse",
    # Errores de proceso
    "RegistroErrorCreate",
    "RegistroErrorUpdate",
    "RegistroErrorResponse",
    # Estadísticas
    "FiltrosEstadisticas",
    "EstadisticasResponse",
    # Respuestas
    "MessageResponse",
]
