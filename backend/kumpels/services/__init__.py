"""
Services de lógica de negocio.
Contienen la lógica principal del sistema.
"""
from kumpels.services.infraestructura_service import InfraestructuraService
from kumpels.services.paciente_service import PacienteService
from kumpels.services.proceso_diario_service import ProcesoDiarioService
from kumpels.services.proceso_medicacion_service import ProcesoMedicacionService
from kumpels.services.codigo_qr_service import CodigoQRService
from kumpels.services.escaneo_qr_service import EscaneoQRService
from kumpels.services.devolucion_service import DevolucionService
from kumpels.services.registro_error_service import RegistroErrorService
from kumpels.services.medicamento_service import MedicamentoService
from kumpels.services.estadisticas_service import EstadisticasService
from kumpels.services.exportacion_service import ExportacionService
from kumpels.services.usuario_service import UsuarioService

__all__ = [
    "InfraestructuraService",
    "PacienteService",
    "ProcesoDiarioService",
    "ProcesoMedicacionService",
    "CodigoQRService",
    "EscaneoQRService",
    "DevolucionService",
    "RegistroErrorService",
    "MedicamentoService",
    "EstadisticasService",
    "ExportacionService",
    "UsuarioService",
]
