"""
Modelos de datos del sistema.
Re-exporta todos los modelos para imports simplificados.
"""
from kumpels.models.enums import (
    PasoProcesoEnum,
    EstadoProcesoEnum,
    EstadoProcesoDiarioEnum,
    EstadoPacienteEnum,
    GeneroEnum,
    NombreLineaEnum,
    TipoCodigoQREnum,
    TipoTransaccionEnum,
    EstadoDevolucionManualEnum,
    TipoRegistroEnum,
)

from kumpels.models.usuario import Usuario, RefreshToken, RolEnum, PermisoEnum
from kumpels.models.linea import Linea
from kumpels.models.servicio import Servicio
from kumpels.models.cama import Cama
from kumpels.models.paciente import Paciente
from kumpels.models.proceso_diario import ProcesoDiario
from kumpels.models.proceso_medicacion import ProcesoMedicacion
from kumpels.models.codigo_qr import CodigoQR, RegistroEscaneoQR
from kumpels.models.devolucion import CausaDevolucion, DevolucionManual, InsumoDevolucion
from kumpels.models.registro_error import RegistroErrorProceso
from kumpels.models.medicamento import Medicamento

__all__ = [
    # Enums
    "PasoProcesoEnum",
    "EstadoProcesoEnum",
    "EstadoProcesoDiarioEnum",
    "EstadoPacienteEnum",
    "GeneroEnum",
    "NombreLineaEnum",
    "TipoCodigoQREnum",
    "TipoTransaccionEnum",
    "EstadoDevolucionManualEnum",
    "TipoRegistroEnum",
    "RolEnum",
    "PermisoEnum",
    # Models
    "Usuario",
    "RefreshToken",
    "Linea",
    "Servicio",
    "Cama",
    "Paciente",
    "ProcesoDiario",
    "ProcesoMedicacion",
    "CodigoQR",
    "RegistroEscaneoQR",
    "CausaDevolucion",
    "DevolucionManual",
    "InsumoDevolucion",
    "RegistroErrorProceso",
    "Medicamento",
]
