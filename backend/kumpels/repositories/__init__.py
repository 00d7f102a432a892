"""
Repositories para acceso a datos.
Abstraen las queries SQL y proporcionan una interfaz limpia.
"""
from kumpels.repositories.base import BaseRepository
from kumpels.repositories.linea_repo import LineaRepository, ServicioRepository
from kumpels.repositories.cama_repo import CamaRepository
from kumpels.repositories.paciente_repo import PacienteRepository
from kumpels.repositories.proceso_repo import (
    ProcesoDiarioRepository,
    ProcesoMedicacionRepository,
)
from kumpels.repositories.codigo_qr_repo import (
    CodigoQRRepository,
    RegistroEscaneoRepository,
)
from kumpels.repositories.devolucion_repo import (
    CausaDevolucionRepository,
    DevolucionManualRepository,
)
from kumpels.repositories.registro_error_repo import RegistroErrorRepository
from kumpels.repositories.medicamento_repo import MedicamentoRepository
from kumpels.repositories.usuario_repo import UsuarioRepository, RefreshTokenRepository

__all__ = [
    "BaseRepository",
    "LineaRepository",
    "ServicioRepository",
    "CamaRepository",
    "PacienteRepository",
    "ProcesoDiarioRepository",
    "ProcesoMedicacionRepository",
    "CodigoQRRepository",
    "RegistroEscaneoRepository",
    "CausaDevolucionRepository",
    "DevolucionManualRepository",
    "RegistroErrorRepository",
    "MedicamentoRepository",
    "UsuarioRepository",
    "RefreshTokenRepository",
]
