"""
Router principal que agrupa todos los sub-routers.
"""
from fastapi import APIRouter

from kumpels.api.auth_router import router as auth_router
from kumpels.api import health
from kumpels.api import perfil
from kumpels.api import infraestructura
from kumpels.api import pacientes
from kumpels.api import procesos_diarios
from kumpels.api import procesos_medicacion
from kumpels.api import codigos_qr
from kumpels.api import escaneos_qr
from kumpels.api import devoluciones
from kumpels.api import errores_proceso
from kumpels.api import medicamentos
from kumpels.api import estadisticas

api_router = APIRouter()
api_router.include_router(auth_router)

# ============================================
# INCLUIR TODOS LOS ROUTERS
# ============================================

# Health Check (sin autenticación para load balancers)
api_router.include_router(health.router)

api_router.include_router(
    perfil.router,
    prefix="/perfil",
    tags=["Perfil"]
)

api_router.include_router(
    infraestructura.router,
    tags=["Infraestructura"]
)

api_router.include_router(
    pacientes.router,
    prefix="/pacientes",
    tags=["Pacientes"]
)

api_router.include_router(
    procesos_diarios.router,
    prefix="/procesos-diarios",
    tags=["Procesos Diarios"]
)

api_router.include_router(
    procesos_medicacion.router,
    prefix="/procesos-medicacion",
    tags=["Procesos de Medicación"]
)

api_router.include_router(
    codigos_qr.router,
    prefix="/codigos-qr",
    tags=["Códigos QR"]
)

api_router.include_router(
    escaneos_qr.router,
    prefix="/escaneos-qr",
    tags=["Escaneos QR"]
)

api_router.include_router(
    devoluciones.router,
    prefix="/devoluciones-manuales",
    tags=["Devoluciones"]
)

api_router.include_router(
    devoluciones.causas_router,
    prefix="/causas-devolucion",
    tags=["Devoluciones"]
)

api_router.include_router(
    errores_proceso.router,
    prefix="/errores-proceso",
    tags=["Errores de Proceso"]
)

api_router.include_router(
    medicamentos.router,
    prefix="/medicamentos",
    tags=["Medicamentos"]
)

api_router.include_router(
    estadisticas.router,
    prefix="/estadisticas",
    tags=["Estadísticas"]
)
