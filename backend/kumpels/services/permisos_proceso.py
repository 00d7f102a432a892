"""
Reglas de permisos y transiciones de los procesos de medicación.

Tabla de quién puede operar cada paso y qué cambios de estado manuales
son válidos. Los estados de tránsito (salió de farmacia, entregado en
servicio, recogido en servicio) solo se alcanzan por escaneo QR.
"""
from typing import Dict, List, Literal, Set

from kumpels.models.enums import EstadoProcesoEnum, PasoProcesoEnum
from kumpels.models.usuario import RolEnum

AccionProceso = Literal["iniciar", "completar", "ver"]


# ============================================
# PERMISOS POR PASO
# ============================================

ROLES_POR_PASO: Dict[PasoProcesoEnum, Set[RolEnum]] = {
    PasoProcesoEnum.PREDESPACHO: {RolEnum.REGENTE_FARMACIA},
    PasoProcesoEnum.ALISTAMIENTO: {RolEnum.REGENTE_FARMACIA},
    PasoProcesoEnum.VALIDACION: {RolEnum.VALIDADOR_FARMACIA},
    PasoProcesoEnum.ENTREGA: {RolEnum.ENFERMERA},
    PasoProcesoEnum.DEVOLUCION: {RolEnum.ENFERMERA},
}


def puede_realizar_accion(
    paso: PasoProcesoEnum,
    rol: RolEnum,
    accion: AccionProceso
) -> bool:
    """
    Indica si un rol puede realizar una acción sobre un paso.

    Args:
        paso: Paso del proceso
        rol: Rol del usuario
        accion: "iniciar", "completar" o "ver"

    Returns:
        True si la acción está permitida
    """
    if rol == RolEnum.SUPERADMIN:
        return True

    if accion == "ver":
        return True

    if accion not in ("iniciar", "completar"):
        return False

    return rol in ROLES_POR_PASO.get(paso, set())


# ============================================
# TRANSICIONES MANUALES
# ============================================

TRANSICIONES_VALIDAS: Dict[EstadoProcesoEnum, List[EstadoProcesoEnum]] = {
    EstadoProcesoEnum.PENDIENTE: [EstadoProcesoEnum.EN_PROGRESO, EstadoProcesoEnum.ERROR],
    EstadoProcesoEnum.EN_PROGRESO: [EstadoProcesoEnum.COMPLETADO, EstadoProcesoEnum.ERROR],
    EstadoProcesoEnum.COMPLETADO: [EstadoProcesoEnum.ERROR],
    EstadoProcesoEnum.ERROR: [EstadoProcesoEnum.PENDIENTE, EstadoProcesoEnum.EN_PROGRESO],
}


def transiciones_validas(desde: EstadoProcesoEnum) -> List[EstadoProcesoEnum]:
    """Estados alcanzables manualmente desde un estado."""
    return list(TRANSICIONES_VALIDAS.get(desde, []))


def es_transicion_valida(desde: EstadoProcesoEnum, hacia: EstadoProcesoEnum) -> bool:
    return hacia in TRANSICIONES_VALIDAS.get(desde, [])
