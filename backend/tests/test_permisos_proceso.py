"""
Tests para la tabla de permisos por paso y las transiciones manuales.
"""
import pytest

from kumpels.models.enums import EstadoProcesoEnum, PasoProcesoEnum
from kumpels.models.usuario import RolEnum
from kumpels.services.permisos_proceso import (
    puede_realizar_accion,
    es_transicion_valida,
    transiciones_validas,
)


@pytest.mark.parametrize("paso,rol", [
    (PasoProcesoEnum.PREDESPACHO, RolEnum.REGENTE_FARMACIA),
    (PasoProcesoEnum.ALISTAMIENTO, RolEnum.REGENTE_FARMACIA),
    (PasoProcesoEnum.VALIDACION, RolEnum.VALIDADOR_FARMACIA),
    (PasoProcesoEnum.ENTREGA, RolEnum.ENFERMERA),
    (PasoProcesoEnum.DEVOLUCION, RolEnum.ENFERMERA),
])
def test_rol_responsable_opera_su_paso(paso, rol):
    assert puede_realizar_accion(paso, rol, "iniciar")
    assert puede_realizar_accion(paso, rol, "completar")


def test_enfermera_no_valida():
    assert not puede_realizar_accion(PasoProcesoEnum.VALIDACION, RolEnum.ENFERMERA, "completar")


def test_validador_no_entrega():
    assert not puede_realizar_accion(PasoProcesoEnum.ENTREGA, RolEnum.VALIDADOR_FARMACIA, "iniciar")


def test_todos_pueden_ver():
    for rol in RolEnum:
        assert puede_realizar_accion(PasoProcesoEnum.PREDESPACHO, rol, "ver")


def test_superadmin_opera_todo():
    for paso in PasoProcesoEnum:
        assert puede_realizar_accion(paso, RolEnum.SUPERADMIN, "completar")


def test_transiciones_desde_pendiente():
    assert es_transicion_valida(EstadoProcesoEnum.PENDIENTE, EstadoProcesoEnum.EN_PROGRESO)
    assert not es_transicion_valida(EstadoProcesoEnum.PENDIENTE, EstadoProcesoEnum.COMPLETADO)


def test_completado_solo_pasa_a_error():
    assert transiciones_validas(EstadoProcesoEnum.COMPLETADO) == [EstadoProcesoEnum.ERROR]


def test_estados_de_transito_no_tienen_salida_manual():
    assert transiciones_validas(EstadoProcesoEnum.DESPACHADO_FARMACIA) == []
    assert not es_transicion_valida(
        EstadoProcesoEnum.ENTREGADO_SERVICIO, EstadoProcesoEnum.COMPLETADO
    )
