"""
Tests para la carga inicial y la importación de pacientes.
"""
from sqlmodel import select

from kumpels.models.linea import Linea
from kumpels.models.devolucion import CausaDevolucion
from kumpels.models.paciente import Paciente
from kumpels.models.usuario import Usuario
from kumpels.models.enums import GeneroEnum
from kumpels.utils.seed_data import inicializar_datos
from kumpels.utils.importacion import ImportadorPacientes
from kumpels.utils.constants import CAUSAS_DEVOLUCION


ENCABEZADO = (
    "id_externo,nombre,apellido,fecha_nacimiento,genero,fecha_ingreso,"
    "linea,cama,servicio,historia_clinica,notas\n"
)


class TestCargaInicial:

    def test_crea_catalogos_y_usuarios(self, session):
        resumen = inicializar_datos(session)

        assert resumen.lineas == 5
        assert resumen.causas == len(CAUSAS_DEVOLUCION)
        assert resumen.usuarios == 4
        assert resumen.servicios > 0
        assert resumen.camas > 0

        emails = set(session.exec(select(Usuario.email)).all())
        assert "regente@kumpels.co" in emails

    def test_es_idempotente(self, session):
        inicializar_datos(session)
        resumen = inicializar_datos(session)

        assert (resumen.lineas, resumen.servicios, resumen.camas, resumen.causas, resumen.usuarios) == (0, 0, 0, 0, 0)
        assert len(session.exec(select(Linea)).all()) == 5
        assert len(session.exec(select(CausaDevolucion)).all()) == len(CAUSAS_DEVOLUCION)

    def test_sin_usuarios(self, session):
        resumen = inicializar_datos(session, incluir_usuarios=False)
        assert resumen.usuarios == 0
        assert session.exec(select(Usuario)).all() == []


class TestImportarPacientes:

    def test_crea_y_actualiza(self, session, hospital):
        contenido = ENCABEZADO + (
            "CC2001,Luis,Mora,1975-02-01,M,2026-10-18T09:00:00,LINE_1,103,,HC-77,\n"
            "CC1001,Juan Carlos,Pérez,1980-05-17,MALE,,LINE_1,101,Medicina Interna,,Alergia a penicilina\n"
        )
        resumen = ImportadorPacientes(session).importar_texto(contenido)

        assert resumen.creados == 1
        assert resumen.actualizados == 1
        assert resumen.errores == []
        assert resumen.procesados == 2

        nuevo = session.exec(select(Paciente).where(Paciente.id_externo == "CC2001")).one()
        assert nuevo.cama_id == hospital["camas"][2].id
        assert nuevo.servicio_id == hospital["servicio"].id
        assert nuevo.genero == GeneroEnum.MASCULINO
        assert nuevo.historia_clinica == "HC-77"

        existente = session.exec(select(Paciente).where(Paciente.id_externo == "CC1001")).one()
        assert existente.nombre == "Juan Carlos"
        assert existente.notas == "Alergia a penicilina"

    def test_omite_filas_con_error(self, session, hospital):
        contenido = ENCABEZADO + (
            "CC3001,Pedro,Ruiz,1990-01-01,M,,LINE_1,102,,,\n"
            "CC3002,Marta,Díaz,1990-01-01,F,,LINE_9,101,,,\n"
            "CC3003,Sofía,León,no-es-fecha,F,,LINE_1,103,,,\n"
            "CC3004,Rosa,Vega,1988-03-03,F,,LINE_1,103,,,\n"
        )
        resumen = ImportadorPacientes(session).importar_texto(contenido)

        assert resumen.creados == 1
        assert len(resumen.errores) == 3
        assert resumen.errores[0].startswith("Fila 2 (CC3001)")
        assert resumen.errores[1].startswith("Fila 3 (CC3002)")
        assert resumen.errores[2].startswith("Fila 4 (CC3003)")

        ids = set(session.exec(select(Paciente.id_externo)).all())
        assert ids == {"CC1001", "CC1002", "CC3004"}

    def test_id_externo_obligatorio(self, session, hospital):
        contenido = ENCABEZADO + ",Sin,Documento,1990-01-01,M,,LINE_1,103,,,\n"
        resumen = ImportadorPacientes(session).importar_texto(contenido)

        assert resumen.creados == 0
        assert resumen.errores == ["Fila 2 (-): id_externo es obligatorio"]
