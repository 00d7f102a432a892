"""
Tests para escaneos QR por lote (entrega y devolución).
"""
from datetime import datetime

import pytest
from fastapi import status

from kumpels.models.enums import (
    EstadoPacienteEnum,
    EstadoProcesoEnum,
    NombreLineaEnum,
    PasoProcesoEnum,
    TipoCodigoQREnum,
)
from kumpels.models.proceso_medicacion import ProcesoMedicacion


@pytest.fixture
def jornada(hospital, regente, crear_proceso_diario):
    """Hospital con el proceso diario de hoy iniciado."""
    return {**hospital, "diario": crear_proceso_diario(regente)}


def _estado(session, proceso_id):
    session.expire_all()
    return session.get(ProcesoMedicacion, proceso_id).estado


def _escaneo(qr_id, linea_id=None, tipo_transaccion="ENTREGA", temperatura=4.5):
    data = {"qr_id": qr_id, "temperatura": temperatura, "tipo_transaccion": tipo_transaccion}
    if linea_id:
        data["linea_destino"] = linea_id
    return data


class TestEntrega:

    def test_despacho_farmacia_mueve_alistados(self, client, session, jornada, regente,
                                               crear_proceso, crear_codigo_qr, enfermera_headers):
        paciente = jornada["pacientes"][0]
        crear_proceso(
            paciente.id, PasoProcesoEnum.ALISTAMIENTO, jornada["diario"].id,
            estado=EstadoProcesoEnum.COMPLETADO
        )
        codigo = crear_codigo_qr(TipoCodigoQREnum.DESPACHO_FARMACIA, regente)

        response = client.post(
            "/api/escaneos-qr/despacho-farmacia",
            json=_escaneo(codigo.qr_id, jornada["linea"].id),
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_200_OK

        result = response.json()
        assert result["pacientes_procesados"] == 1
        assert result["registros_creados"] == 1
        assert result["pacientes"][0]["cama"] == "101"

        entrega = client.get(
            "/api/procesos-medicacion",
            params={"paciente_id": paciente.id, "paso": "ENTREGA"},
            headers=enfermera_headers
        ).json()
        assert entrega[0]["estado"] == "DISPATCHED_FROM_PHARMACY"

    def test_despacho_repetido_no_tiene_elegibles(self, client, jornada, regente, crear_proceso,
                                                  crear_codigo_qr, enfermera_headers):
        crear_proceso(
            jornada["pacientes"][0].id, PasoProcesoEnum.ALISTAMIENTO, jornada["diario"].id,
            estado=EstadoProcesoEnum.COMPLETADO
        )
        codigo = crear_codigo_qr(TipoCodigoQREnum.DESPACHO_FARMACIA, regente)
        data = _escaneo(codigo.qr_id, jornada["linea"].id)

        client.post("/api/escaneos-qr/despacho-farmacia", json=data, headers=enfermera_headers)
        response = client.post("/api/escaneos-qr/despacho-farmacia", json=data, headers=enfermera_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_llegada_servicio_tras_despacho(self, client, session, jornada, regente, crear_proceso,
                                            crear_codigo_qr, enfermera_headers, regente_headers):
        paciente = jornada["pacientes"][0]
        crear_proceso(
            paciente.id, PasoProcesoEnum.ALISTAMIENTO, jornada["diario"].id,
            estado=EstadoProcesoEnum.COMPLETADO
        )
        despacho = crear_codigo_qr(TipoCodigoQREnum.DESPACHO_FARMACIA, regente)
        llegada = crear_codigo_qr(
            TipoCodigoQREnum.LLEGADA_SERVICIO, regente, servicio_id=jornada["servicio"].id
        )
        client.post(
            "/api/escaneos-qr/despacho-farmacia",
            json=_escaneo(despacho.qr_id, jornada["linea"].id),
            headers=enfermera_headers
        )

        response = client.post(
            "/api/escaneos-qr/llegada-servicio",
            json=_escaneo(llegada.qr_id),
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["procesos_actualizados"] == 1

        entrega = client.get(
            "/api/procesos-medicacion",
            params={"paciente_id": paciente.id, "paso": "ENTREGA"},
            headers=regente_headers
        ).json()
        assert entrega[0]["estado"] == "DELIVERED_TO_SERVICE"

    def test_llegada_servicio_sin_despacho(self, client, jornada, regente, crear_proceso,
                                           crear_codigo_qr, regente_headers):
        crear_proceso(
            jornada["pacientes"][0].id, PasoProcesoEnum.ALISTAMIENTO, jornada["diario"].id,
            estado=EstadoProcesoEnum.COMPLETADO
        )
        llegada = crear_codigo_qr(
            TipoCodigoQREnum.LLEGADA_SERVICIO, regente, servicio_id=jornada["servicio"].id
        )

        response = client.post(
            "/api/escaneos-qr/llegada-servicio",
            json=_escaneo(llegada.qr_id),
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_llegada_servicio_linea_distinta(self, client, jornada, regente, crear_linea,
                                             crear_proceso, crear_codigo_qr, regente_headers):
        otra_linea = crear_linea(NombreLineaEnum.LINEA_2)
        llegada = crear_codigo_qr(
            TipoCodigoQREnum.LLEGADA_SERVICIO, regente, servicio_id=jornada["servicio"].id
        )

        response = client.post(
            "/api/escaneos-qr/llegada-servicio",
            json=_escaneo(llegada.qr_id, otra_linea.id),
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "no coincide" in response.json()["detail"]

    def test_enfermera_no_escanea_llegada_servicio(self, client, jornada, regente,
                                                   crear_codigo_qr, enfermera_headers):
        llegada = crear_codigo_qr(
            TipoCodigoQREnum.LLEGADA_SERVICIO, regente, servicio_id=jornada["servicio"].id
        )

        response = client.post(
            "/api/escaneos-qr/llegada-servicio",
            json=_escaneo(llegada.qr_id),
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_llegada_piso(self, client, session, jornada, crear_proceso, regente_headers):
        proceso = crear_proceso(
            jornada["pacientes"][0].id, PasoProcesoEnum.ENTREGA, jornada["diario"].id,
            estado=EstadoProcesoEnum.COMPLETADO
        )

        response = client.post(
            "/api/escaneos-qr/llegada-piso",
            json={
                "nombre_servicio": "Medicina Interna",
                "fecha_proceso": datetime.utcnow().isoformat(),
            },
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["registros_creados"] == 0
        assert _estado(session, proceso.id) == EstadoProcesoEnum.ENTREGADO_SERVICIO


class TestValidacionesEscaneo:

    def test_qr_inexistente(self, client, jornada, enfermera_headers):
        response = client.post(
            "/api/escaneos-qr/despacho-farmacia",
            json=_escaneo("no-existe", jornada["linea"].id),
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_qr_de_otro_tipo(self, client, jornada, regente, crear_codigo_qr, enfermera_headers):
        codigo = crear_codigo_qr(TipoCodigoQREnum.RETORNO_DEVOLUCION, regente)

        response = client.post(
            "/api/escaneos-qr/despacho-farmacia",
            json=_escaneo(codigo.qr_id, jornada["linea"].id),
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_qr_inactivo(self, client, jornada, regente, crear_codigo_qr, enfermera_headers):
        codigo = crear_codigo_qr(TipoCodigoQREnum.DESPACHO_FARMACIA, regente, activo=False)

        response = client.post(
            "/api/escaneos-qr/despacho-farmacia",
            json=_escaneo(codigo.qr_id, jornada["linea"].id),
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_temperatura_requerida(self, client, jornada, enfermera_headers):
        data = _escaneo("PD", jornada["linea"].id)
        del data["temperatura"]

        response = client.post("/api/escaneos-qr/despacho-farmacia", json=data, headers=enfermera_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_linea_requerida(self, client, jornada, enfermera_headers):
        response = client.post(
            "/api/escaneos-qr/despacho-farmacia",
            json=_escaneo("PD"),
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_sin_proceso_diario(self, client, hospital, regente, crear_codigo_qr, enfermera_headers):
        codigo = crear_codigo_qr(TipoCodigoQREnum.DESPACHO_FARMACIA, regente)

        response = client.post(
            "/api/escaneos-qr/despacho-farmacia",
            json=_escaneo(codigo.qr_id, hospital["linea"].id),
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestDevolucion:

    def test_recogida_y_retorno(self, client, session, jornada, regente, crear_proceso,
                                crear_codigo_qr, regente_headers):
        paciente = jornada["pacientes"][1]
        devolucion = crear_proceso(
            paciente.id, PasoProcesoEnum.DEVOLUCION, jornada["diario"].id,
            estado=EstadoProcesoEnum.EN_PROGRESO
        )
        recogida = crear_codigo_qr(
            TipoCodigoQREnum.RECOGIDA_DEVOLUCION, regente, servicio_id=jornada["servicio"].id
        )
        retorno = crear_codigo_qr(TipoCodigoQREnum.RETORNO_DEVOLUCION, regente)

        response = client.post(
            "/api/escaneos-qr/recogida-devolucion",
            json=_escaneo(recogida.qr_id, tipo_transaccion="DEVOLUCION"),
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_200_OK
        assert _estado(session, devolucion.id) == EstadoProcesoEnum.RECOGIDO_SERVICIO

        response = client.post(
            "/api/escaneos-qr/retorno-devolucion",
            json=_escaneo(retorno.qr_id, jornada["linea"].id, tipo_transaccion="DEVOLUCION"),
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_200_OK
        assert _estado(session, devolucion.id) == EstadoProcesoEnum.COMPLETADO

    def test_retorno_ignora_pacientes_no_activos(self, client, session, jornada, regente,
                                                 crear_proceso, crear_codigo_qr, regente_headers):
        paciente = jornada["pacientes"][1]
        paciente.estado = EstadoPacienteEnum.DADO_DE_ALTA
        session.add(paciente)
        session.commit()
        devolucion = crear_proceso(
            paciente.id, PasoProcesoEnum.DEVOLUCION, jornada["diario"].id,
            estado=EstadoProcesoEnum.RECOGIDO_SERVICIO
        )
        retorno = crear_codigo_qr(TipoCodigoQREnum.RETORNO_DEVOLUCION, regente)

        response = client.post(
            "/api/escaneos-qr/retorno-devolucion",
            json=_escaneo(retorno.qr_id, jornada["linea"].id, tipo_transaccion="DEVOLUCION"),
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert _estado(session, devolucion.id) == EstadoProcesoEnum.RECOGIDO_SERVICIO

    def test_llegada_servicio_de_devolucion(self, client, session, jornada, regente,
                                            crear_proceso, crear_codigo_qr, regente_headers):
        paciente = jornada["pacientes"][0]
        devolucion = crear_proceso(
            paciente.id, PasoProcesoEnum.DEVOLUCION, jornada["diario"].id,
            estado=EstadoProcesoEnum.DESPACHADO_FARMACIA
        )
        # en otro estado no es elegible
        crear_proceso(
            jornada["pacientes"][1].id, PasoProcesoEnum.DEVOLUCION, jornada["diario"].id,
            estado=EstadoProcesoEnum.EN_PROGRESO
        )
        llegada = crear_codigo_qr(
            TipoCodigoQREnum.LLEGADA_SERVICIO, regente, servicio_id=jornada["servicio"].id
        )

        response = client.post(
            "/api/escaneos-qr/llegada-servicio",
            json=_escaneo(llegada.qr_id, tipo_transaccion="DEVOLUCION"),
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_200_OK

        result = response.json()
        assert result["pacientes_procesados"] == 1
        assert result["procesos_actualizados"] == 1
        assert _estado(session, devolucion.id) == EstadoProcesoEnum.ENTREGADO_SERVICIO

        repetido = client.post(
            "/api/escaneos-qr/llegada-servicio",
            json=_escaneo(llegada.qr_id, tipo_transaccion="DEVOLUCION"),
            headers=regente_headers
        )
        assert repetido.status_code == status.HTTP_400_BAD_REQUEST

    def test_recogida_exige_transaccion_devolucion(self, client, jornada, regente,
                                                   crear_codigo_qr, regente_headers):
        recogida = crear_codigo_qr(
            TipoCodigoQREnum.RECOGIDA_DEVOLUCION, regente, servicio_id=jornada["servicio"].id
        )

        response = client.post(
            "/api/escaneos-qr/recogida-devolucion",
            json=_escaneo(recogida.qr_id, tipo_transaccion="ENTREGA"),
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_despacho_farmacia_devolucion_solo_registra(self, client, session, hospital, regente,
                                                        crear_proceso, crear_codigo_qr,
                                                        enfermera_headers):
        # sin proceso diario: el escaneo crea el de hoy
        devolucion = crear_proceso(
            hospital["pacientes"][0].id, PasoProcesoEnum.DEVOLUCION,
            estado=EstadoProcesoEnum.EN_PROGRESO
        )
        codigo = crear_codigo_qr(TipoCodigoQREnum.DESPACHO_FARMACIA_DEVOLUCION, regente)
        data = _escaneo(codigo.qr_id, hospital["linea"].id, tipo_transaccion="DEVOLUCION")

        response = client.post(
            "/api/escaneos-qr/despacho-farmacia-devolucion",
            json=data,
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["registros_creados"] == 1
        assert response.json()["procesos_actualizados"] == 0
        assert _estado(session, devolucion.id) == EstadoProcesoEnum.EN_PROGRESO

        hoy = client.get("/api/procesos-diarios/hoy", headers=enfermera_headers).json()
        assert hoy is not None

        response = client.post(
            "/api/escaneos-qr/despacho-farmacia-devolucion",
            json=data,
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_recepcion_manual(self, client, session, hospital, crear_proceso, enfermera_headers):
        paciente = hospital["pacientes"][0]
        devolucion = crear_proceso(
            paciente.id, PasoProcesoEnum.DEVOLUCION, estado=EstadoProcesoEnum.ENTREGADO_SERVICIO
        )

        response = client.post(
            "/api/escaneos-qr/recepcion-devolucion",
            json={"paciente_id": paciente.id, "proceso_medicacion_id": devolucion.id},
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["estado"] == "COMPLETED"
        assert response.json()["completado_en"] is not None

    def test_recepcion_de_otro_paciente(self, client, hospital, crear_proceso, enfermera_headers):
        devolucion = crear_proceso(
            hospital["pacientes"][0].id, PasoProcesoEnum.DEVOLUCION,
            estado=EstadoProcesoEnum.EN_PROGRESO
        )

        response = client.post(
            "/api/escaneos-qr/recepcion-devolucion",
            json={
                "paciente_id": hospital["pacientes"][1].id,
                "proceso_medicacion_id": devolucion.id,
            },
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_recepcion_requiere_permiso(self, client, hospital, crear_proceso, validador_headers):
        devolucion = crear_proceso(
            hospital["pacientes"][0].id, PasoProcesoEnum.DEVOLUCION,
            estado=EstadoProcesoEnum.EN_PROGRESO
        )

        response = client.post(
            "/api/escaneos-qr/recepcion-devolucion",
            json={"paciente_id": devolucion.paciente_id, "proceso_medicacion_id": devolucion.id},
            headers=validador_headers
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestListarEscaneos:

    def test_listar_por_proceso_diario(self, client, jornada, regente, crear_proceso,
                                       crear_codigo_qr, enfermera_headers):
        crear_proceso(
            jornada["pacientes"][0].id, PasoProcesoEnum.ALISTAMIENTO, jornada["diario"].id,
            estado=EstadoProcesoEnum.COMPLETADO
        )
        codigo = crear_codigo_qr(TipoCodigoQREnum.DESPACHO_FARMACIA, regente)
        client.post(
            "/api/escaneos-qr/despacho-farmacia",
            json=_escaneo(codigo.qr_id, jornada["linea"].id),
            headers=enfermera_headers
        )

        result = client.get(
            "/api/escaneos-qr",
            params={"proceso_diario_id": jornada["diario"].id},
            headers=enfermera_headers
        ).json()
        assert len(result) == 1
        assert result[0]["temperatura"] == 4.5
        assert result[0]["codigo_qr"]["tipo"] == "PHARMACY_DISPATCH"
