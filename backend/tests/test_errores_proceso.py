"""
Tests para registros de error de proceso.
"""
from fastapi import status

from kumpels.models.enums import PasoProcesoEnum, EstadoProcesoEnum


def _reportar(client, headers, paciente_id, **extra):
    payload = {
        "paciente_id": paciente_id,
        "paso": "ALISTAMIENTO",
        "mensaje": "Falta una ampolla de dipirona",
    }
    payload.update(extra)
    return client.post("/api/errores-proceso", json=payload, headers=headers)


class TestReportarRegistro:

    def test_validador_reporta_error(self, client, hospital, validador, validador_headers):
        paciente = hospital["pacientes"][0]
        response = _reportar(client, validador_headers, paciente.id)
        assert response.status_code == status.HTTP_201_CREATED

        result = response.json()
        assert result["tipo"] == "ERROR"
        assert result["paso"] == "ALISTAMIENTO"
        assert result["reportado_por"] == validador.id
        assert result["rol_reportante"] == "PHARMACY_VALIDATOR"
        assert result["resuelto_en"] is None

    def test_reporta_advertencia_sobre_proceso(self, client, hospital, crear_proceso, enfermera_headers):
        paciente = hospital["pacientes"][0]
        proceso = crear_proceso(
            paciente.id, PasoProcesoEnum.ENTREGA, estado=EstadoProcesoEnum.EN_PROGRESO
        )

        response = _reportar(
            client, enfermera_headers, paciente.id,
            paso="ENTREGA", tipo="WARNING",
            proceso_medicacion_id=proceso.id,
            mensaje="  Paciente en procedimiento  "
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["proceso_medicacion_id"] == proceso.id
        assert response.json()["tipo"] == "WARNING"
        assert response.json()["mensaje"] == "Paciente en procedimiento"

    def test_mensaje_vacio(self, client, hospital, enfermera_headers):
        response = _reportar(client, enfermera_headers, hospital["pacientes"][0].id, mensaje="   ")
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_paciente_inexistente(self, client, enfermera_headers):
        response = _reportar(client, enfermera_headers, "no-existe")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_proceso_inexistente(self, client, hospital, enfermera_headers):
        response = _reportar(
            client, enfermera_headers, hospital["pacientes"][0].id,
            proceso_medicacion_id="no-existe"
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_paso_invalido(self, client, hospital, enfermera_headers):
        response = _reportar(client, enfermera_headers, hospital["pacientes"][0].id, paso="LAVADO")
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestResolverRegistro:

    def test_resolver_y_reabrir(self, client, hospital, enfermera_headers, regente, regente_headers):
        registro = _reportar(client, enfermera_headers, hospital["pacientes"][0].id).json()
        url = f"/api/errores-proceso/{registro['id']}"

        response = client.put(url, json={"resuelto": True}, headers=regente_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["resuelto_por"] == regente.id
        assert response.json()["resuelto_en"] is not None

        response = client.put(url, json={"resuelto": False}, headers=regente_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["resuelto_por"] is None
        assert response.json()["resuelto_en"] is None

    def test_corregir_mensaje(self, client, hospital, enfermera_headers):
        registro = _reportar(client, enfermera_headers, hospital["pacientes"][0].id).json()

        response = client.put(
            f"/api/errores-proceso/{registro['id']}",
            json={"mensaje": "Faltan dos ampollas"},
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["mensaje"] == "Faltan dos ampollas"

    def test_registro_inexistente(self, client, regente_headers):
        response = client.put(
            "/api/errores-proceso/no-existe",
            json={"resuelto": True},
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestListarRegistros:

    def test_oculta_resueltos_por_defecto(self, client, hospital, enfermera_headers):
        paciente = hospital["pacientes"][0]
        abierto = _reportar(client, enfermera_headers, paciente.id).json()
        resuelto = _reportar(client, enfermera_headers, paciente.id, mensaje="Etiqueta ilegible").json()
        client.put(
            f"/api/errores-proceso/{resuelto['id']}",
            json={"resuelto": True},
            headers=enfermera_headers
        )

        response = client.get("/api/errores-proceso", headers=enfermera_headers)
        assert [r["id"] for r in response.json()] == [abierto["id"]]

        response = client.get(
            "/api/errores-proceso",
            params={"incluir_resueltos": True},
            headers=enfermera_headers
        )
        assert {r["id"] for r in response.json()} == {abierto["id"], resuelto["id"]}

    def test_filtrar_por_paciente_y_tipo(self, client, hospital, enfermera_headers):
        paciente_a, paciente_b = hospital["pacientes"]
        _reportar(client, enfermera_headers, paciente_a.id)
        info = _reportar(client, enfermera_headers, paciente_a.id, tipo="INFO").json()
        _reportar(client, enfermera_headers, paciente_b.id, tipo="INFO")

        response = client.get(
            "/api/errores-proceso",
            params={"paciente_id": paciente_a.id, "tipo": "INFO"},
            headers=enfermera_headers
        )
        assert [r["id"] for r in response.json()] == [info["id"]]

    def test_eliminar(self, client, hospital, enfermera_headers):
        registro = _reportar(client, enfermera_headers, hospital["pacientes"][0].id).json()
        url = f"/api/errores-proceso/{registro['id']}"

        assert client.delete(url, headers=enfermera_headers).status_code == status.HTTP_200_OK
        assert client.get(url, headers=enfermera_headers).status_code == status.HTTP_404_NOT_FOUND
