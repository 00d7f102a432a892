"""
Tests para generación de códigos QR.
"""
import json

from fastapi import status

from kumpels.models.enums import TipoCodigoQREnum
from kumpels.services.codigo_qr_service import (
    construir_payload,
    parsear_payload,
    generar_qr_id,
)


class TestPayload:

    def test_payload_legible(self):
        texto = construir_payload("PD_1", TipoCodigoQREnum.DESPACHO_FARMACIA)
        datos = parsear_payload(texto)

        assert datos["qr_id"] == "PD_1"
        assert datos["tipo"] == TipoCodigoQREnum.DESPACHO_FARMACIA
        assert "servicio_id" not in json.loads(texto)

    def test_payload_ajeno_al_sistema(self):
        assert parsear_payload("https://example.com") is None
        assert parsear_payload(json.dumps({"qr_id": "X", "tipo": "OTRO"})) is None
        assert parsear_payload(json.dumps({"tipo": "SERVICE_ARRIVAL"})) is None

    def test_qr_id_unico(self):
        primero = generar_qr_id(TipoCodigoQREnum.RETORNO_DEVOLUCION)
        segundo = generar_qr_id(TipoCodigoQREnum.RETORNO_DEVOLUCION)
        assert primero != segundo


class TestGenerarCodigos:

    def test_generar_despacho_farmacia(self, client, admin_headers):
        response = client.post(
            "/api/codigos-qr",
            json={"accion": "generar", "tipo": "PHARMACY_DISPATCH"},
            headers=admin_headers
        )
        assert response.status_code == status.HTTP_201_CREATED

        codigo = response.json()["codigos"][0]
        assert codigo["tipo"] == "PHARMACY_DISPATCH"
        assert codigo["activo"] is True
        assert codigo["imagen_data_url"].startswith("data:image/png;base64,")

    def test_regenerar_desactiva_anterior(self, client, admin_headers):
        primero = client.post(
            "/api/codigos-qr",
            json={"accion": "generar", "tipo": "DEVOLUTION_RETURN"},
            headers=admin_headers
        ).json()["codigos"][0]
        segundo = client.post(
            "/api/codigos-qr",
            json={"accion": "generar", "tipo": "DEVOLUTION_RETURN"},
            headers=admin_headers
        ).json()["codigos"][0]

        activos = client.get("/api/codigos-qr", headers=admin_headers).json()
        assert activos["retorno_devolucion"]["id"] == segundo["id"]
        assert activos["retorno_devolucion"]["id"] != primero["id"]

    def test_llegada_servicio_requiere_servicio(self, client, admin_headers):
        response = client.post(
            "/api/codigos-qr",
            json={"accion": "generar", "tipo": "SERVICE_ARRIVAL"},
            headers=admin_headers
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_llegada_servicio_inexistente(self, client, admin_headers):
        response = client.post(
            "/api/codigos-qr",
            json={"accion": "generar", "tipo": "SERVICE_ARRIVAL", "servicio_id": "no-existe"},
            headers=admin_headers
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_generar_todos_llegada_servicio(self, client, hospital, crear_servicio, admin_headers):
        crear_servicio(hospital["linea"].id, nombre="Cirugía")

        response = client.post(
            "/api/codigos-qr",
            json={"accion": "generar_todos_llegada_servicio"},
            headers=admin_headers
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert len(response.json()["codigos"]) == 2

        activos = client.get("/api/codigos-qr", headers=admin_headers).json()
        assert len(activos["llegada_servicio"]) == 2
        assert activos["tiene_codigos_activos"] is True

    def test_solo_superadmin_genera(self, client, regente_headers):
        response = client.post(
            "/api/codigos-qr",
            json={"accion": "generar", "tipo": "PHARMACY_DISPATCH"},
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_sin_codigos_activos(self, client, enfermera_headers):
        result = client.get("/api/codigos-qr", headers=enfermera_headers).json()
        assert result["tiene_codigos_activos"] is False
        assert result["llegada_servicio"] == []
