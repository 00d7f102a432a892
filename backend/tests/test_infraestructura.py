"""
Tests para líneas, servicios y camas.
"""
from fastapi import status

from kumpels.models.enums import NombreLineaEnum


class TestLineasYServicios:

    def test_listar_lineas_con_servicios_y_camas(self, client, hospital, enfermera_headers, crear_linea):
        crear_linea(NombreLineaEnum.LINEA_2)

        response = client.get("/api/lineas", headers=enfermera_headers)
        assert response.status_code == status.HTTP_200_OK

        lineas = response.json()
        assert [linea["nombre"] for linea in lineas] == ["LINE_1", "LINE_2"]
        assert lineas[0]["servicios"][0]["nombre"] == "Medicina Interna"
        assert [c["numero"] for c in lineas[0]["camas"]] == ["101", "102", "103"]
        assert lineas[1]["camas"] == []

    def test_listar_servicios_cuenta_pacientes_activos(self, client, hospital, enfermera_headers):
        response = client.get("/api/servicios", headers=enfermera_headers)
        assert response.status_code == status.HTTP_200_OK

        servicios = response.json()
        assert len(servicios) == 1
        assert servicios[0]["pacientes_activos"] == 2
        assert servicios[0]["linea"]["nombre"] == "LINE_1"

    def test_servicios_inactivos_no_aparecen(self, client, hospital, crear_servicio, enfermera_headers):
        crear_servicio(hospital["linea"].id, nombre="Cerrado", activo=False)

        servicios = client.get("/api/servicios", headers=enfermera_headers).json()
        assert [s["nombre"] for s in servicios] == ["Medicina Interna"]

    def test_sin_autenticacion(self, client):
        response = client.get("/api/lineas")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestCamas:

    def test_listar_camas_con_paciente(self, client, hospital, enfermera_headers):
        camas = client.get("/api/camas", headers=enfermera_headers).json()
        assert len(camas) == 3

        ocupada = next(c for c in camas if c["numero"] == "101")
        assert ocupada["paciente"]["id_externo"] == "CC1001"
        libre = next(c for c in camas if c["numero"] == "103")
        assert libre["paciente"] is None

    def test_listar_camas_disponibles(self, client, hospital, enfermera_headers):
        response = client.get(
            "/api/camas",
            params={"disponible": True},
            headers=enfermera_headers
        )
        assert [c["numero"] for c in response.json()] == ["103"]

    def test_crear_cama(self, client, hospital, admin_headers):
        response = client.post(
            "/api/camas",
            json={"numero": "UQ10", "linea_id": hospital["linea"].id},
            headers=admin_headers
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["numero"] == "UQ10"
        assert response.json()["linea"]["nombre"] == "LINE_1"

    def test_crear_cama_numero_repetido_en_linea(self, client, hospital, admin_headers):
        response = client.post(
            "/api/camas",
            json={"numero": "101", "linea_id": hospital["linea"].id},
            headers=admin_headers
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_crear_cama_mismo_numero_otra_linea(self, client, hospital, crear_linea, admin_headers):
        linea_2 = crear_linea(NombreLineaEnum.LINEA_2)

        response = client.post(
            "/api/camas",
            json={"numero": "101", "linea_id": linea_2.id},
            headers=admin_headers
        )
        assert response.status_code == status.HTTP_201_CREATED

    def test_crear_cama_sin_numero(self, client, hospital, admin_headers):
        response = client.post(
            "/api/camas",
            json={"linea_id": hospital["linea"].id},
            headers=admin_headers
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_crear_cama_linea_inexistente(self, client, admin_headers):
        response = client.post(
            "/api/camas",
            json={"numero": "101", "linea_id": "no-existe"},
            headers=admin_headers
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_crear_cama_requiere_permiso(self, client, hospital, regente_headers):
        response = client.post(
            "/api/camas",
            json={"numero": "200", "linea_id": hospital["linea"].id},
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
