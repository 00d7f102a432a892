"""
Tests para endpoints de pacientes.
"""
from fastapi import status

from kumpels.models.enums import NombreLineaEnum


def _datos_paciente(hospital, **kwargs):
    data = {
        "id_externo": "CC2001",
        "nombre": "Laura",
        "apellido": "Martínez",
        "fecha_nacimiento": "1975-03-02T00:00:00",
        "genero": "FEMALE",
        "cama_id": hospital["camas"][2].id,
        "servicio_id": hospital["servicio"].id,
        "historia_clinica": "HC-778",
    }
    data.update(kwargs)
    return data


class TestCrearPaciente:

    def test_crear_paciente(self, client, hospital, enfermera_headers):
        response = client.post(
            "/api/pacientes",
            json=_datos_paciente(hospital),
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_201_CREATED

        result = response.json()
        assert result["id_externo"] == "CC2001"
        assert result["estado"] == "ACTIVE"
        assert result["cama"]["numero"] == "103"
        assert result["servicio"]["nombre"] == "Medicina Interna"

    def test_crear_paciente_campos_faltantes(self, client, hospital, enfermera_headers):
        data = _datos_paciente(hospital)
        del data["apellido"]

        response = client.post("/api/pacientes", json=data, headers=enfermera_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "apellido" in response.json()["detail"]

    def test_crear_paciente_id_externo_duplicado(self, client, hospital, enfermera_headers):
        response = client.post(
            "/api/pacientes",
            json=_datos_paciente(hospital, id_externo="CC1001"),
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_crear_paciente_cama_ocupada(self, client, hospital, enfermera_headers):
        response = client.post(
            "/api/pacientes",
            json=_datos_paciente(hospital, cama_id=hospital["camas"][0].id),
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_crear_paciente_cama_inexistente(self, client, hospital, enfermera_headers):
        response = client.post(
            "/api/pacientes",
            json=_datos_paciente(hospital, cama_id="no-existe"),
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_validador_no_crea_pacientes(self, client, hospital, validador_headers):
        response = client.post(
            "/api/pacientes",
            json=_datos_paciente(hospital),
            headers=validador_headers
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestConsultarPacientes:

    def test_listar_pacientes(self, client, hospital, validador_headers):
        response = client.get("/api/pacientes", headers=validador_headers)
        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()) == 2

    def test_buscar_sin_distinguir_mayusculas(self, client, hospital, validador_headers):
        response = client.get(
            "/api/pacientes",
            params={"busqueda": "GÓMEZ"},
            headers=validador_headers
        )
        result = response.json()
        assert len(result) == 1
        assert result[0]["id_externo"] == "CC1002"

    def test_filtrar_por_linea(self, client, hospital, crear_linea, crear_cama,
                               crear_paciente, validador_headers):
        linea_2 = crear_linea(NombreLineaEnum.LINEA_2)
        cama = crear_cama(linea_2.id, numero="201")
        crear_paciente(cama.id, hospital["servicio"].id, id_externo="CC3001")

        result = client.get(
            "/api/pacientes",
            params={"linea": "LINE_2"},
            headers=validador_headers
        ).json()
        assert [p["id_externo"] for p in result] == ["CC3001"]

    def test_filtrar_por_estado(self, client, hospital, validador_headers):
        result = client.get(
            "/api/pacientes",
            params={"estado": "DISCHARGED"},
            headers=validador_headers
        ).json()
        assert result == []

    def test_obtener_paciente(self, client, hospital, validador_headers):
        paciente = hospital["pacientes"][0]

        response = client.get(f"/api/pacientes/{paciente.id}", headers=validador_headers)
        assert response.status_code == status.HTTP_200_OK

        result = response.json()
        assert result["nombre"] == "Juan"
        assert result["procesos"] == []
        assert result["escaneos_qr"] == []

    def test_obtener_paciente_inexistente(self, client, validador_headers):
        response = client.get("/api/pacientes/no-existe", headers=validador_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestActualizarPaciente:

    def test_dar_de_alta_libera_cama(self, client, hospital, enfermera_headers):
        paciente = hospital["pacientes"][0]

        response = client.put(
            f"/api/pacientes/{paciente.id}",
            json={"estado": "DISCHARGED"},
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["estado"] == "DISCHARGED"

        camas = client.get(
            "/api/camas",
            params={"disponible": True},
            headers=enfermera_headers
        ).json()
        assert {c["numero"] for c in camas} == {"101", "103"}

    def test_cambiar_a_cama_libre(self, client, hospital, enfermera_headers):
        paciente = hospital["pacientes"][0]

        response = client.put(
            f"/api/pacientes/{paciente.id}",
            json={"cama_id": hospital["camas"][2].id},
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["cama"]["numero"] == "103"

    def test_cambiar_a_cama_ocupada(self, client, hospital, enfermera_headers):
        paciente = hospital["pacientes"][0]

        response = client.put(
            f"/api/pacientes/{paciente.id}",
            json={"cama_id": hospital["camas"][1].id},
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_reactivar_en_cama_ocupada(
        self, client, hospital, crear_paciente, enfermera_headers
    ):
        paciente = hospital["pacientes"][0]
        client.put(
            f"/api/pacientes/{paciente.id}",
            json={"estado": "DISCHARGED"},
            headers=enfermera_headers
        )
        crear_paciente(paciente.cama_id, hospital["servicio"].id, id_externo="CC1003")

        response = client.put(
            f"/api/pacientes/{paciente.id}",
            json={"estado": "ACTIVE"},
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_409_CONFLICT

        activos = client.get(
            "/api/pacientes",
            params={"cama_id": paciente.cama_id, "estado": "ACTIVE"},
            headers=enfermera_headers
        ).json()
        assert [p["id_externo"] for p in activos] == ["CC1003"]

    def test_reactivar_en_cama_libre(self, client, hospital, enfermera_headers):
        paciente = hospital["pacientes"][0]
        client.put(
            f"/api/pacientes/{paciente.id}",
            json={"estado": "DISCHARGED"},
            headers=enfermera_headers
        )

        response = client.put(
            f"/api/pacientes/{paciente.id}",
            json={"estado": "ACTIVE"},
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["estado"] == "ACTIVE"

    def test_id_externo_de_otro_paciente(self, client, hospital, enfermera_headers):
        paciente = hospital["pacientes"][0]

        response = client.put(
            f"/api/pacientes/{paciente.id}",
            json={"id_externo": "CC1002"},
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_409_CONFLICT


class TestEliminarPaciente:

    def test_solo_superadmin_elimina(self, client, hospital, regente_headers):
        paciente = hospital["pacientes"][0]
        response = client.delete(f"/api/pacientes/{paciente.id}", headers=regente_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_eliminar_paciente(self, client, hospital, admin_headers):
        paciente = hospital["pacientes"][0]

        response = client.delete(f"/api/pacientes/{paciente.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK

        response = client.get(f"/api/pacientes/{paciente.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND
