"""
Tests para devoluciones manuales y causas de devolución.
"""
from fastapi import status

from kumpels.models.devolucion import CausaDevolucion


INSUMOS = [
    {"codigo_insumo": "INS-001", "nombre_insumo": "Dipirona 1g ampolla", "cantidad_devuelta": 2},
    {"codigo_insumo": "INS-002", "nombre_insumo": "Omeprazol 40mg vial", "cantidad_devuelta": 1},
]


def _registrar(client, headers, paciente_id, insumos=None, **extra):
    payload = {
        "paciente_id": paciente_id,
        "causa": "Alta médica",
        "insumos": INSUMOS if insumos is None else insumos,
    }
    payload.update(extra)
    return client.post("/api/devoluciones-manuales", json=payload, headers=headers)


class TestRegistrarDevolucion:

    def test_enfermera_registra_devolucion(self, client, hospital, enfermera, enfermera_headers):
        paciente = hospital["pacientes"][0]
        response = _registrar(client, enfermera_headers, paciente.id, comentarios="Sobrante")
        assert response.status_code == status.HTTP_201_CREATED

        result = response.json()
        assert result["paciente_id"] == paciente.id
        assert result["generado_por"] == enfermera.id
        assert result["estado"] == "PENDING"
        assert result["revisado_por"] is None
        assert result["comentarios"] == "Sobrante"
        assert {i["codigo_insumo"] for i in result["insumos"]} == {"INS-001", "INS-002"}

    def test_sin_insumos(self, client, hospital, enfermera_headers):
        response = _registrar(client, enfermera_headers, hospital["pacientes"][0].id, insumos=[])
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_cantidad_debe_ser_positiva(self, client, hospital, enfermera_headers):
        insumos = [{"codigo_insumo": "INS-001", "nombre_insumo": "Dipirona", "cantidad_devuelta": 0}]
        response = _registrar(client, enfermera_headers, hospital["pacientes"][0].id, insumos=insumos)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_paciente_inexistente(self, client, enfermera_headers):
        response = _registrar(client, enfermera_headers, "no-existe")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_requiere_autenticacion(self, client, hospital):
        response = _registrar(client, {}, hospital["pacientes"][0].id)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestRevisarDevolucion:

    def test_regente_aprueba(self, client, hospital, enfermera_headers, regente, regente_headers):
        devolucion = _registrar(client, enfermera_headers, hospital["pacientes"][0].id).json()

        response = client.put(
            f"/api/devoluciones-manuales/{devolucion['id']}",
            json={"estado": "APPROVED"},
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_200_OK

        result = response.json()
        assert result["estado"] == "APPROVED"
        assert result["revisado_por"] == regente.id
        assert result["fecha_aprobacion"] is not None

    def test_admin_rechaza(self, client, hospital, enfermera_headers, admin, admin_headers):
        devolucion = _registrar(client, enfermera_headers, hospital["pacientes"][0].id).json()

        response = client.put(
            f"/api/devoluciones-manuales/{devolucion['id']}",
            json={"estado": "REJECTED", "comentarios": "Insumo no corresponde"},
            headers=admin_headers
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["estado"] == "REJECTED"
        assert response.json()["revisado_por"] == admin.id

    def test_enfermera_no_aprueba(self, client, hospital, enfermera_headers):
        devolucion = _registrar(client, enfermera_headers, hospital["pacientes"][0].id).json()

        response = client.put(
            f"/api/devoluciones-manuales/{devolucion['id']}",
            json={"estado": "APPROVED"},
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_validador_no_rechaza(self, client, hospital, enfermera_headers, validador_headers):
        devolucion = _registrar(client, enfermera_headers, hospital["pacientes"][0].id).json()

        response = client.put(
            f"/api/devoluciones-manuales/{devolucion['id']}",
            json={"estado": "REJECTED"},
            headers=validador_headers
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_enfermera_corrige_insumos_pendientes(self, client, hospital, enfermera_headers):
        devolucion = _registrar(client, enfermera_headers, hospital["pacientes"][0].id).json()

        response = client.put(
            f"/api/devoluciones-manuales/{devolucion['id']}",
            json={"insumos": [INSUMOS[0]]},
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_200_OK
        insumos = response.json()["insumos"]
        assert len(insumos) == 1
        assert insumos[0]["codigo_insumo"] == "INS-001"

    def test_no_cambia_insumos_revisada(self, client, hospital, enfermera_headers, regente_headers):
        devolucion = _registrar(client, enfermera_headers, hospital["pacientes"][0].id).json()
        client.put(
            f"/api/devoluciones-manuales/{devolucion['id']}",
            json={"estado": "APPROVED"},
            headers=regente_headers
        )

        response = client.put(
            f"/api/devoluciones-manuales/{devolucion['id']}",
            json={"insumos": [INSUMOS[1]]},
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_enfermera_no_reabre_revisada(self, client, hospital, enfermera_headers, regente_headers):
        devolucion = _registrar(client, enfermera_headers, hospital["pacientes"][0].id).json()
        url = f"/api/devoluciones-manuales/{devolucion['id']}"
        client.put(url, json={"estado": "APPROVED"}, headers=regente_headers)

        response = client.put(url, json={"estado": "PENDING"}, headers=enfermera_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

        response = client.put(url, json={"insumos": [INSUMOS[1]]}, headers=enfermera_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        result = client.get(url, headers=enfermera_headers).json()
        assert result["estado"] == "APPROVED"
        assert {i["codigo_insumo"] for i in result["insumos"]} == {"INS-001", "INS-002"}

    def test_regente_reabre_revisada(self, client, hospital, enfermera_headers, regente_headers):
        devolucion = _registrar(client, enfermera_headers, hospital["pacientes"][0].id).json()
        url = f"/api/devoluciones-manuales/{devolucion['id']}"
        client.put(url, json={"estado": "REJECTED"}, headers=regente_headers)

        response = client.put(url, json={"estado": "PENDING"}, headers=regente_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["estado"] == "PENDING"

    def test_devolucion_inexistente(self, client, regente_headers):
        response = client.put(
            "/api/devoluciones-manuales/no-existe",
            json={"estado": "APPROVED"},
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestConsultarDevoluciones:

    def test_listar_y_filtrar(self, client, hospital, enfermera_headers, regente_headers):
        paciente_a, paciente_b = hospital["pacientes"]
        aprobada = _registrar(client, enfermera_headers, paciente_a.id).json()
        _registrar(client, enfermera_headers, paciente_b.id)
        client.put(
            f"/api/devoluciones-manuales/{aprobada['id']}",
            json={"estado": "APPROVED"},
            headers=regente_headers
        )

        todas = client.get("/api/devoluciones-manuales", headers=regente_headers).json()
        assert len(todas) == 2

        pendientes = client.get(
            "/api/devoluciones-manuales",
            params={"estado": "PENDING"},
            headers=regente_headers
        ).json()
        assert [d["paciente_id"] for d in pendientes] == [paciente_b.id]

        del_paciente = client.get(
            "/api/devoluciones-manuales",
            params={"paciente_id": paciente_a.id},
            headers=regente_headers
        ).json()
        assert [d["id"] for d in del_paciente] == [aprobada["id"]]

    def test_obtener_y_eliminar(self, client, hospital, enfermera_headers):
        devolucion = _registrar(client, enfermera_headers, hospital["pacientes"][0].id).json()
        url = f"/api/devoluciones-manuales/{devolucion['id']}"

        response = client.get(url, headers=enfermera_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["paciente"]["id_externo"] == "CC1001"

        response = client.delete(url, headers=enfermera_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is True

        response = client.get(url, headers=enfermera_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestCausasDevolucion:

    def test_listar_causas_activas(self, client, session, enfermera_headers):
        session.add(CausaDevolucion(codigo=2, descripcion="Cambio de vía"))
        session.add(CausaDevolucion(codigo=1, descripcion="Alta médica"))
        session.add(CausaDevolucion(codigo=3, descripcion="Descontinuado", activa=False))
        session.commit()

        response = client.get("/api/causas-devolucion", headers=enfermera_headers)
        assert response.status_code == status.HTTP_200_OK
        assert [c["codigo"] for c in response.json()] == [1, 2]
