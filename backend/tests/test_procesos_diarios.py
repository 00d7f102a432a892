"""
Tests para procesos diarios.
"""
from datetime import datetime, timedelta

from fastapi import status

from kumpels.models.enums import EstadoProcesoEnum, EstadoProcesoDiarioEnum, PasoProcesoEnum


class TestCrearProcesoDiario:

    def test_regente_inicia_proceso_diario(self, client, regente, regente_headers):
        response = client.post(
            "/api/procesos-diarios",
            json={"fecha": "2026-10-19T15:30:00", "notas": "Turno mañana"},
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_201_CREATED

        result = response.json()
        assert result["fecha"].startswith("2026-10-19T00:00:00")
        assert result["estado"] == "ACTIVE"
        assert result["iniciado_por"] == regente.id
        assert result["total_procesos"] == 0

    def test_un_proceso_por_dia(self, client, regente_headers):
        client.post(
            "/api/procesos-diarios",
            json={"fecha": "2026-10-19T08:00:00"},
            headers=regente_headers
        )
        response = client.post(
            "/api/procesos-diarios",
            json={"fecha": "2026-10-19T20:00:00"},
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_fecha_obligatoria(self, client, regente_headers):
        response = client.post("/api/procesos-diarios", json={}, headers=regente_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_enfermera_no_inicia_proceso_diario(self, client, enfermera_headers):
        response = client.post(
            "/api/procesos-diarios",
            json={"fecha": "2026-10-19T08:00:00"},
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestConsultarProcesoDiario:

    def test_hoy_sin_proceso(self, client, enfermera_headers):
        response = client.get("/api/procesos-diarios/hoy", headers=enfermera_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() is None

    def test_hoy_con_proceso(self, client, regente, crear_proceso_diario, enfermera_headers):
        diario = crear_proceso_diario(regente)

        response = client.get("/api/procesos-diarios/hoy", headers=enfermera_headers)
        assert response.json()["id"] == diario.id

    def test_listar_por_fecha_descendente(self, client, regente, crear_proceso_diario, enfermera_headers):
        ayer = crear_proceso_diario(regente, fecha=datetime.utcnow() - timedelta(days=1))
        hoy = crear_proceso_diario(regente)

        result = client.get("/api/procesos-diarios", headers=enfermera_headers).json()
        assert [p["id"] for p in result] == [hoy.id, ayer.id]

    def test_obtener_cuenta_procesos(self, client, hospital, regente, crear_proceso_diario,
                                     crear_proceso, enfermera_headers):
        diario = crear_proceso_diario(regente)
        for paciente in hospital["pacientes"]:
            crear_proceso(paciente.id, PasoProcesoEnum.PREDESPACHO, diario.id)

        result = client.get(f"/api/procesos-diarios/{diario.id}", headers=enfermera_headers).json()
        assert result["total_procesos"] == 2
        assert len(result["procesos"]) == 2

    def test_obtener_inexistente(self, client, enfermera_headers):
        response = client.get("/api/procesos-diarios/no-existe", headers=enfermera_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestActualizarProcesoDiario:

    def test_completar_registra_cierre(self, client, regente, crear_proceso_diario, regente_headers):
        diario = crear_proceso_diario(regente)

        response = client.put(
            f"/api/procesos-diarios/{diario.id}",
            json={"estado": "COMPLETED"},
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["estado"] == "COMPLETED"
        assert response.json()["completado_en"] is not None

    def test_limpiar_notas(self, client, regente, crear_proceso_diario, regente_headers):
        diario = crear_proceso_diario(regente, notas="Turno con faltante de dipirona")

        response = client.put(
            f"/api/procesos-diarios/{diario.id}",
            json={"notas": ""},
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["notas"] == ""
        assert response.json()["estado"] == "ACTIVE"

    def test_no_cancelar_con_predespacho_completado(self, client, hospital, regente,
                                                    crear_proceso_diario, crear_proceso,
                                                    regente_headers):
        diario = crear_proceso_diario(regente)
        crear_proceso(
            hospital["pacientes"][0].id,
            PasoProcesoEnum.PREDESPACHO,
            diario.id,
            estado=EstadoProcesoEnum.COMPLETADO
        )

        response = client.put(
            f"/api/procesos-diarios/{diario.id}",
            json={"estado": "CANCELLED"},
            headers=regente_headers
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_cancelar_sin_predespachos(self, client, regente, crear_proceso_diario, regente_headers):
        diario = crear_proceso_diario(regente)

        response = client.put(
            f"/api/procesos-diarios/{diario.id}",
            json={"estado": "CANCELLED"},
            headers=regente_headers
        )
        assert response.json()["estado"] == EstadoProcesoDiarioEnum.CANCELADO.value


class TestReinicio:

    def test_reinicio_elimina_procesos(self, client, hospital, regente, crear_proceso_diario,
                                       crear_proceso, regente_headers):
        diario = crear_proceso_diario(regente)
        for paciente in hospital["pacientes"]:
            crear_proceso(paciente.id, PasoProcesoEnum.PREDESPACHO, diario.id)

        response = client.post("/api/procesos-diarios/reinicio", headers=regente_headers)
        assert response.status_code == status.HTTP_200_OK

        result = response.json()
        assert result["procesos_diarios_eliminados"] == 1
        assert result["procesos_medicacion_eliminados"] == 2
        assert result["escaneos_qr_eliminados"] == 0

        assert client.get("/api/procesos-diarios", headers=regente_headers).json() == []

    def test_reinicio_conserva_errores_reportados(self, client, session, hospital, regente,
                                                  crear_proceso_diario, crear_proceso,
                                                  regente_headers):
        from kumpels.models.registro_error import RegistroErrorProceso

        diario = crear_proceso_diario(regente)
        proceso = crear_proceso(hospital["pacientes"][0].id, PasoProcesoEnum.ALISTAMIENTO, diario.id)
        registro = RegistroErrorProceso(
            paciente_id=proceso.paciente_id,
            proceso_medicacion_id=proceso.id,
            paso=PasoProcesoEnum.ALISTAMIENTO,
            mensaje="Faltante de insumo",
            reportado_por=regente.id,
            rol_reportante=regente.rol.value,
        )
        session.add(registro)
        session.commit()
        registro_id = registro.id

        client.post("/api/procesos-diarios/reinicio", headers=regente_headers)

        session.expire_all()
        registro = session.get(RegistroErrorProceso, registro_id)
        assert registro is not None
        assert registro.proceso_medicacion_id is None

    def test_validador_no_reinicia(self, client, validador_headers):
        response = client.post("/api/procesos-diarios/reinicio", headers=validador_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN
