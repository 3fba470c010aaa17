"""Tests de la API HTTP."""

import pytest
from fastapi.testclient import TestClient

from nominas.app.main import app


@pytest.fixture
def client():
    return TestClient(app)


def _payload(**overrides):
    data = {
        "employee": {
            "baseSalaryMonthly": "2000",
            "cotizationGroup": 7,
            "irpfPercentage": "15",
            "contractType": "permanent",
            "workdayType": "full_time",
        },
        "variables": {"calendarDaysInMonth": 30, "workedDays": 30},
        "month": 3,
    }
    data.update(overrides)
    return data


class TestNominaEndpoint:

    def test_calculate(self, client):
        response = client.post("/api/nomina", json=_payload())

        assert response.status_code == 200
        body = response.json()
        assert body["netSalary"] == "1570.60"
        assert body["totalCostCompany"] == "2639.60"
        assert body["workerDeductions"]["irpf"] == "300.00"
        assert body["warnings"] == []

    def test_company_override(self, client):
        response = client.post("/api/nomina", json=_payload(companyOverride={"at_ep_rate": "3.00"}))

        assert response.status_code == 200
        assert response.json()["companyDeductions"]["atEp"] == "60.00"

    def test_invalid_group_is_400(self, client):
        payload = _payload()
        payload["employee"]["cotizationGroup"] = 12

        response = client.post("/api/nomina", json=payload)

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["code"] == "VALIDATION_ERROR"
        assert detail["issues"][0]["code"] == "INVALID_COTIZATION_GROUP"

    def test_unknown_contract_type_is_400(self, client):
        payload = _payload()
        payload["employee"]["contractType"] = "autonomo"

        response = client.post("/api/nomina", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"]["issues"][0]["code"] == "INVALID_CONTRACT_TYPE"

    def test_unknown_year_is_422(self, client):
        response = client.post("/api/nomina", json=_payload(year=1999))

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "CONFIGURATION_ERROR"

    def test_missing_month(self, client):
        payload = _payload()
        del payload["month"]

        assert client.post("/api/nomina", json=payload).status_code == 422


class TestGeneracionEndpoint:

    def test_generate(self, client):
        response = client.post(
            "/api/generacion",
            json={
                "companyId": "C1",
                "month": 1,
                "year": 2025,
                "employees": [
                    {
                        "employeeId": "E1",
                        "employeeName": "Luis Pérez",
                        "baseSalaryMonthly": "2000",
                        "cotizationGroup": 7,
                        "irpfPercentage": "15",
                        "prorated_bonuses": "0",
                        "variables": {"workedDays": 31},
                    },
                    {
                        "employeeId": "E2",
                        "employeeName": "Sin Contrato",
                        "baseSalaryMonthly": "2000",
                        "contractType": "desconocido",
                    },
                ],
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["summary"] == {"total": 2, "success": 1, "errors": 1}
        assert body["results"][0]["record"]["netPay"] == "1570.60"
        assert body["results"][1]["success"] is False

    def test_empty_employee_list(self, client):
        response = client.post(
            "/api/generacion",
            json={"companyId": "C1", "month": 1, "year": 2025, "employees": []},
        )

        assert response.status_code == 422
