"""
Tests de la generación de nóminas por lotes.

Covers:
- Nóminas correctas con su registro para guardar
- Aislamiento de errores por empleado
- Fallos al guardar y fuera de tiempo
- Valores por defecto (prorrata, baja desde el día 1)
"""

import threading
from datetime import date
from decimal import Decimal

import pytest

from nominas.calculadora import calculate_payslip
from nominas.exceptions import ConfigurationError
from nominas.models import EmployeeGenerationInput, GenerationRequest
from nominas.services import generacion
from nominas.services.generacion import (
    TIMEOUT_MESSAGE,
    build_employee_input,
    build_payslip_record,
    build_monthly_variables,
    generate_payslips,
)


def _employee(employee_id="E1", **overrides):
    data = {
        "employee_id": employee_id,
        "employee_name": "Ana María López",
        "dni": "12345678Z",
        "base_salary_monthly": "2000",
        "cotization_group": 7,
        "irpf_percentage": "15",
        "prorated_bonuses": "0",
    }
    data.update(overrides)
    return data


def _request(*employees, **overrides):
    data = {
        "company_id": "C1",
        "company_data": {"name": "Ejemplo SL", "cif": "B12345678"},
        "month": 4,
        "year": 2025,
        "employees": list(employees) or [_employee()],
    }
    data.update(overrides)
    return GenerationRequest.model_validate(data)


class TestGeneratePayslips:

    def test_single_employee(self):
        report = generate_payslips(_request())

        assert report.success is True
        assert report.summary.total == 1
        assert report.message == "1 nómina(s) generada(s) correctamente"

        record = report.results[0].record
        assert record.net_pay == Decimal("1570.60")
        assert record.cost_empresa == Decimal("2639.60")
        assert record.gross_salary == Decimal("2000.00")
        assert record.base_ss == Decimal("2000.00")
        assert record.total_contributions == Decimal("639.60")
        assert record.status == "generated"

    def test_record_period_and_document(self):
        record = generate_payslips(_request()).results[0].record

        assert record.period_start == date(2025, 4, 1)
        assert record.period_end == date(2025, 4, 30)
        assert record.document_name == "Nomina_Ana_María_López_04_2025"
        assert record.employee["dni"] == "12345678Z"
        assert record.company["cif"] == "B12345678"

    def test_record_line_items(self):
        record = generate_payslips(_request()).results[0].record

        assert [line.concept for line in record.perceptions] == ["Salario Base"]
        irpf = next(line for line in record.deductions if line.concept == "IRPF")
        assert irpf.amount == Decimal("300.00")
        at_ep = next(line for line in record.contributions if line.concept == "AT/EP")
        assert at_ep.base == Decimal("2000.00")
        assert at_ep.rate == Decimal("1.50")

    def test_calculation_details_are_json(self):
        details = generate_payslips(_request()).results[0].record.calculation_details

        assert details["worker_deductions"]["irpf"] == "300.00"
        assert details["warnings"] == []

    def test_results_keep_request_order(self):
        report = generate_payslips(_request(*(_employee(f"E{i}") for i in range(6))), max_workers=3)

        assert [r.employee_id for r in report.results] == [f"E{i}" for i in range(6)]

    def test_company_at_ep_override(self):
        report = generate_payslips(_request(payroll_config={"at_ep_rate": "3.00"}))

        assert report.results[0].result.company_deductions.at_ep == Decimal("60.00")

    def test_explicit_override_wins(self):
        report = generate_payslips(
            _request(payroll_config={"at_ep_rate": "3.00"}),
            {"at_ep_rate": "2.00"},
        )

        assert report.results[0].result.company_deductions.at_ep == Decimal("40.00")

    def test_broken_override(self):
        with pytest.raises(ConfigurationError):
            generate_payslips(_request(), {"annual_parameters": {"worker_rates": "mucho"}})


class TestErrorIsolation:

    def test_invalid_employee_does_not_stop_batch(self):
        report = generate_payslips(_request(
            _employee("E1"),
            _employee("E2", contract_type="autonomo"),
            _employee("E3", cotization_group=15),
        ))

        assert report.success is False
        assert report.summary.success == 1
        assert report.summary.errors == 2
        assert report.message == "1 nómina(s) generada(s) correctamente, 2 error(es)"
        assert "INVALID_CONTRACT_TYPE" in report.results[1].error
        assert "INVALID_COTIZATION_GROUP" in report.results[2].error
        assert report.results[1].record is None

    def test_persist_failure_fails_only_that_employee(self):
        saved = []

        def persist(record):
            if record.employee_id == "E2":
                raise RuntimeError("disco lleno")
            saved.append(record.employee_id)

        report = generate_payslips(_request(_employee("E1"), _employee("E2"), _employee("E3")), persist=persist)

        assert sorted(saved) == ["E1", "E3"]
        assert report.results[1].success is False
        assert report.results[1].error == "Error guardando nómina: disco lleno"

    def test_timed_out_employee_not_persisted(self, monkeypatch):
        release = threading.Event()
        original = generacion._calculate_employee

        def slow(request, emp, config):
            if emp.employee_id == "LENTO":
                release.wait(5)
            return original(request, emp, config)

        monkeypatch.setattr(generacion, "_calculate_employee", slow)
        saved = []

        try:
            report = generate_payslips(
                _request(_employee("E1"), _employee("LENTO")),
                persist=lambda record: saved.append(record.employee_id),
                timeout=0.5,
            )
        finally:
            release.set()

        assert saved == ["E1"]
        assert report.results[1].success is False
        assert report.results[1].error == TIMEOUT_MESSAGE


class TestBuildInputs:

    def test_default_prorated_bonuses(self):
        emp = EmployeeGenerationInput.model_validate(_employee(prorated_bonuses=None))

        assert build_employee_input(emp).prorated_bonuses == Decimal("333.33")

    def test_part_time_from_percentage(self):
        emp = EmployeeGenerationInput.model_validate(_employee(full_time=False, workday_percentage="50"))

        employee = build_employee_input(emp)

        assert employee.workday_type.value == "PARCIAL"
        assert employee.part_time_coefficient == Decimal("0.5")

    def test_it_days_start_on_day_one(self):
        emp = EmployeeGenerationInput.model_validate(
            _employee(variables={"worked_days": 10, "it_days": 20})
        )

        disability = build_monthly_variables(emp, 30).temporary_disability

        assert (disability.start_day, disability.end_day, disability.absolute_days_since_start) == (1, 20, 20)

    def test_it_absolute_days_for_continuing_leave(self):
        emp = EmployeeGenerationInput.model_validate(
            _employee(variables={"worked_days": 0, "it_days": 30, "it_absolute_days": 45})
        )

        assert build_monthly_variables(emp, 30).temporary_disability.absolute_days_since_start == 45

    def test_calendar_days_of_february(self):
        report = generate_payslips(_request(_employee(variables={"worked_days": 28}), month=2))

        assert report.success is True
        assert report.results[0].record.period_end == date(2025, 2, 28)


class TestDefaultWorkedDays:
    """Sin días trabajados informados: días del mes - vacaciones - baja."""

    def test_february_without_worked_days(self):
        report = generate_payslips(_request(month=2))

        assert report.success is True
        assert report.results[0].result.warnings == ()

    def test_thirty_one_day_month_has_no_missing_days_warning(self):
        report = generate_payslips(_request(month=1))

        assert report.success is True
        assert report.results[0].record.calculation_details["warnings"] == []

    def test_it_days_only(self):
        report = generate_payslips(_request(_employee(variables={"it_days": 5})))

        assert report.success is True
        assert report.results[0].result.it_detail.days_in_period == 5

    def test_derived_from_vacation_and_it(self):
        emp = EmployeeGenerationInput.model_validate(
            _employee(variables={"vacation_days": 4, "it_days": 6})
        )

        assert build_monthly_variables(emp, 31).worked_days == 21

    def test_explicit_worked_days_kept(self):
        emp = EmployeeGenerationInput.model_validate(_employee(variables={"worked_days": 12}))

        assert build_monthly_variables(emp, 30).worked_days == 12


class TestRecordLineItems:
    """Las líneas de la nómina suman los totales del cálculo."""

    def test_lines_add_up_to_totals(self, make_employee, make_variables, config):
        employee = make_employee(non_salary_complements=Decimal("80"))
        result = calculate_payslip(
            employee,
            make_variables(
                bonus_payment=Decimal("2000"),
                overtime_force_majeure_hours=Decimal("4"),
                other_salary_accruals=Decimal("10"),
                other_non_salary_accruals=Decimal("5"),
                other_deductions=Decimal("25"),
                advances=Decimal("50"),
            ),
            config,
            4,
        )
        emp = EmployeeGenerationInput.model_validate(_employee())

        record = build_payslip_record(_request(), emp, employee, result, config)

        assert sum(line.amount for line in record.perceptions) == record.gross_salary
        assert sum(line.amount for line in record.deductions) == result.worker_deductions.total_deductions
        assert sum(line.amount for line in record.contributions) == record.total_contributions

    def test_optional_lines_present(self, make_employee, make_variables, config):
        employee = make_employee(non_salary_complements=Decimal("80"))
        result = calculate_payslip(
            employee,
            make_variables(
                bonus_payment=Decimal("2000"),
                overtime_force_majeure_hours=Decimal("4"),
                other_deductions=Decimal("25"),
            ),
            config,
            4,
        )
        emp = EmployeeGenerationInput.model_validate(_employee())

        record = build_payslip_record(_request(), emp, employee, result, config)

        assert {"Paga Extra", "Complementos No Salariales", "Horas Extraordinarias Fuerza Mayor"} <= {
            line.concept for line in record.perceptions
        }
        assert {"Horas Extras Fuerza Mayor", "Otras Deducciones"} <= {line.concept for line in record.deductions}
        assert "Horas Extras Fuerza Mayor" in {line.concept for line in record.contributions}
