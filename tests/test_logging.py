"""Tests del logging estructurado."""

import io
import json
import logging
from decimal import Decimal

import pytest

from nominas.logging_config import configure_logging, reset_logging


@pytest.fixture
def stream():
    reset_logging()
    buffer = io.StringIO()
    configure_logging(level=logging.DEBUG, stream=buffer)
    yield buffer
    reset_logging()


def _lines(buffer):
    return [json.loads(line) for line in buffer.getvalue().splitlines()]


class TestStructuredLogging:

    def test_json_line_with_extra(self, stream):
        logging.getLogger("nominas.test").info("Nómina calculada", extra={"net_salary": Decimal("1570.60")})

        [line] = _lines(stream)
        assert line["level"] == "INFO"
        assert line["logger"] == "nominas.test"
        assert line["message"] == "Nómina calculada"
        assert line["net_salary"] == "1570.60"

    def test_exception_info(self, stream):
        try:
            raise ValueError("fallo")
        except ValueError:
            logging.getLogger("nominas.test").exception("Error")

        [line] = _lines(stream)
        assert line["exc_type"] == "ValueError"
        assert line["exc_message"] == "fallo"

    def test_configure_is_idempotent(self, stream):
        """Una segunda llamada no añade manejadores."""
        handlers = list(logging.getLogger("nominas").handlers)

        configure_logging(level=logging.DEBUG, stream=io.StringIO())

        assert logging.getLogger("nominas").handlers == handlers

    def test_batch_logs(self, stream):
        from nominas.models import GenerationRequest
        from nominas.services import generate_payslips

        generate_payslips(GenerationRequest.model_validate({
            "company_id": "C1",
            "month": 1,
            "year": 2025,
            "employees": [{"employee_id": "E1", "employee_name": "Ana", "base_salary_monthly": "2000"}],
        }))

        messages = [line["message"] for line in _lines(stream)]
        assert "Generación de nóminas iniciada" in messages
        assert "Generación de nóminas terminada" in messages
