"""Servicios de la aplicación alrededor del motor de cálculo."""

from .generacion import generate_payslips, build_payslip_record

__all__ = ["generate_payslips", "build_payslip_record"]
