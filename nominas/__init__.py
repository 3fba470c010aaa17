"""Motor de cálculo de nóminas españolas."""

__version__ = "0.1.0"
