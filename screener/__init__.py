"""Screening of registry records against an MSP acquisition thesis."""

__version__ = "0.1.0"
