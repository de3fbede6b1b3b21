"""Bonsplit - разбор немецких кассовых чеков и расчёт долгов в группе."""

__version__ = "0.1.0"
