"""Конфигурация проекта Bonsplit."""
