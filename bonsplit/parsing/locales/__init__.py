"""Конфигурации локалей (YAML) и их загрузчик."""

from .config_loader import ConfigLoader, LocaleConfig, ClassificationConfig, TotalConfig

__all__ = ["ConfigLoader", "LocaleConfig", "ClassificationConfig", "TotalConfig"]
