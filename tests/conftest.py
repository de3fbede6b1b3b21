"""
Общие фикстуры тестов.

Конфигурация de_DE загружается из настоящих YAML файлов проекта.
"""

import pytest

from bonsplit.parsing.locales.config_loader import LocaleConfig


@pytest.fixture
def locale_config():
    LocaleConfig._cache.clear()
    return LocaleConfig.load("de_DE")


@pytest.fixture
def classification_config(locale_config):
    return locale_config.classification


@pytest.fixture
def total_config(locale_config):
    return locale_config.totals
