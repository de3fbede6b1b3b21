"""
Config Loader для конфигураций локалей парсинга.

ЦКП: Загрузка единой модели LocaleConfig для локали.

Архитектурный принцип:
- base.yaml содержит общие словари (ключевые слова, паттерны итога)
- <locale>/parsing.yaml выбирает из них нужное через $extends и добавляет своё
- Регулярные выражения компилируются один раз при загрузке
"""

import re
import yaml
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Optional
from re import Pattern
from dataclasses import dataclass, field
from loguru import logger

from config.settings import DEFAULT_LOCALE
from bonsplit.domain.exceptions import ParsingConfigurationError

# Сумма в итоговой строке: "34,99", "-1.50"
AMOUNT_GROUP = r"(-?\d{1,6}[,.]\d{2})"


def _compile_prefixes(fragments: List[str]) -> Pattern:
    """Строка НАЧИНАЕТСЯ с одного из фрагментов."""
    if not fragments:
        return re.compile(r"(?!)")
    return re.compile(r"^(?:" + "|".join(fragments) + r")", re.IGNORECASE)


def _compile_any(fragments: List[str]) -> Pattern:
    """Фрагмент встречается где угодно в строке. Пустой список не совпадает ни с чем."""
    if not fragments:
        return re.compile(r"(?!)")
    return re.compile("|".join(fragments), re.IGNORECASE)


@dataclass
class ClassificationConfig:
    """
    Конфигурация для классификации строк.

    Содержит словари:
    - skip_keywords: служебные строки (налоги, реквизиты, разделители)
    - total_markers: начало итогового блока
    - discount_keywords: скидки
    - deposit_keywords / deposit_return_keywords: залог (Pfand) и его возврат
    """
    skip_keywords: List[str]
    total_markers: List[str]
    discount_keywords: List[str]
    deposit_keywords: List[str]
    deposit_return_keywords: List[str]
    deposit_label: str = "Pfand"
    deposit_return_label: str = "Pfandrückgabe"
    discount_label: str = "Rabatt"

    skip_re: Pattern = field(init=False, repr=False)
    total_marker_re: Pattern = field(init=False, repr=False)
    discount_re: Pattern = field(init=False, repr=False)
    deposit_re: Pattern = field(init=False, repr=False)
    deposit_return_re: Pattern = field(init=False, repr=False)

    def __post_init__(self):
        self.skip_re = _compile_prefixes(self.skip_keywords)
        self.total_marker_re = _compile_prefixes(self.total_markers)
        self.discount_re = _compile_any(self.discount_keywords)
        self.deposit_re = _compile_any(self.deposit_keywords)
        self.deposit_return_re = _compile_any(self.deposit_return_keywords)


@dataclass
class TotalConfig:
    """
    Конфигурация для извлечения итоговой суммы.

    total_patterns упорядочены от самого специфичного ("zu zahlen")
    к самому общему ("summe"), первый найденный выигрывает.
    """
    total_patterns: List[str]
    fallback_keywords: List[str]

    compiled_patterns: List[Pattern] = field(init=False, repr=False)
    compiled_fallback: List[Pattern] = field(init=False, repr=False)

    def __post_init__(self):
        self.compiled_patterns = [
            re.compile(p.replace("{amount}", AMOUNT_GROUP), re.IGNORECASE)
            for p in self.total_patterns
        ]
        self.compiled_fallback = [re.compile(kw, re.IGNORECASE) for kw in self.fallback_keywords]


@dataclass
class LocaleConfig:
    """
    Единая конфигурация локали для парсинга.

    Объединяет ClassificationConfig и TotalConfig.
    """
    locale_code: str
    currency: str
    classification: ClassificationConfig
    totals: TotalConfig

    # Кеш и директория конфигов
    _config_dir: ClassVar[Optional[Path]] = None
    _cache: ClassVar[Dict[str, "LocaleConfig"]] = {}

    @classmethod
    def load(cls, locale_code: str = DEFAULT_LOCALE) -> "LocaleConfig":
        """
        Загружает конфигурацию локали из YAML файлов (с кешированием).
        """
        if locale_code in cls._cache:
            return cls._cache[locale_code]

        config_dir = Path(cls._config_dir) if cls._config_dir else Path(__file__).parent
        locale_config = cls._load_locale_yaml(config_dir, locale_code)
        cls._cache[locale_code] = locale_config

        logger.debug(
            f"[ConfigLoader] Загружен LocaleConfig для {locale_code}: "
            f"{len(locale_config.classification.skip_keywords)} skip_keywords, "
            f"{len(locale_config.totals.total_patterns)} total_patterns"
        )

        return locale_config

    @classmethod
    def _load_base_config(cls, config_dir: Path) -> dict:
        """Загружает базовую конфигурацию из base.yaml."""
        base_file = config_dir / "base.yaml"

        if not base_file.exists():
            logger.warning(f"[ConfigLoader] base.yaml не найден: {base_file}")
            return {}

        with open(base_file, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def _resolve_extends(cls, value: Any, base_config: dict) -> Any:
        """
        Обрабатывает выборочное наследование через $extends для списков.
        Поддерживает форматы:
        - Строка: "$extends: key"
        - Словарь: {"$extends": "key"} (автоматически из YAML без кавычек)
        """
        if not isinstance(value, list):
            return value

        result = []
        for item in value:
            extended_key = None

            if isinstance(item, str) and item.startswith("$extends:"):
                extended_key = item.split(":", 1)[1].strip()
            elif isinstance(item, dict) and "$extends" in item:
                extended_key = item["$extends"]

            if extended_key:
                extended = base_config.get(extended_key, [])
                if not extended:
                    logger.warning(f"[ConfigLoader] Ключ '{extended_key}' для $extends не найден в base.yaml")
                result.extend(extended)
            else:
                result.append(item)
        return result

    @classmethod
    def _load_locale_yaml(cls, config_dir: Path, locale_code: str) -> "LocaleConfig":
        """Загружает конфиг локали из YAML файла."""
        base_config = cls._load_base_config(config_dir)

        config_file = config_dir / locale_code / "parsing.yaml"
        if not config_file.exists():
            raise ParsingConfigurationError(
                f"Конфиг для {locale_code} не найден: {config_file}",
                component="ConfigLoader",
            )

        with open(config_file, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}

        for required in ("locale_code", "currency"):
            if required not in config_data:
                raise ParsingConfigurationError(
                    f"Отсутствует {required} в {config_file}",
                    component="ConfigLoader",
                )

        def resolved(key: str) -> List[str]:
            return cls._resolve_extends(config_data.get(key, []), base_config)

        classification = ClassificationConfig(
            skip_keywords=resolved("skip_keywords"),
            total_markers=resolved("total_markers"),
            discount_keywords=resolved("discount_keywords"),
            deposit_keywords=resolved("deposit_keywords"),
            deposit_return_keywords=resolved("deposit_return_keywords"),
            deposit_label=config_data.get("deposit_label", "Pfand"),
            deposit_return_label=config_data.get("deposit_return_label", "Pfandrückgabe"),
            discount_label=config_data.get("discount_label", "Rabatt"),
        )

        totals = TotalConfig(
            total_patterns=resolved("total_patterns"),
            fallback_keywords=resolved("total_fallback_keywords"),
        )

        return LocaleConfig(
            locale_code=config_data["locale_code"],
            currency=config_data["currency"],
            classification=classification,
            totals=totals,
        )


class ConfigLoader:
    """
    Загрузчик конфигураций.
    Обертка над LocaleConfig.load для совместимости с DI.
    """
    def load(self, locale_code: str = DEFAULT_LOCALE) -> LocaleConfig:
        return LocaleConfig.load(locale_code)
