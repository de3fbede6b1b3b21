import pytest

from bonsplit.domain.exceptions import ParsingConfigurationError
from bonsplit.parsing.locales.config_loader import (
    ClassificationConfig,
    ConfigLoader,
    LocaleConfig,
)

# Mock data
MOCK_BASE_YAML = """
common_skip:
  - skip1
  - skip2

summary_markers:
  - 'summe'

total_patterns:
  - 'summe\\s*{amount}'
"""

MOCK_LOCALE_YAML = """
locale_code: test_LOC
currency: TEST

skip_keywords:
  - $extends: common_skip
  - local_skip

total_markers:
  - $extends: summary_markers

discount_keywords:
  - local_discount_only

total_patterns:
  - $extends: total_patterns

deposit_label: Leergut
"""

MOCK_NO_CURRENCY_YAML = """
locale_code: test_BROKEN
"""


@pytest.fixture
def mock_config_files(tmp_path):
    """Creates temporary base.yaml and parsing.yaml for testing."""
    locale_dir = tmp_path / "test_LOC"
    locale_dir.mkdir()
    (tmp_path / "base.yaml").write_text(MOCK_BASE_YAML, encoding="utf-8")
    (locale_dir / "parsing.yaml").write_text(MOCK_LOCALE_YAML, encoding="utf-8")

    broken_dir = tmp_path / "test_BROKEN"
    broken_dir.mkdir()
    (broken_dir / "parsing.yaml").write_text(MOCK_NO_CURRENCY_YAML, encoding="utf-8")

    return tmp_path


def test_load_base_config_success(mock_config_files):
    """Test that base config is loaded correctly."""
    config = LocaleConfig._load_base_config(mock_config_files)
    assert config["common_skip"] == ["skip1", "skip2"]


def test_load_base_config_missing(tmp_path):
    assert LocaleConfig._load_base_config(tmp_path) == {}


def test_resolve_extends_list(mock_config_files):
    """Test resolution of $extends in a list."""
    base_config = LocaleConfig._load_base_config(mock_config_files)

    # Case 1: Extend + Local
    resolved = LocaleConfig._resolve_extends(["$extends: common_skip", "local_item"], base_config)
    assert resolved == ["skip1", "skip2", "local_item"]

    # Case 2: dict form (YAML without quotes)
    resolved = LocaleConfig._resolve_extends([{"$extends": "summary_markers"}], base_config)
    assert resolved == ["summe"]

    # Case 3: No Extend
    assert LocaleConfig._resolve_extends(["pure_local"], base_config) == ["pure_local"]


def test_resolve_extends_missing_key(mock_config_files):
    """Test that missing key in base config is handled gracefully."""
    base_config = LocaleConfig._load_base_config(mock_config_files)
    resolved = LocaleConfig._resolve_extends(["$extends: invalid_key", "local"], base_config)
    assert resolved == ["local"]


def test_full_config_loading_inheritance(mock_config_files):
    """Test full integration: loading a locale config with inheritance."""
    config = LocaleConfig._load_locale_yaml(mock_config_files, "test_LOC")

    # Inherited + Local
    assert config.classification.skip_keywords == ["skip1", "skip2", "local_skip"]
    # Local only
    assert config.classification.discount_keywords == ["local_discount_only"]
    # Not declared at all
    assert config.classification.deposit_keywords == []
    assert config.classification.deposit_label == "Leergut"
    assert config.classification.deposit_return_label == "Pfandrückgabe"

    # {amount} substituted, regex compiled once
    match = config.totals.compiled_patterns[0].search("SUMME 12,50")
    assert match.group(1) == "12,50"


def test_missing_locale_raises(mock_config_files):
    with pytest.raises(ParsingConfigurationError):
        LocaleConfig._load_locale_yaml(mock_config_files, "xx_XX")


def test_missing_required_field_raises(mock_config_files):
    with pytest.raises(ParsingConfigurationError, match="currency"):
        LocaleConfig._load_locale_yaml(mock_config_files, "test_BROKEN")


def test_empty_keyword_list_matches_nothing():
    config = ClassificationConfig(
        skip_keywords=[],
        total_markers=[],
        discount_keywords=[],
        deposit_keywords=[],
        deposit_return_keywords=[],
    )
    assert config.skip_re.search("anything") is None
    assert config.discount_re.search("anything") is None


class TestGermanLocale:
    """Реальный конфиг de_DE."""

    def test_load_cached(self):
        LocaleConfig._cache.clear()
        first = ConfigLoader().load("de_DE")
        assert first is LocaleConfig.load("de_DE")
        assert first.currency == "EUR"

    def test_vocabularies_resolved(self, locale_config):
        classification = locale_config.classification
        assert "mwst" in classification.skip_keywords
        assert "zu zahlen" in classification.total_markers
        assert locale_config.totals.total_patterns[0].startswith("zu zahlen")
