"""
Исключения проекта Bonsplit.

Ядро (парсинг и расчёт долгов) не падает на плохих данных: результат
деградирует до "best effort". Исключения бросаются только на границах:
загрузка конфигурации и валидация входных контрактов.
"""


class BonsplitError(Exception):
    """Базовое исключение проекта."""

    def __init__(self, message: str, component: str = None, original_error: Exception = None):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = self.message
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class ParsingError(BonsplitError):
    """Базовое исключение домена Parsing."""

    def _format_message(self) -> str:
        return f"Parsing Error: {super()._format_message()}"


class ParsingConfigurationError(ParsingError):
    """Ошибка конфигурации локали (нет файла, нет обязательных полей)."""
    pass


class SettlementError(BonsplitError):
    """Базовое исключение домена Settlement."""

    def _format_message(self) -> str:
        return f"Settlement Error: {super()._format_message()}"


class SettlementInputError(SettlementError):
    """Входной запрос на расчёт не прошёл валидацию контракта."""
    pass
