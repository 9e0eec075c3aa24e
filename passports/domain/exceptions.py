from __future__ import annotations

from dataclasses import dataclass

from passports.domain.error_codes import ErrorCode


@dataclass
class RecordFormatError(Exception):
    """
    Назначение:
        Фатальная ошибка формата входного потока (битый токен key:value).
    Инварианты/гарантии:
        - line_no/column указывают на символ, на котором разбор остановился (1-based).
        - Не перехватывается по записям: прерывает весь прогон.
    """

    code: ErrorCode
    message: str
    line_no: int | None = None
    column: int | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.line_no is None:
            return self.message
        return f"{self.message} (line {self.line_no}, column {self.column})"


class KeyFormatError(RecordFormatError):
    """
    Назначение:
        Ключ не завершён двоеточием: перевод строки или конец файла внутри ключа.
    """


class ValueFormatError(RecordFormatError):
    """
    Назначение:
        Двоеточие внутри значения.
    """


__all__ = ["RecordFormatError", "KeyFormatError", "ValueFormatError"]
