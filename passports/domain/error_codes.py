from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """
    Назначение:
        Единая таксономия кодов фатальных ошибок разбора входного файла.
    """

    KEY_NEWLINE = "KEY_NEWLINE"
    KEY_EOF = "KEY_EOF"
    VALUE_COLON = "VALUE_COLON"
    INPUT_READ_ERROR = "INPUT_READ_ERROR"

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorCode":
        """
        Назначение:
            Подбор кода для исключения, прервавшего прогон.
        """
        code = getattr(exc, "code", None)
        if isinstance(code, cls):
            return code
        return cls.INPUT_READ_ERROR
