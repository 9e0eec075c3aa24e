from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Pair:
    """
    Назначение:
        Токен key:value.

    Инварианты:
        - key не содержит ':' и '\\n'.
        - value не содержит ':', пробела и '\\n'.
    """
    key: str
    value: str
    line_no: int = 0


@dataclass(frozen=True)
class Break:
    """
    Назначение:
        Токен пустой строки: разделитель записей.
    """
    line_no: int = 0


Token = Union[Pair, Break]


@dataclass
class Passport:
    """
    Назначение:
        Одна запись (паспорт), собранная из группы пар между пустыми строками.

    Поля:
        fields: имя поля -> значение (при повторе ключа побеждает последнее)
        line_no: строка первой пары записи
    """
    fields: dict[str, str]
    line_no: int = 0

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    def get(self, key: str) -> str | None:
        return self.fields.get(key)

    def to_line(self) -> str:
        return " ".join(f"{k}:{v}" for k, v in self.fields.items())


@dataclass
class ValidationErrorItem:
    """
    Назначение:
        Диагностика одного проваленного правила поля.
    """
    code: str
    field: str | None
    message: str


@dataclass
class PassportValidationResult:
    """
    Назначение:
        Результат проверки одного паспорта.
    """
    line_no: int
    has_required_fields: bool
    errors: list[ValidationErrorItem] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return self.has_required_fields and len(self.errors) == 0
