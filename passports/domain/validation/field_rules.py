from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from passports.domain.models import Passport, ValidationErrorItem

BYR = "byr"
IYR = "iyr"
EYR = "eyr"
HGT = "hgt"
HCL = "hcl"
ECL = "ecl"
PID = "pid"
CID = "cid"

REQUIRED_FIELDS: frozenset[str] = frozenset({BYR, IYR, EYR, HGT, HCL, ECL, PID})
OPTIONAL_FIELD = CID

DIGITS_RE = re.compile(r"^[0-9]+$")
HGT_RE = re.compile(r"^(?P<amount>[0-9]+)(?P<unit>cm|in)$")
HCL_RE = re.compile(r"^#[0-9a-f]{6}$")
ECL_RE = re.compile(r"^(?:amb|blu|brn|gry|grn|hzl|oth)$")
PID_RE = re.compile(r"^[0-9]{9}$")

HEIGHT_RANGES: dict[str, tuple[int, int]] = {
    "cm": (150, 193),
    "in": (59, 76),
}


def parse_uint_strict(value: str) -> int:
    """
    Назначение:
        Десятичное неотрицательное целое без знака и пробелов.
        int() сам по себе принимает '+5', ' 5' и '1_0', поэтому сначала regex.
    """
    if DIGITS_RE.fullmatch(value) is None:
        raise ValueError(f"Invalid unsigned integer: {value!r}")
    return int(value)


def _year_check(low: int, high: int) -> Callable[[str], bool]:
    def _inner(value: str) -> bool:
        try:
            year = parse_uint_strict(value)
        except ValueError:
            return False
        return low <= year <= high

    return _inner


def _height_check(value: str) -> bool:
    m = HGT_RE.fullmatch(value)
    if m is None:
        return False
    low, high = HEIGHT_RANGES[m.group("unit")]
    try:
        amount = parse_uint_strict(m.group("amount"))
    except ValueError:
        return False
    return low <= amount <= high


def _pattern_check(pattern: re.Pattern[str]) -> Callable[[str], bool]:
    def _inner(value: str) -> bool:
        return pattern.fullmatch(value) is not None

    return _inner


@dataclass(frozen=True)
class FieldRule:
    """
    Назначение:
        Правило одного поля паспорта: берёт значение по имени и проверяет его.

    Контракт:
        - apply(passport, errors) -> bool
        - отсутствующее поле: ошибка REQUIRED_FIELD_MISSING
        - проваленная проверка: ошибка с кодом code
    """

    name: str
    code: str
    message: str
    check: Callable[[str], bool]

    def apply(self, passport: Passport, errors: Optional[list[ValidationErrorItem]] = None) -> bool:
        raw = passport.get(self.name)
        if raw is None:
            if errors is not None:
                errors.append(
                    ValidationErrorItem(code="REQUIRED_FIELD_MISSING", field=self.name, message=f"{self.name} is required")
                )
            return False
        if self.check(raw):
            return True
        if errors is not None:
            errors.append(ValidationErrorItem(code=self.code, field=self.name, message=self.message))
        return False


FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule(BYR, "INVALID_YEAR", "byr must be a year in 1920..2002", _year_check(1920, 2002)),
    FieldRule(IYR, "INVALID_YEAR", "iyr must be a year in 2010..2020", _year_check(2010, 2020)),
    FieldRule(EYR, "INVALID_YEAR", "eyr must be a year in 2020..2030", _year_check(2020, 2030)),
    FieldRule(HGT, "INVALID_HEIGHT", "hgt must be 150..193cm or 59..76in", _height_check),
    FieldRule(HCL, "INVALID_HAIR_COLOR", "hcl must be '#' followed by 6 lowercase hex digits", _pattern_check(HCL_RE)),
    FieldRule(ECL, "INVALID_EYE_COLOR", "ecl must be one of amb|blu|brn|gry|grn|hzl|oth", _pattern_check(ECL_RE)),
    FieldRule(PID, "INVALID_PASSPORT_ID", "pid must be exactly 9 digits", _pattern_check(PID_RE)),
)
