from __future__ import annotations

from passports.domain.models import Passport, PassportValidationResult, ValidationErrorItem
from passports.domain.validation.field_rules import FIELD_RULES, OPTIONAL_FIELD, REQUIRED_FIELDS, FieldRule


class PassportValidator:
    """
    Назначение/ответственность:
        Две независимые проверки паспорта:
        - структурная: все обязательные поля на месте, лишним может быть только cid;
        - построчная: каждое обязательное поле проходит своё FieldRule.

    Инварианты:
        - Правила полей применяются только к паспортам, прошедшим структурную проверку.
        - is_valid и validate(...).valid всегда согласованы.
    """

    def __init__(self, rules: tuple[FieldRule, ...] = FIELD_RULES) -> None:
        self.rules = rules

    def has_required_fields(self, passport: Passport) -> bool:
        if not REQUIRED_FIELDS.issubset(passport.fields):
            return False
        size = len(passport)
        if size == len(REQUIRED_FIELDS):
            return True
        return size == len(REQUIRED_FIELDS) + 1 and OPTIONAL_FIELD in passport

    def is_valid(self, passport: Passport) -> bool:
        return self.has_required_fields(passport) and all(rule.apply(passport) for rule in self.rules)

    def validate(self, passport: Passport) -> PassportValidationResult:
        """
        Назначение:
            Полная проверка с накоплением ошибок по всем полям (для отчёта и логов).
        """
        if not self.has_required_fields(passport):
            missing = sorted(REQUIRED_FIELDS.difference(passport.fields))
            extra = sorted(set(passport.fields) - REQUIRED_FIELDS - {OPTIONAL_FIELD})
            structural = [
                ValidationErrorItem(code="REQUIRED_FIELD_MISSING", field=name, message=f"{name} is required")
                for name in missing
            ]
            structural.extend(
                ValidationErrorItem(code="UNEXPECTED_FIELD", field=name, message=f"{name} is not a passport field")
                for name in extra
            )
            return PassportValidationResult(line_no=passport.line_no, has_required_fields=False, errors=structural)

        errors: list[ValidationErrorItem] = []
        for rule in self.rules:
            rule.apply(passport, errors)
        return PassportValidationResult(line_no=passport.line_no, has_required_fields=True, errors=errors)
