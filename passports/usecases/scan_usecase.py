from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Callable, Iterable

from passports.domain.models import Passport
from passports.domain.validation.validator import PassportValidator
from passports.logging_setup import logEvent
from passports.reporter import Report


@dataclass(frozen=True)
class ScanSummary:
    records_total: int
    required_fields: int
    valid: int


class ScanUseCase:
    """
    Назначение/ответственность:
        Use-case подсчёта паспортов: прогоняет каждый паспорт через валидатор,
        считает прошедших структурную и полную проверку, заполняет отчёт.

    Поведение:
        - on_valid вызывается для каждого валидного паспорта в порядке файла.
        - Ошибки источника (формат/ввод-вывод) не перехватываются: прогон фатален.
    """

    def __init__(
        self,
        validator: PassportValidator | None = None,
        on_valid: Callable[[Passport], None] | None = None,
        report_items_limit: int = 100,
    ) -> None:
        self.validator = validator or PassportValidator()
        self.on_valid = on_valid
        self.report_items_limit = report_items_limit

    def run(
        self,
        passports: Iterable[Passport],
        logger: logging.Logger,
        run_id: str,
        report: Report,
    ) -> ScanSummary:
        total = required = valid = 0
        report.meta.report_items_limit = self.report_items_limit

        for passport in passports:
            total += 1
            result = self.validator.validate(passport)
            if result.has_required_fields:
                required += 1
            if result.valid:
                valid += 1
                if self.on_valid is not None:
                    self.on_valid(passport)
                continue

            codes = ",".join(sorted({e.code for e in result.errors}))
            logEvent(logger, logging.DEBUG, run_id, "validate", f"Passport at line {passport.line_no} rejected: {codes}")
            if len(report.items) < self.report_items_limit:
                report.items.append(
                    {
                        "line_no": passport.line_no,
                        "has_required_fields": result.has_required_fields,
                        "errors": [asdict(e) for e in result.errors],
                    }
                )
            else:
                report.meta.items_truncated = True

        report.summary.records_total = total
        report.summary.required_fields = required
        report.summary.valid = valid
        report.summary.invalid = total - valid
        logEvent(
            logger,
            logging.INFO,
            run_id,
            "validate",
            f"Scanned {total} passports: required_fields={required} valid={valid}",
        )
        return ScanSummary(records_total=total, required_fields=required, valid=valid)
