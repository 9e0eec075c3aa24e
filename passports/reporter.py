from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from passports.common.time import getNowIso


@dataclass
class ReportMeta:
    """
    Назначение:
        Метаданные отчёта запуска команды.
    """
    run_id: str
    command: str
    started_at: str
    finished_at: str | None = None
    duration_ms: int | None = None
    input_path: str | None = None
    log_file: str | None = None
    report_items_limit: int | None = None
    items_truncated: bool = False
    config_sources: list[str] = field(default_factory=list)


@dataclass
class ReportSummary:
    """
    Назначение:
        Сводные счётчики прогона.

    Поля:
        records_total: сколько паспортов собрано из файла
        required_fields: сколько прошли структурную проверку
        valid: сколько прошли и структурную, и построчную проверку
        invalid: records_total - valid
        failed: текст фатальной ошибки, если прогон прерван
    """
    records_total: int = 0
    required_fields: int = 0
    valid: int = 0
    invalid: int = 0
    failed: str | None = None
    error_code: str | None = None


@dataclass
class Report:
    """
    Назначение:
        Корневой объект отчёта.
    """
    meta: ReportMeta
    summary: ReportSummary
    items: list[dict]


def createEmptyReport(runId: str, command: str, configSources: list[str]) -> Report:
    """
    Назначение:
        Создаёт пустой отчёт-скелет для команды.
    """
    meta = ReportMeta(
        run_id=runId,
        command=command,
        started_at=getNowIso(),
        config_sources=configSources or [],
    )
    return Report(meta=meta, summary=ReportSummary(), items=[])


def finalizeReport(report: Report, durationMs: int, logFile: str | None) -> None:
    report.meta.finished_at = getNowIso()
    report.meta.duration_ms = durationMs
    report.meta.log_file = logFile


def writeReportJson(report: Report, reportDir: str, fileBaseName: str) -> str:
    """
    Назначение:
        Записывает report.json на диск.

    Входные данные:
        fileBaseName: str
            Например: "report_scan_<runId>"

    Выходные данные:
        str
            Полный путь к созданному файлу.
    """
    Path(reportDir).mkdir(parents=True, exist_ok=True)
    reportPath = str(Path(reportDir) / f"{fileBaseName}.json")

    data: dict[str, Any] = {
        "meta": asdict(report.meta),
        "summary": asdict(report.summary),
        "items": report.items,
    }

    with open(reportPath, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return reportPath
