from __future__ import annotations

import logging
import time
from pathlib import Path

import typer

from passports.common.run_id import generate_run_id
from passports.common.time import getDurationMs
from passports.config import Settings, load_settings
from passports.domain.error_codes import ErrorCode
from passports.domain.exceptions import RecordFormatError
from passports.domain.models import Passport
from passports.infra.sources.passport_source import PassportFileSource
from passports.logging_setup import closeCommandLogger, createCommandLogger, logEvent
from passports.reporter import Report, createEmptyReport, finalizeReport, writeReportJson
from passports.usecases.scan_usecase import ScanUseCase

app = typer.Typer(no_args_is_help=True, add_completion=False)


def ensureDir(path: str | None) -> None:
    """
    Назначение:
        Создаёт каталог, если он задан и отсутствует.
    """
    if path:
        Path(path).mkdir(parents=True, exist_ok=True)


def requireInput(inputPath: str | None) -> None:
    """
    Назначение:
        Проверка наличия позиционного аргумента с путём к входному файлу.

    Поведение:
        - Если путь не задан: завершает процесс с exit code 2.
        - Существование файла не проверяется: ошибка открытия всплывает из источника.
    """
    if not inputPath:
        typer.echo("ERROR: input filename is required", err=True)
        raise typer.Exit(code=2)


def runWithReport(
    ctx: typer.Context,
    commandName: str,
    inputPath: str | None,
    runner,
) -> None:
    """
    Назначение:
        Унифицированная обвязка выполнения команд:
        - создаёт логгер (+ файл лога, если задан log_dir)
        - создаёт report skeleton
        - валидирует обязательный вход
        - гарантирует запись отчёта (если задан report_dir) в finally
    """
    runId = ctx.obj["runId"]
    settings: Settings = ctx.obj["settings"]
    sources = ctx.obj["sources"]

    startMonotonic = time.monotonic()

    logger, logFilePath = createCommandLogger(
        commandName=commandName,
        logDir=settings.log_dir,
        runId=runId,
        logLevel=settings.log_level,
    )

    report = createEmptyReport(runId=runId, command=commandName, configSources=sources)
    report.meta.input_path = inputPath

    exitCode: int | None = None

    try:
        logEvent(logger, logging.INFO, runId, "core", "Command started")

        try:
            requireInput(inputPath)
        except typer.Exit:
            logEvent(logger, logging.ERROR, runId, "source", "Input filename is missing")
            report.summary.failed = "input filename is required"
            exitCode = 2
            return

        exitCode = runner(logger, report)

    finally:
        durationMs = getDurationMs(startMonotonic, time.monotonic())
        finalizeReport(report=report, durationMs=durationMs, logFile=logFilePath)
        if settings.report_dir:
            reportPath = writeReportJson(report, settings.report_dir, f"report_{commandName}_{runId}")
            logEvent(logger, logging.INFO, runId, "report", f"Report written: {reportPath}")
        logEvent(logger, logging.INFO, runId, "core", f"Command finished with exit code {exitCode or 0}")
        closeCommandLogger(logger)

        if exitCode:
            raise typer.Exit(code=exitCode)


def _failRun(logger: logging.Logger, runId: str, report: Report, component: str, label: str, exc: Exception) -> int:
    code = ErrorCode.from_exception(exc)
    logEvent(logger, logging.ERROR, runId, component, f"{label}: {exc}")
    report.summary.failed = str(exc)
    report.summary.error_code = code.value
    typer.echo(f"ERROR: {label}: {exc}", err=True)
    return 2


def runScanCommand(ctx: typer.Context, inputPath: str | None, printValid: bool | None) -> None:
    runId = ctx.obj["runId"]
    settings: Settings = ctx.obj["settings"]
    print_valid = printValid if printValid is not None else settings.print_valid

    def echo_passport(passport: Passport) -> None:
        typer.echo(passport.to_line())

    def execute(logger, report) -> int:
        usecase = ScanUseCase(
            on_valid=echo_passport if print_valid else None,
            report_items_limit=settings.report_items_limit,
        )
        source = PassportFileSource(inputPath or "", encoding=settings.encoding)
        try:
            summary = usecase.run(source, logger=logger, run_id=runId, report=report)
        except RecordFormatError as exc:
            return _failRun(logger, runId, report, "parse", "record format error", exc)
        except (OSError, UnicodeDecodeError) as exc:
            return _failRun(logger, runId, report, "source", "input read error", exc)

        typer.echo(f"There are {summary.required_fields} passports with the required fields")
        typer.echo(f"There are {summary.valid} valid passports")
        return 0

    runWithReport(
        ctx=ctx,
        commandName="scan",
        inputPath=inputPath,
        runner=execute,
    )


@app.callback()
def main(
    ctx: typer.Context,
    config: str | None = typer.Option(None, "--config", help="Path to config.yml"),
    runId: str | None = typer.Option(None, "--run-id", help="Run identifier (UUID). If omitted, generated."),
    logLevel: str | None = typer.Option(None, "--log-level", help="Log level: ERROR|WARN|INFO|DEBUG"),
    logDir: str | None = typer.Option(None, "--log-dir", help="Directory for logs (no log file if omitted)."),
    reportDir: str | None = typer.Option(None, "--report-dir", help="Directory for reports (no report if omitted)."),
    reportItemsLimit: int | None = typer.Option(None, "--report-items-limit", help="Limit report items stored"),
    encoding: str | None = typer.Option(None, "--encoding", help="Input file encoding"),
):
    """
    Назначение:
        Глобальная инициализация CLI:
        - генерирует/принимает run_id
        - загружает настройки (CLI > ENV > config > defaults)
        - создаёт каталоги log/report
        - сохраняет всё в ctx.obj для подкоманд
    """
    if not runId:
        runId = generate_run_id()

    cliOverrides = {
        "log_level": logLevel,
        "log_dir": logDir,
        "report_dir": reportDir,
        "report_items_limit": reportItemsLimit,
        "encoding": encoding,
    }
    try:
        loaded = load_settings(config_path=config, cli_overrides=cliOverrides)
    except ValueError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=2)

    ensureDir(loaded.settings.log_dir)
    ensureDir(loaded.settings.report_dir)

    ctx.obj = {
        "runId": runId,
        "settings": loaded.settings,
        "sources": loaded.sources_used,
    }


@app.command()
def scan(
    ctx: typer.Context,
    inputPath: str | None = typer.Argument(None, metavar="FILE", help="Path to the passport batch file"),
    printValid: bool | None = typer.Option(None, "--print-valid", help="Echo every valid passport"),
):
    """
    Count passports with the required fields and fully valid passports.
    """
    runScanCommand(ctx, inputPath, printValid)
