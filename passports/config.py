from __future__ import annotations

import codecs
from dataclasses import dataclass
from pathlib import Path
import os
import yaml

LOG_LEVELS = ("ERROR", "WARN", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    # Logging
    log_level: str = "INFO"
    log_dir: str | None = None

    # Report
    report_dir: str | None = None
    report_items_limit: int = 100

    # Input
    encoding: str = "utf-8"
    print_valid: bool = False


@dataclass(frozen=True)
class LoadedSettings:
    settings: Settings
    sources_used: list[str]


def _read_yaml_config(path: Path) -> dict:
    if not path.exists():
        return {}
    if not path.is_file():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data


def _env_get(name: str) -> str | None:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return None
    return v.strip()


def parse_bool(v: str | bool | None) -> bool | None:
    if v is None or isinstance(v, bool):
        return v
    vv = v.lower()
    if vv in ("1", "true", "yes", "y"):
        return True
    if vv in ("0", "false", "no", "n"):
        return False
    raise ValueError(f"Invalid boolean value: {v}")


def parse_int(v: str | int | None) -> int | None:
    if v is None:
        return None
    return int(v)


def load_settings(
    config_path: str | None,
    cli_overrides: dict,
) -> LoadedSettings:
    """
    Priority: CLI > ENV > config > defaults
    """
    sources: list[str] = []
    defaults = Settings()

    # 1) config file
    cfg: dict = {}
    if config_path:
        cfg = _read_yaml_config(Path(config_path))
        if cfg:
            sources.append("config")

    # 2) env
    env = {
        "log_level": _env_get("PASSPORTS_LOG_LEVEL"),
        "log_dir": _env_get("PASSPORTS_LOG_DIR"),
        "report_dir": _env_get("PASSPORTS_REPORT_DIR"),
        "report_items_limit": _env_get("PASSPORTS_REPORT_ITEMS_LIMIT"),
        "encoding": _env_get("PASSPORTS_ENCODING"),
        "print_valid": _env_get("PASSPORTS_PRINT_VALID"),
    }
    if any(v is not None for v in env.values()):
        sources.append("env")

    # merge config -> env -> cli
    merged = {
        "log_level": cfg.get("log_level", defaults.log_level),
        "log_dir": cfg.get("log_dir", defaults.log_dir),
        "report_dir": cfg.get("report_dir", defaults.report_dir),
        "report_items_limit": cfg.get("report_items_limit", defaults.report_items_limit),
        "encoding": cfg.get("encoding", defaults.encoding),
        "print_valid": cfg.get("print_valid", defaults.print_valid),
    }

    # apply env
    if env["log_level"] is not None:
        merged["log_level"] = env["log_level"]
    if env["log_dir"] is not None:
        merged["log_dir"] = env["log_dir"]
    if env["report_dir"] is not None:
        merged["report_dir"] = env["report_dir"]
    if env["report_items_limit"] is not None:
        merged["report_items_limit"] = parse_int(env["report_items_limit"])
    if env["encoding"] is not None:
        merged["encoding"] = env["encoding"]
    if env["print_valid"] is not None:
        merged["print_valid"] = parse_bool(env["print_valid"])

    # 3) apply CLI overrides (only those explicitly passed)
    if any(v is not None for v in cli_overrides.values()):
        sources.append("cli")

    for k, v in cli_overrides.items():
        if v is None:
            continue
        merged[k] = v

    log_level = str(merged["log_level"]).strip().upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"Unsupported log level: {merged['log_level']}")

    try:
        codecs.lookup(str(merged["encoding"]))
    except LookupError:
        raise ValueError(f"Unsupported encoding: {merged['encoding']}")

    settings = Settings(
        log_level=log_level,
        log_dir=merged["log_dir"],
        report_dir=merged["report_dir"],
        report_items_limit=parse_int(merged["report_items_limit"]),
        encoding=merged["encoding"],
        print_valid=bool(parse_bool(merged["print_valid"])),
    )

    return LoadedSettings(settings=settings, sources_used=sources)
