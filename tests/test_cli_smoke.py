import json

from typer.testing import CliRunner

from passports.cli import app

runner = CliRunner()

EXAMPLE = "byr:1990 iyr:2015 eyr:2025\nhgt:180cm hcl:#abc123 ecl:blu pid:123456789\n\nbyr:1990 iyr:2015\n"


def write_batch(tmp_path, text: str, name: str = "batch.txt") -> str:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_help_shows_commands():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "scan" in result.stdout


def test_scan_prints_both_counts(tmp_path):
    result = runner.invoke(app, ["scan", write_batch(tmp_path, EXAMPLE)])
    assert result.exit_code == 0
    assert "There are 1 passports with the required fields" in result.stdout
    assert "There are 1 valid passports" in result.stdout


def test_scan_requires_input_filename():
    result = runner.invoke(app, ["scan"])
    assert result.exit_code == 2
    assert "input filename is required" in result.output


def test_scan_missing_file_is_fatal(tmp_path):
    result = runner.invoke(app, ["scan", str(tmp_path / "missing.txt")])
    assert result.exit_code == 2
    assert "input read error" in result.output
    assert "There are" not in result.stdout


def test_scan_malformed_key_aborts_run(tmp_path):
    path = write_batch(tmp_path, EXAMPLE + "\nbyr\n")
    result = runner.invoke(app, ["scan", path])
    assert result.exit_code == 2
    assert "newline in key" in result.output
    assert "There are" not in result.stdout


def test_scan_print_valid_echoes_valid_passports(tmp_path):
    result = runner.invoke(app, ["scan", "--print-valid", write_batch(tmp_path, EXAMPLE)])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0] == "byr:1990 iyr:2015 eyr:2025 hgt:180cm hcl:#abc123 ecl:blu pid:123456789"
    assert lines[1:] == ["There are 1 passports with the required fields", "There are 1 valid passports"]


def test_scan_writes_log_and_report(tmp_path):
    log_dir = tmp_path / "logs"
    report_dir = tmp_path / "reports"
    result = runner.invoke(
        app,
        [
            "--log-dir",
            str(log_dir),
            "--report-dir",
            str(report_dir),
            "--run-id",
            "run-1",
            "--log-level",
            "DEBUG",
            "scan",
            write_batch(tmp_path, EXAMPLE),
        ],
    )
    assert result.exit_code == 0

    report = json.loads((report_dir / "report_scan_run-1.json").read_text(encoding="utf-8"))
    assert report["meta"]["run_id"] == "run-1"
    assert report["summary"]["records_total"] == 2
    assert report["summary"]["required_fields"] == 1
    assert report["summary"]["valid"] == 1
    assert report["items"][0]["line_no"] == 4

    log_text = (log_dir / "scan_run-1.log").read_text(encoding="utf-8")
    assert "runId=run-1" in log_text
    assert "rejected" in log_text


def test_scan_failure_is_recorded_in_report(tmp_path):
    report_dir = tmp_path / "reports"
    path = write_batch(tmp_path, "a:1:2\n")
    result = runner.invoke(app, ["--report-dir", str(report_dir), "--run-id", "run-2", "scan", path])
    assert result.exit_code == 2
    report = json.loads((report_dir / "report_scan_run-2.json").read_text(encoding="utf-8"))
    assert report["summary"]["error_code"] == "VALUE_COLON"
    assert report["summary"]["failed"].startswith(": in value")


def test_scan_oversized_height_is_invalid_not_fatal(tmp_path):
    record = "byr:1990 iyr:2015 eyr:2025 hgt:" + "1" * 5000 + "cm hcl:#abc123 ecl:blu pid:123456789\n"
    result = runner.invoke(app, ["scan", write_batch(tmp_path, record)])
    assert result.exit_code == 0
    assert "There are 1 passports with the required fields" in result.stdout
    assert "There are 0 valid passports" in result.stdout
