import logging

from passports.infra.sources.passport_source import read_passports
from passports.reporter import createEmptyReport
from passports.usecases.scan_usecase import ScanUseCase

EXAMPLE = "byr:1990 iyr:2015 eyr:2025\nhgt:180cm hcl:#abc123 ecl:blu pid:123456789\n\nbyr:1990 iyr:2015\n"

BATCH = """ecl:gry pid:860033327 eyr:2020 hcl:#fffffd
byr:1937 iyr:2017 cid:147 hgt:183cm

iyr:2013 ecl:amb cid:350 eyr:2023 pid:028048884
hcl:#cfa07d byr:1929

hcl:#ae17e1 iyr:2013
eyr:2024
ecl:brn pid:760753108 byr:1931
hgt:179cm

hcl:#cfa07d eyr:2025 pid:166559648
iyr:2011 ecl:brn hgt:59in
"""

INVALID_BATCH = """eyr:1972 cid:100
hcl:#18171d ecl:amb hgt:170 pid:186cm iyr:2018 byr:1926

iyr:2019
hcl:#602927 eyr:1967 hgt:170cm
ecl:grn pid:012533040 byr:1946
"""


def _logger():
    logger = logging.getLogger("passports.test")
    logger.addHandler(logging.NullHandler())
    return logger


def _scan(text: str, **kwargs):
    report = createEmptyReport(runId="run-0", command="scan", configSources=[])
    return ScanUseCase(**kwargs).run(read_passports(text), _logger(), "run-0", report)


def test_count_end_to_end_example():
    summary = _scan(EXAMPLE)
    assert summary.records_total == 2
    assert summary.required_fields == 1
    assert summary.valid == 1


def test_count_sample_batch():
    summary = _scan(BATCH)
    assert summary.records_total == 4
    assert summary.required_fields == 2
    assert summary.valid == 2


def test_invalid_batch_has_required_fields_but_no_valid():
    summary = _scan(INVALID_BATCH)
    assert summary.required_fields == 2
    assert summary.valid == 0


def test_on_valid_hook_sees_each_valid_passport():
    seen = []
    _scan(BATCH + "\n" + INVALID_BATCH, on_valid=seen.append)
    assert [p.line_no for p in seen] == [1, 7]
    assert seen[0].get("pid") == "860033327"


def test_run_fills_report():
    report = createEmptyReport(runId="run-1", command="scan", configSources=[])
    summary = ScanUseCase(report_items_limit=1).run(read_passports(BATCH), _logger(), "run-1", report)
    assert (summary.records_total, summary.required_fields, summary.valid) == (4, 2, 2)
    assert report.summary.records_total == 4
    assert report.summary.invalid == 2
    assert len(report.items) == 1
    assert report.items[0]["line_no"] == 4
    assert report.items[0]["errors"][0]["code"] == "REQUIRED_FIELD_MISSING"
    assert report.meta.items_truncated is True

