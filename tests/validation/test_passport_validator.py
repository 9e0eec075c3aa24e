import pytest

from passports.domain.models import Passport
from passports.domain.validation.validator import PassportValidator

VALID_FIELDS = {
    "byr": "1990",
    "iyr": "2015",
    "eyr": "2025",
    "hgt": "180cm",
    "hcl": "#abc123",
    "ecl": "blu",
    "pid": "123456789",
}


def make_passport(**overrides) -> Passport:
    fields = dict(VALID_FIELDS)
    for key, value in overrides.items():
        if value is None:
            fields.pop(key, None)
        else:
            fields[key] = value
    return Passport(fields=fields, line_no=1)


@pytest.fixture
def validator():
    return PassportValidator()


def test_seven_required_fields_without_cid_pass(validator):
    assert validator.has_required_fields(make_passport())


def test_seven_required_fields_with_cid_pass(validator):
    assert validator.has_required_fields(make_passport(cid="147"))


@pytest.mark.parametrize("missing", sorted(VALID_FIELDS))
def test_missing_required_field_fails(validator, missing):
    passport = make_passport(**{missing: None, "cid": "1"})
    assert len(passport) == 7
    assert not validator.has_required_fields(passport)


def test_unexpected_extra_field_fails(validator):
    assert not validator.has_required_fields(make_passport(xyz="1"))
    assert not validator.has_required_fields(make_passport(cid="1", xyz="1"))


def test_valid_passport(validator):
    passport = make_passport()
    assert validator.is_valid(passport)
    result = validator.validate(passport)
    assert result.valid
    assert result.errors == []


def test_field_validation_requires_structural_check(validator):
    passport = make_passport(pid=None)
    assert not validator.is_valid(passport)
    result = validator.validate(passport)
    assert not result.has_required_fields
    assert [(e.code, e.field) for e in result.errors] == [("REQUIRED_FIELD_MISSING", "pid")]


def test_validate_collects_all_field_errors(validator):
    passport = make_passport(byr="1900", hcl="#123abz", pid="0123456789")
    assert not validator.is_valid(passport)
    result = validator.validate(passport)
    assert result.has_required_fields
    assert not result.valid
    assert [e.field for e in result.errors] == ["byr", "hcl", "pid"]
    assert {e.code for e in result.errors} == {"INVALID_YEAR", "INVALID_HAIR_COLOR", "INVALID_PASSPORT_ID"}


def test_validate_reports_unexpected_field(validator):
    result = validator.validate(make_passport(foo="bar"))
    assert [(e.code, e.field) for e in result.errors] == [("UNEXPECTED_FIELD", "foo")]
