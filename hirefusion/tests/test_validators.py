import uuid

import pytest

from hirefusion import validators


@pytest.mark.parametrize("name", ["abc", "jane_doe", "A1_b2_C3", "x" * 20])
def test_valid_usernames(name):
    assert validators.validate_username(name) == []


def test_username_rules_report_every_problem():
    errors = validators.validate_username("a!")
    assert "Username must be at least 3 characters long" in errors
    assert "Username can only contain letters, numbers and underscore" in errors
    assert validators.validate_username("x" * 21) == ["Username must be at most 20 characters long"]
    assert validators.validate_username(None) == ["Username is required"]


def test_saved_job_email_pattern():
    assert validators.is_valid_email("jane.doe+jobs@example.com")
    assert not validators.is_valid_email("not-an-email")
    assert not validators.is_valid_email("")
    assert validators.is_valid_email("a@b.co")
    assert not validators.is_valid_email("a@b.technology")


def test_password_rules():
    assert validators.validate_password("Aa1!aaaa") == []
    assert validators.validate_password("aa1!aaaa")  # no upper case
    assert validators.validate_password("Aa1aaaaa")  # no special character
    assert "Password must be at most 20 characters long" in validators.validate_password("Aa1!" + "a" * 20)


def test_normalize_email():
    assert validators.normalize_email("  Jane@Example.com ") == "jane@example.com"
    assert validators.normalize_email(None) == ""


def test_is_valid_id():
    assert validators.is_valid_id(str(uuid.uuid4()))
    assert not validators.is_valid_id("64b7f0c2e1d3a45f6b7c8d9e")
    assert not validators.is_valid_id(42)
    assert not validators.is_valid_id(None)
