from datetime import datetime, timedelta, timezone

from hirefusion.jobs import filters as jf


def test_text_contains_any_is_case_insensitive_substring():
    assert jf._text_contains_any("Senior Django Engineer", ["go"]) is True
    assert jf._text_contains_any("Senior Django Engineer", ["RUST", "DJANGO"]) is True
    assert jf._text_contains_any("Senior Django Engineer", []) is False
    assert jf._text_contains_any(None, ["go"]) is False


def test_parse_salary():
    assert jf.parse_salary("$50,000 - $100,000") == (50000, 100000)
    assert jf.parse_salary("$75,000") == (75000, 75000)
    assert jf.parse_salary("Competitive") is None
    assert jf.parse_salary(None) is None


def test_salary_in_range_overlap():
    assert jf.salary_in_range("$50,000 - $100,000", (90000, 150000)) is True
    assert jf.salary_in_range("$50,000 - $80,000", (90000, 150000)) is False
    assert jf.salary_in_range("Negotiable", (90000, 150000)) is True
    assert jf.salary_in_range("$10", None) is True


def test_date_posted_cutoff():
    now = datetime(2026, 3, 10, tzinfo=timezone.utc)
    assert jf.date_posted_cutoff("last_24_hours", now) == now - timedelta(days=1)
    assert jf.date_posted_cutoff("last_7_days", now) == now - timedelta(days=7)
    assert jf.date_posted_cutoff("whenever", now) is None
    assert jf.date_posted_cutoff(None, now) is None
