import datetime

from dyncert.common.utils import add_one_year, now_utc, sha256_hex

UTC = datetime.timezone.utc


def test_add_one_year_same_day():
    start = datetime.datetime(2024, 3, 15, 10, 30, tzinfo=UTC)
    assert add_one_year(start) == datetime.datetime(2025, 3, 15, 10, 30, tzinfo=UTC)


def test_add_one_year_leap_day_rolls_to_march_first():
    start = datetime.datetime(2024, 2, 29, 8, 0, tzinfo=UTC)
    assert add_one_year(start) == datetime.datetime(2025, 3, 1, 8, 0, tzinfo=UTC)


def test_now_utc_has_no_microseconds():
    now = now_utc()
    assert now.microsecond == 0
    assert now.tzinfo is not None


def test_sha256_hex():
    assert sha256_hex(b"") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
