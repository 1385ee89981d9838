import datetime

import pytest

from dyncert.crypto import serial


@pytest.mark.parametrize("today, expected", [
    (datetime.date(2024, 3, 15), "2024031400"),
    (datetime.date(2024, 3, 1), "2024023000"),      # Feb 30 on purpose
    (datetime.date(2023, 5, 1), "2023043000"),
    (datetime.date(2024, 12, 31), "2024123000"),
    (datetime.date(2024, 1, 1), "2023123000"),
    (datetime.date(2024, 10, 2), "2024100100"),
])
def test_yesterday_rule(today, expected):
    assert serial.current(today) == expected


def test_stable_within_a_day():
    today = datetime.date(2025, 7, 9)
    assert serial.current(today) == serial.current(today)


def test_defaults_to_local_date():
    value = serial.current()
    assert len(value) == 10
    assert value.isdigit()
    assert value.endswith("00")
