import datetime as dt

import pytest

from schemakit.serializable import (
    DateNotJSONStringError,
    SerializableDate,
    SerializableTime,
    TimeNotJSONStringError,
)


def test_date_marshal_format():
    assert SerializableDate(dt.date(2024, 1, 2)).marshal_json() == b'"2024-01-02"'


@pytest.mark.parametrize("day", [dt.date(1999, 12, 31), dt.date(2020, 2, 29)])
def test_date_round_trip(day):
    encoded = SerializableDate(day).marshal_json()
    assert SerializableDate.unmarshal_json(encoded) == SerializableDate(day)


def test_date_accepts_str_input():
    assert SerializableDate.unmarshal_json('"2021-06-15"').value == dt.date(2021, 6, 15)


def test_date_null_yields_none():
    assert SerializableDate.unmarshal_json(b"null") is None


@pytest.mark.parametrize("data", [b"20240102", b"true", b'"', b""])
def test_date_non_string_rejected(data):
    with pytest.raises(DateNotJSONStringError):
        SerializableDate.unmarshal_json(data)


@pytest.mark.parametrize("data", [b'"2024-13-01"', b'"2024-1-2"', b'"not a date"'])
def test_date_invalid_string_rejected(data):
    with pytest.raises(ValueError, match="unable to parse date from JSON"):
        SerializableDate.unmarshal_json(data)


def test_time_marshal_format():
    assert SerializableTime(dt.time(13, 4, 5)).marshal_json() == b'"13:04:05"'


@pytest.mark.parametrize("moment", [dt.time(0, 0, 0), dt.time(23, 59, 59)])
def test_time_round_trip(moment):
    encoded = SerializableTime(moment).marshal_json()
    assert SerializableTime.unmarshal_json(encoded) == SerializableTime(moment)


def test_time_fractional_seconds_accepted():
    parsed = SerializableTime.unmarshal_json(b'"13:04:05.5"')
    assert parsed.value == dt.time(13, 4, 5, 500000)
    assert parsed.marshal_json() == b'"13:04:05"'


def test_time_null_yields_none():
    assert SerializableTime.unmarshal_json("null") is None


@pytest.mark.parametrize("data", [b"12", b"{}", b'"'])
def test_time_non_string_rejected(data):
    with pytest.raises(TimeNotJSONStringError):
        SerializableTime.unmarshal_json(data)


@pytest.mark.parametrize("data", [b'"25:00:00"', b'"1:2:3"', b'"noon"'])
def test_time_invalid_string_rejected(data):
    with pytest.raises(ValueError, match="unable to parse time from JSON"):
        SerializableTime.unmarshal_json(data)