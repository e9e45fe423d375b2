import pytest

from field_formatter.parsing.timeparse import normalize_time


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("14:30", "14:30"),
        ("2:30", "02:30"),
        ("2:30 pm", "14:30"),
        ("2:30pm", "14:30"),
        ("2:30 PM", "14:30"),
        ("4pm", "16:00"),
        ("11:00 am", "11:00"),
        ("12:00 pm", "12:00"),  # noon
        ("12:00 am", "00:00"),  # midnight
        ("12:30 am", "00:30"),
        ("  9:05 ", "09:05"),
    ],
)
def test_normalize_time(raw, expected):
    assert normalize_time(raw) == expected


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("invalid", "invalid"),
        ("", ""),
        ("  Noon ", "noon"),
        ("25:61:00", "25:61:00"),
        # Arabic-Indic digits
        ("٣:٠٠", "٣:٠٠"),
        ("٣ PM", "٣ pm"),
    ],
)
def test_normalize_time_returns_input_on_mismatch(raw, expected):
    assert normalize_time(raw) == expected


@pytest.mark.parametrize(
    "raw", ["14:30", "2:30", "2:30 pm", "12:00 am", "7 am", "12 pm", "junk"]
)
def test_normalize_time_is_idempotent(raw):
    once = normalize_time(raw)
    assert normalize_time(once) == once
