from app.tabs import display_name
from app.validation import duration_key, normalize_timings, sanitize_label, tab_from_key


def test_duration_keys():
    assert duration_key("info") == "info_duration"
    assert tab_from_key("underhood_duration") == "underhood"
    assert tab_from_key("underhood") is None
    assert tab_from_key("_duration") is None


def test_normalize_timings():
    out = normalize_timings(
        {"info_duration": 3.8, "pulling_duration": True, "extra_duration": 9},
        ["info", "pulling", "tires"],
    )
    assert out == {"info_duration": 3, "pulling_duration": 0, "tires_duration": 0}


def test_normalize_none():
    assert normalize_timings(None, ["info"]) == {"info_duration": 0}


def test_sanitize_label():
    assert sanitize_label("  1HGCM82633A004352   bay 3 ") == "1HGCM82633A004352 bay 3"
    assert len(sanitize_label("x" * 200)) == 64
    assert sanitize_label(None) == ""


def test_display_names():
    assert display_name("info") == "Info"
    assert display_name("tires") == "Tires & Brakes"
    assert display_name("alignment") == "Alignment"


def test_normalize_infinite_and_nan():
    out = normalize_timings(
        {"info_duration": float("inf"), "pulling_duration": float("nan")},
        ["info", "pulling"],
    )
    assert out == {"info_duration": 0, "pulling_duration": 0}
