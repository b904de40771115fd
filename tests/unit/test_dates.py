from commonsattributor.core.dates import UNKNOWN, YEAR_UNKNOWN, clean_year_value, extract_year


def test_clean_year_value_strips_markup_and_qualifiers() -> None:
    raw = '<time class="dtstart" datetime="2020-05-01">2020-05-01</time> (according to Exif data)'
    assert clean_year_value(raw) == "2020-05-01"


def test_clean_year_value_truncates_at_comma() -> None:
    assert clean_year_value("  2019-07-12 14:03:01, taken with phone ") == "2019-07-12 14:03:01"


def test_clean_year_value_sentinel_and_empty() -> None:
    assert clean_year_value(UNKNOWN) == UNKNOWN
    assert clean_year_value("") == UNKNOWN
    assert clean_year_value(None) == UNKNOWN


def test_clean_year_value_is_idempotent() -> None:
    samples = [
        "<span>1888</span> (estimated), Paris",
        "circa 1900",
        "2020-05-01 (according to EXIF)",
        UNKNOWN,
        "",
    ]
    for raw in samples:
        once = clean_year_value(raw)
        assert clean_year_value(once) == once


def test_extract_year_takes_first_four_digit_run() -> None:
    assert extract_year("2020-05-01") == "2020"
    assert extract_year("painted 1503 to 1519") == "1503"
    assert extract_year("19th century") == YEAR_UNKNOWN
    assert extract_year(UNKNOWN) == YEAR_UNKNOWN


def test_clean_year_value_recovers_after_unfinished_tag() -> None:
    raw = '<time datetime="2020>2020-05-01</time> <small>(EXIF)</small>'

    assert clean_year_value(raw) == "2020-05-01"
