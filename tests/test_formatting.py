from core.formatting import format_currency, format_currency_full, format_percentage


def test_compact_currency():
    assert format_currency(950) == "$950"
    assert format_currency(0) == "$0"
    assert format_currency(12_345) == "$12.3K"
    assert format_currency(1_500_000) == "$1.5M"
    assert format_currency(-1200) == "-$1.2K"
    assert format_currency(-40.4) == "-$40"


def test_full_currency():
    assert format_currency_full(12_345) == "$12,345"
    assert format_currency_full(-1200) == "-$1,200"
    assert format_currency_full(999.5) == "$1,000"
    assert format_currency_full(-0.2) == "$0"


def test_percentage():
    assert format_percentage(0.03) == "3.0%"
    assert format_percentage(0.08) == "8.0%"
    assert format_percentage(0.1999) == "20.0%"
    assert format_percentage(0) == "0.0%"
