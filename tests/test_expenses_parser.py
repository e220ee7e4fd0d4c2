import pytest

from expense_bot.services.expenses_parser import (
    FORMAT_HINT,
    INVALID_PRICE_TEXT,
    ExpenseDraft,
    InsufficientFieldsError,
    InvalidPriceError,
    parse_expense_text,
)


def test_parse_full_message() -> None:
    draft = parse_expense_text("Coffee\n150,5\n21.09.2025\nNote")

    assert draft == ExpenseDraft(name="Coffee", price=150.5, date="21.09.2025", comment="Note")


def test_third_line_without_date_becomes_comment() -> None:
    draft = parse_expense_text("Coffee\n150\nJust a note")

    assert draft == ExpenseDraft(name="Coffee", price=150.0, date="", comment="Just a note")


def test_name_and_price_only() -> None:
    draft = parse_expense_text("  Кофта красная  \n 150.3 ")

    assert draft.name == "Кофта красная"
    assert draft.price == 150.3
    assert draft.date == ""
    assert draft.comment == ""


def test_multi_line_comment_keeps_blank_lines() -> None:
    draft = parse_expense_text("Milk\n80\n1.2.2025\nfirst\n\n  last  ")

    assert draft.date == "1.2.2025"
    assert draft.comment == "first\n\nlast"


def test_comment_lines_after_non_date_third_line() -> None:
    draft = parse_expense_text("Milk\n80\n2025-02-01\nsecond")

    assert draft.date == ""
    assert draft.comment == "2025-02-01\nsecond"


@pytest.mark.parametrize("text", ["", "   ", "Coffee", "  Coffee  \n  "])
def test_fewer_than_two_lines_is_rejected(text: str) -> None:
    with pytest.raises(InsufficientFieldsError) as excinfo:
        parse_expense_text(text)

    assert str(excinfo.value) == FORMAT_HINT


@pytest.mark.parametrize(
    ("price", "expected"),
    [
        ("150р", 150.0),
        ("150 руб", 150.0),
        ("12,5,1", 12.5),
        ("99.90₽", 99.9),
        (".5", 0.5),
        ("1e3", 1000.0),
    ],
)
def test_price_reads_leading_number(price: str, expected: float) -> None:
    draft = parse_expense_text(f"Coffee\n{price}")

    assert draft.price == expected


@pytest.mark.parametrize("price", ["abc", "", "р150", "nan", "inf", "сто", "1e999"])
def test_non_numeric_price_is_rejected(price: str) -> None:
    with pytest.raises(InvalidPriceError) as excinfo:
        parse_expense_text(f"Coffee\n{price}\n21.09.2025")

    assert str(excinfo.value) == INVALID_PRICE_TEXT
    assert excinfo.value.raw_price == price


def test_date_pattern_requires_four_digit_year() -> None:
    draft = parse_expense_text("Tea\n10\n21.09.25")

    assert draft.date == ""
    assert draft.comment == "21.09.25"


def test_windows_line_endings() -> None:
    draft = parse_expense_text("Tea\r\n10,25\r\n05.01.2026\r\n")

    assert draft.price == 10.25
    assert draft.date == "05.01.2026"
    assert draft.comment == ""
