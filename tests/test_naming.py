import pytest

from textbind.naming import to_snake_case


@pytest.mark.parametrize(
    "key, expected",
    [
        ("firstName", "first_name"),
        ("FirstName", "first_name"),
        ("HTTPStatus", "http_status"),
        ("date-of-birth", "date_of_birth"),
        ("already_snake", "already_snake"),
        ("line2Total", "line2_total"),
        ("", ""),
    ],
)
def test_to_snake_case(key, expected):
    assert to_snake_case(key) == expected
