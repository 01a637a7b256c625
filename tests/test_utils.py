from datetime import datetime, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from rpcbuilder.errors import ValidationError
from rpcbuilder.utils import (
    check_length,
    is_valid_discord_id,
    is_valid_spotify_id,
    is_valid_url,
    to_unix_ms,
)


@given(st.from_regex(r"[0-9]{17,19}", fullmatch=True))
def test_discord_ids_match(value: str) -> None:
    assert is_valid_discord_id(value)


@pytest.mark.parametrize(
    "value",
    ["", "1234567890123456", "12345678901234567890", "12345678901234567a", "123456789012345678\n"],
)
def test_invalid_discord_ids(value: str) -> None:
    assert not is_valid_discord_id(value)


def test_spotify_ids() -> None:
    assert is_valid_spotify_id("4uLU6hMCjMI75M1A2tKUQC")
    assert not is_valid_spotify_id("4uLU6hMCjMI75M1A2tKUQ")
    assert not is_valid_spotify_id("4uLU6hMCjMI75M1A2tKUQ-")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("https://example.com", True),
        ("https://cdn.discordapp.com/icons/1/a.png", True),
        ("http://localhost:8080/path?q=1", True),
        ("example.com", False),
        ("/relative/path", False),
        ("not a url", False),
        ("", False),
    ],
)
def test_is_valid_url(value: str, expected: bool) -> None:
    assert is_valid_url(value) is expected


def test_check_length_limit() -> None:
    assert check_length("a" * 128, "State") == "a" * 128
    with pytest.raises(ValidationError, match="State must be 128 characters or less"):
        check_length("a" * 129, "State")


def test_to_unix_ms() -> None:
    assert to_unix_ms(datetime(2024, 1, 1, tzinfo=timezone.utc)) == 1704067200000
