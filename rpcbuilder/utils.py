import re
from datetime import datetime

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

MAX_TEXT_LENGTH = 128
MAX_BUTTON_LABEL_LENGTH = 31
MAX_BUTTONS = 2

DISCORD_ID_PATTERN = r"^[0-9]{17,19}$"
SPOTIFY_ID_PATTERN = r"^[0-9A-Za-z]{22}$"

_discord_id_regex = re.compile(DISCORD_ID_PATTERN)
_spotify_id_regex = re.compile(SPOTIFY_ID_PATTERN)
_url_adapter: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def is_valid_discord_id(value: str) -> bool:
    return _discord_id_regex.fullmatch(value) is not None


def is_valid_spotify_id(value: str) -> bool:
    return _spotify_id_regex.fullmatch(value) is not None


def is_valid_url(value: str) -> bool:
    """Return whether ``value`` parses as an absolute URL."""
    if not value or value != value.strip():
        return False
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def check_length(value: str, label: str, limit: int = MAX_TEXT_LENGTH) -> str:
    if len(value) > limit:
        raise ValidationError(f"{label} must be {limit} characters or less")
    return value


def to_unix_ms(timestamp: datetime) -> int:
    return int(timestamp.timestamp() * 1000)
