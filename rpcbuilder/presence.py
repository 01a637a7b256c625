import logging
from datetime import datetime
from enum import Enum, IntEnum
from typing import Annotated, Any, Protocol

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from .errors import ValidationError
from .utils import (
    DISCORD_ID_PATTERN,
    MAX_BUTTON_LABEL_LENGTH,
    MAX_BUTTONS,
    MAX_TEXT_LENGTH,
    SPOTIFY_ID_PATTERN,
    is_valid_url,
    to_unix_ms,
)

_log = logging.getLogger(__name__)

Text = Annotated[str, Field(max_length=MAX_TEXT_LENGTH)]
ButtonLabel = Annotated[str, Field(min_length=1, max_length=MAX_BUTTON_LABEL_LENGTH)]
CatalogId = Annotated[str, Field(pattern=SPOTIFY_ID_PATTERN)]


def _check_url(value: str) -> str:
    if not is_valid_url(value):
        raise ValueError("must be an absolute URL")
    return value


Url = Annotated[str, AfterValidator(_check_url)]


class Status(str, Enum):
    ONLINE = "online"
    DND = "dnd"
    DO_NOT_DISTURB = "dnd"
    IDLE = "idle"
    INVISIBLE = "invisible"


class ActivityType(IntEnum):
    GAME = 0
    STREAMING = 1
    LISTENING = 2
    WATCHING = 3
    CUSTOM = 4
    COMPETING = 5


class _Record(BaseModel):
    model_config = ConfigDict(validate_assignment=True)


class Timestamps(_Record):
    start: int | None = None
    end: int | None = None


class Assets(_Record):
    large_image: str | None = None
    large_text: Text | None = None
    small_image: str | None = None
    small_text: Text | None = None


class Party(_Record):
    id: str | None = None
    size: Annotated[list[int], Field(min_length=2, max_length=2)] | None = None


class Emoji(_Record):
    name: str
    id: str | None = None
    animated: bool = False


class Metadata(_Record):
    button_urls: list[Url] | None = None
    album_id: CatalogId | None = None
    context_uri: str | None = None
    artist_ids: list[CatalogId] | None = None


class ActivityRecord(_Record):
    """A single activity as sent in a presence update."""

    name: Text
    type: ActivityType
    id: str | None = None
    url: Url | None = None
    application_id: Annotated[str, Field(pattern=DISCORD_ID_PATTERN)] | None = None
    state: Text | None = None
    details: Text | None = None
    timestamps: Timestamps | None = None
    emoji: Emoji | None = None
    party: Party | None = None
    assets: Assets | None = None
    flags: int | None = None
    buttons: Annotated[list[ButtonLabel], Field(max_length=MAX_BUTTONS)] | None = None
    metadata: Metadata | None = None
    sync_id: CatalogId | None = None

    def check_complete(self) -> None:
        """Raise if the record is not ready to be sent."""
        if not self.name and self.type != ActivityType.CUSTOM:
            raise ValidationError("Name is required")
        if self.type == ActivityType.STREAMING and not self.url:
            raise ValidationError("Streaming activities require a URL")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_defaults=True)


class PresenceRecord(_Record):
    status: Status = Status.ONLINE
    afk: bool = False
    since: int = 0
    activities: list[ActivityRecord] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "since": self.since,
            "activities": [activity.to_dict() for activity in self.activities],
            "status": self.status.value,
            "afk": self.afk,
        }


class ActivityBuilder(Protocol):
    def build(self) -> ActivityRecord: ...


class Presence:
    """Assembles the payload of a presence update."""

    def __init__(
        self,
        *,
        status: Status = Status.ONLINE,
        afk: bool = False,
        since: int = 0,
    ) -> None:
        self._data = PresenceRecord(status=status, afk=afk, since=since)

    @property
    def data(self) -> PresenceRecord:
        return self._data.model_copy(deep=True)

    def to_dict(self) -> dict[str, Any]:
        return self._data.to_dict()

    def set_status(self, status: Status) -> None:
        self._data.status = status

    def set_afk(self, afk: bool) -> None:
        self._data.afk = afk

    def set_idle_since(self, timestamp: datetime | None) -> None:
        self._data.since = 0 if timestamp is None else to_unix_ms(timestamp)

    def add_activity(self, activity: ActivityBuilder | ActivityRecord) -> None:
        """Finalize ``activity`` and append a snapshot of it.

        The first activity is shown as the primary one by most clients.
        """
        if isinstance(activity, ActivityRecord):
            activity.check_complete()
            record = activity.model_copy(deep=True)
        else:
            record = activity.build()
        self._data.activities.append(record)
        _log.debug(
            "Added %s activity %r (%d total)",
            record.type.name.lower(),
            record.name,
            len(self._data.activities),
        )
