import logging
import re
from datetime import datetime
from typing import Any

from .errors import ValidationError
from .presence import (
    ActivityRecord,
    ActivityType,
    Assets,
    Emoji,
    Metadata,
    Party,
    Timestamps,
)
from .session import Session, require_login
from .utils import (
    MAX_BUTTON_LABEL_LENGTH,
    MAX_BUTTONS,
    check_length,
    is_valid_discord_id,
    is_valid_spotify_id,
    is_valid_url,
    to_unix_ms,
)

_log = logging.getLogger(__name__)

IMAGE_SCHEMES = ("mp:", "youtube:", "spotify:", "twitch:")
DISCORD_CDNS = (
    "https://cdn.discordapp.com/",
    "http://cdn.discordapp.com/",
    "https://media.discordapp.net/",
    "http://media.discordapp.net/",
)
SPOTIFY_FLAGS = 48

# brackets are optional, so ":smile:" and "name:id" match as well
_emoji_regex = re.compile(r"<?(?:(a):)?(\w{2,32}):([0-9]{17,19})?>?", re.ASCII)


def parse_image(image: str) -> str:
    """Normalize an image reference to a form Discord can resolve.

    Asset IDs and already tagged references are kept as they are, media proxy
    paths get the ``mp:`` tag and Discord CDN links are rewritten onto it.
    Anything else is passed through untouched.
    """
    if is_valid_discord_id(image):
        return image

    if image.startswith(IMAGE_SCHEMES):
        return image

    if image.startswith("external/"):
        return "mp:" + image

    if is_valid_url(image):
        for cdn in DISCORD_CDNS:
            if image.startswith(cdn):
                return "mp:" + image[len(cdn) :]

    return image


def parse_emoji(text: str) -> Emoji:
    """Parse an emoji ID, ``<a:name:id>`` shorthand or unicode emoji."""
    if is_valid_discord_id(text):
        return Emoji(name="", id=text)

    match = _emoji_regex.search(text)
    if match is not None:
        animated, name, emoji_id = match.groups()
        return Emoji(name=name, id=emoji_id, animated=animated == "a")

    return Emoji(name=text)


class Finalizable:
    """Owns the activity record and hands out finalized copies of it."""

    _activity: ActivityRecord

    def build(self) -> ActivityRecord:
        self._activity.check_complete()
        _log.debug("Finalized activity %r", self._activity.name)
        return self._activity.model_copy(deep=True)

    def to_dict(self) -> dict[str, Any]:
        return self.build().to_dict()


class HasState(Finalizable):
    def set_state(self, state: str) -> None:
        self._activity.state = check_length(state, "State")


class HasApplication(Finalizable):
    def set_application_id(self, application_id: str) -> None:
        if not is_valid_discord_id(application_id):
            raise ValidationError("Invalid application id")
        self._activity.application_id = application_id


class HasDetails(Finalizable):
    def set_details(self, details: str) -> None:
        self._activity.details = check_length(details, "Details")


class HasImages(Finalizable):
    @property
    def _assets(self) -> Assets:
        if self._activity.assets is None:
            self._activity.assets = Assets()
        return self._activity.assets

    def set_large_image(self, image: str) -> None:
        self._assets.large_image = parse_image(image)

    def set_large_text(self, text: str) -> None:
        self._assets.large_text = check_length(text, "Large text")

    def set_small_image(self, image: str) -> None:
        self._assets.small_image = parse_image(image)

    def set_small_text(self, text: str) -> None:
        self._assets.small_text = check_length(text, "Small text")


class HasTimestamps(Finalizable):
    @property
    def _timestamps(self) -> Timestamps:
        if self._activity.timestamps is None:
            self._activity.timestamps = Timestamps()
        return self._activity.timestamps

    def set_start_timestamp(self, timestamp: datetime) -> None:
        self._timestamps.start = to_unix_ms(timestamp)

    def set_end_timestamp(self, timestamp: datetime) -> None:
        self._timestamps.end = to_unix_ms(timestamp)


class _BaseActivity(HasApplication, HasState, HasDetails, HasImages, HasTimestamps):
    @property
    def _metadata(self) -> Metadata:
        if self._activity.metadata is None:
            self._activity.metadata = Metadata()
        return self._activity.metadata


class CustomStatus(HasState):
    """A custom status with optional emoji."""

    def __init__(self, session: Session) -> None:
        require_login(session)
        self._activity = ActivityRecord(name="Custom Status", type=ActivityType.CUSTOM)

    def set_emoji(self, emoji: str) -> None:
        self._activity.emoji = parse_emoji(emoji)


class RichPresence(_BaseActivity):
    def __init__(self, session: Session) -> None:
        require_login(session)
        self._activity = ActivityRecord(name="", type=ActivityType.GAME)

    def set_name(self, name: str) -> None:
        self._activity.name = check_length(name, "Name")

    def set_type(self, activity_type: ActivityType) -> None:
        try:
            self._activity.type = ActivityType(activity_type)
        except ValueError:
            raise ValidationError("Invalid activity type") from None

    def set_url(self, url: str) -> None:
        if not is_valid_url(url):
            raise ValidationError("Invalid URL")
        self._activity.url = url

    def set_party(self, party_id: str, current_members: int, max_members: int) -> None:
        self._activity.party = Party(id=party_id, size=[current_members, max_members])

    def add_button(self, label: str, url: str) -> None:
        buttons = self._activity.buttons or []
        if len(buttons) >= MAX_BUTTONS:
            raise ValidationError(f"Rich presence can only have {MAX_BUTTONS} buttons")
        if not label or not url:
            raise ValidationError("Button must have a label and a url")
        check_length(label, "Button label", MAX_BUTTON_LABEL_LENGTH)
        if not is_valid_url(url):
            raise ValidationError("Invalid button URL")

        self._activity.buttons = [*buttons, label]
        self._metadata.button_urls = [*(self._metadata.button_urls or []), url]


class SpotifyRichPresence(_BaseActivity):
    """A "Listening to Spotify" activity tied to the logged in user."""

    def __init__(self, session: Session) -> None:
        user = require_login(session)
        self._activity = ActivityRecord(
            id="spotify:1",
            name="Spotify",
            type=ActivityType.LISTENING,
            flags=SPOTIFY_FLAGS,
            party=Party(id=f"spotify:{user.id}"),
        )

    def set_track_id(self, track_id: str) -> None:
        if not is_valid_spotify_id(track_id):
            raise ValidationError("Invalid track id")
        self._activity.sync_id = track_id

    def set_album_id(self, album_id: str) -> None:
        if not is_valid_spotify_id(album_id):
            raise ValidationError("Invalid album id")
        self._metadata.album_id = album_id
        self._metadata.context_uri = f"spotify:album:{album_id}"

    def add_artist_id(self, artist_id: str) -> None:
        if not is_valid_spotify_id(artist_id):
            raise ValidationError("Invalid artist id")
        self._metadata.artist_ids = [*(self._metadata.artist_ids or []), artist_id]
