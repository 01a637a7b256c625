import logging

from .activity import CustomStatus, RichPresence, SpotifyRichPresence, parse_emoji, parse_image
from .assets import image_link_to_asset
from .errors import ExternalCallError, RPCBuilderError, ValidationError
from .presence import (
    ActivityRecord,
    ActivityType,
    Assets,
    Emoji,
    Metadata,
    Party,
    Presence,
    PresenceRecord,
    Status,
    Timestamps,
)
from .session import Identity, Session, require_login, update_presence

__all__ = [
    "ActivityRecord",
    "ActivityType",
    "Assets",
    "CustomStatus",
    "Emoji",
    "ExternalCallError",
    "Identity",
    "Metadata",
    "Party",
    "Presence",
    "PresenceRecord",
    "RPCBuilderError",
    "RichPresence",
    "Session",
    "SpotifyRichPresence",
    "Status",
    "Timestamps",
    "ValidationError",
    "image_link_to_asset",
    "parse_emoji",
    "parse_image",
    "require_login",
    "update_presence",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
