import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol

from .errors import ValidationError

if TYPE_CHECKING:
    from .presence import Presence

_log = logging.getLogger(__name__)


class Identity(Protocol):
    id: str


class Session(Protocol):
    """The parts of a logged in Discord client this package relies on."""

    user: Identity | None

    def external_assets(
        self, application_id: str, urls: Sequence[str]
    ) -> Sequence[Mapping[str, str]]: ...

    def update_status(self, data: dict[str, Any]) -> None: ...


def require_login(session: Session) -> Identity:
    if session.user is None:
        raise ValidationError("Client is not logged in")
    return session.user


def update_presence(session: Session, presence: "Presence") -> None:
    """Send a snapshot of ``presence`` through the session's status update."""
    data = presence.to_dict()
    _log.debug(
        "Updating status to %s with %d activities",
        data["status"],
        len(data["activities"]),
    )
    session.update_status(data)
