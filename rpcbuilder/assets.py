import logging

from .errors import ExternalCallError, ValidationError
from .session import Session, require_login
from .utils import is_valid_discord_id, is_valid_url

_log = logging.getLogger(__name__)


def image_link_to_asset(session: Session, application_id: str, image_link: str) -> str:
    """Resolve an image URL into an ``external/...`` asset path.

    The returned path can be passed to ``set_large_image`` or
    ``set_small_image``, which tag it with ``mp:``.
    """
    require_login(session)

    if not is_valid_discord_id(application_id):
        raise ValidationError("Invalid application id")

    if not is_valid_url(image_link):
        raise ValidationError("Invalid image URL")

    _log.debug("Resolving external asset for %s", image_link)
    try:
        assets = session.external_assets(application_id, [image_link])
    except Exception as exc:
        raise ExternalCallError(f"Error getting external assets: {exc}") from exc

    if not assets:
        raise ExternalCallError("Error getting external assets: no asset returned")

    try:
        return assets[0]["external_asset_path"]
    except KeyError as exc:
        raise ExternalCallError(
            "Error getting external assets: response has no external_asset_path"
        ) from exc
