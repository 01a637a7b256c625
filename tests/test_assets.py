import pytest

from rpcbuilder.activity import RichPresence
from rpcbuilder.assets import image_link_to_asset
from rpcbuilder.errors import ExternalCallError, ValidationError

APPLICATION_ID = "987654321098765432"
IMAGE_LINK = "https://example.com/cover.png"
ASSET_PATH = "external/abc123/https/example.com/cover.png"


def test_resolves_asset_path(session) -> None:
    session.external_assets.return_value = [
        {"url": IMAGE_LINK, "external_asset_path": ASSET_PATH}
    ]

    assert image_link_to_asset(session, APPLICATION_ID, IMAGE_LINK) == ASSET_PATH
    session.external_assets.assert_called_once_with(APPLICATION_ID, [IMAGE_LINK])


def test_resolved_path_is_usable_as_image(session) -> None:
    session.external_assets.return_value = [{"external_asset_path": ASSET_PATH}]

    activity = RichPresence(session)
    activity.set_name("Game")
    activity.set_large_image(image_link_to_asset(session, APPLICATION_ID, IMAGE_LINK))
    assert activity.to_dict()["assets"] == {"large_image": f"mp:{ASSET_PATH}"}


def test_requires_login(logged_out_session) -> None:
    with pytest.raises(ValidationError, match="Client is not logged in"):
        image_link_to_asset(logged_out_session, APPLICATION_ID, IMAGE_LINK)
    logged_out_session.external_assets.assert_not_called()


@pytest.mark.parametrize(
    ("application_id", "image_link", "message"),
    [
        ("1234", IMAGE_LINK, "Invalid application id"),
        (APPLICATION_ID, "cover.png", "Invalid image URL"),
    ],
)
def test_validates_arguments(session, application_id: str, image_link: str, message: str) -> None:
    with pytest.raises(ValidationError, match=message):
        image_link_to_asset(session, application_id, image_link)
    session.external_assets.assert_not_called()


def test_wraps_external_failures(session) -> None:
    cause = ConnectionError("rate limited")
    session.external_assets.side_effect = cause

    with pytest.raises(ExternalCallError, match="rate limited") as excinfo:
        image_link_to_asset(session, APPLICATION_ID, IMAGE_LINK)
    assert excinfo.value.__cause__ is cause
    assert not isinstance(excinfo.value, ValidationError)


@pytest.mark.parametrize("response", [[], [{"url": IMAGE_LINK}]])
def test_unusable_response(session, response) -> None:
    session.external_assets.return_value = response
    with pytest.raises(ExternalCallError):
        image_link_to_asset(session, APPLICATION_ID, IMAGE_LINK)
