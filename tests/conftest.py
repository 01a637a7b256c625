from types import SimpleNamespace
from unittest.mock import Mock

import pytest

USER_ID = "123456789012345678"


@pytest.fixture
def session() -> Mock:
    client = Mock()
    client.user = SimpleNamespace(id=USER_ID)
    return client


@pytest.fixture
def logged_out_session() -> Mock:
    client = Mock()
    client.user = None
    return client
