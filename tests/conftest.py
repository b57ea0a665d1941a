"""
Shared fixtures.

Every test builds its own Settings (ignoring any local .env) and its own
App so hooks and routes never leak between tests.
"""

from typing import Callable

import pytest

from helpers import build_settings
from space.core.app import App
from space.infra.config import Settings


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    return build_settings


@pytest.fixture
def space_app() -> App:
    return App(build_settings(DEBUG=True))
