"""
Shared fixtures for the command tests.
"""

import pytest

from bot.config import Config
from tests.mocks import DEVELOPER_ID


@pytest.fixture
def config() -> Config:
    return Config(PREFIX="?", DEVELOPERS=(str(DEVELOPER_ID),))
