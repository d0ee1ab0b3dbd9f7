"""Shared test fixtures for txnguard tests."""

from datetime import timedelta

import pytest

from tests.helpers import NOW, RecordingSink, make_profile
from txnguard.shared.models import UserBehaviorProfile


@pytest.fixture
def profile() -> UserBehaviorProfile:
    return make_profile()


@pytest.fixture
def new_user_profile() -> UserBehaviorProfile:
    return UserBehaviorProfile.empty("user-1", now=NOW - timedelta(days=1))


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()
