"""Shared fixtures for CloudControl client tests."""

import pytest
from fakes import ACCOUNT_BODY, BASE_URL, FakeCloudControlApi

from cloudcontrol_client.cloudcontrol import CloudControlClient


@pytest.fixture
def api() -> FakeCloudControlApi:
    """Fake API with the account endpoint configured."""
    fake = FakeCloudControlApi()
    fake.respond("myaccount", json=ACCOUNT_BODY)
    return fake


@pytest.fixture
def cc_client(api: FakeCloudControlApi) -> CloudControlClient:
    """Client talking to the fake API."""
    return CloudControlClient.create(
        BASE_URL,
        "jsmith",
        "secret",
        transport=api.transport,
    )
