import os
from typing import Generator

import pytest
import yaml

from tests.fake.fake_subscription_transport import FakeSubscriptionTransport
from tests.helpers import FakeLedgerLinkConfig

from ledgerlink.core.subscriptions.coalescer import SubscriptionCoalescer


@pytest.fixture
def subscription_transport() -> FakeSubscriptionTransport:
    return FakeSubscriptionTransport()


@pytest.fixture
def coalescer(subscription_transport) -> SubscriptionCoalescer:
    return SubscriptionCoalescer(subscription_transport)


@pytest.fixture
def config_file(tmp_path):
    file = tmp_path / "ledgerlink.yaml"

    data = {
        "rpc": {
            "url": "https://rpc.example.test",
            "headers": {"Authorization": "Bearer secret"},
            "timeout": 12.5,
        },
        "subscriptions": {
            "url": "wss://rpc.example.test",
        },
        "log_level": "DEBUG",
    }

    file.write_text(yaml.dump(data))
    return file


@pytest.fixture
def env_config(config_file) -> Generator[type[FakeLedgerLinkConfig], None, None]:
    backup = os.environ.copy()

    try:
        os.environ["TEST_LEDGERLINKCONFIG"] = str(config_file)
        yield FakeLedgerLinkConfig
    finally:
        os.environ.clear()
        os.environ.update(backup)
