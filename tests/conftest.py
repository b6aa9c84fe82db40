"""Pytest fixtures for treasure-hider tests."""

import pytest

from fixtures import TEST_CONFIG, FakeNode, make_loot_params


@pytest.fixture
def node():
    return FakeNode()


@pytest.fixture
def rpc(node):
    client = node.client()
    yield client
    client.close()


@pytest.fixture
def config():
    return TEST_CONFIG


@pytest.fixture
def loot_params():
    return make_loot_params()
