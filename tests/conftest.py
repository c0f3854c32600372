import asyncio

import pytest

from starbind import ComponentRegistry, HostRuntime, StarBindConfig, set_config


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from the built-in conventions, whatever the environment says."""
    set_config(StarBindConfig())
    yield
    set_config(StarBindConfig())


@pytest.fixture
def runtime():
    return HostRuntime()


@pytest.fixture
def registry(runtime):
    return ComponentRegistry(runtime)


async def settle(rounds: int = 5):
    """Let background resync tasks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)
