"""
Tests for the unbuffered update channel.
"""

import asyncio

import pytest

from conftest import settle
from starbind import ChannelClosedError, UpdateChannel


@pytest.mark.asyncio
async def test_send_blocks_until_received():
    channel = UpdateChannel()
    sender = asyncio.create_task(channel.send())
    await settle()

    assert not sender.done()

    assert await channel.receive() is True
    await settle()
    assert sender.done()
    assert sender.exception() is None


@pytest.mark.asyncio
async def test_waiting_receiver_takes_token_immediately():
    channel = UpdateChannel()
    receiver = asyncio.create_task(channel.receive())
    await settle()

    await asyncio.wait_for(channel.send(), timeout=1)

    assert await receiver is True


@pytest.mark.asyncio
async def test_close_wakes_receivers_with_false():
    channel = UpdateChannel()
    receiver = asyncio.create_task(channel.receive())
    await settle()

    channel.close()

    assert await receiver is False
    assert await channel.receive() is False


@pytest.mark.asyncio
async def test_close_fails_blocked_and_later_senders():
    channel = UpdateChannel()
    sender = asyncio.create_task(channel.send())
    await settle()

    channel.close()

    with pytest.raises(ChannelClosedError):
        await sender
    with pytest.raises(ChannelClosedError):
        await channel.send()


@pytest.mark.asyncio
async def test_each_send_pairs_with_one_receive():
    channel = UpdateChannel()
    senders = [asyncio.create_task(channel.send()) for _ in range(3)]
    await settle()

    received = [await channel.receive() for _ in range(3)]
    await asyncio.gather(*senders)

    assert received == [True, True, True]


def test_close_is_idempotent():
    channel = UpdateChannel()
    channel.close()
    channel.close()

    assert channel.closed
