"""
Update channel.

An unbuffered, one-way "something changed" signal between a component
and the task that copies its fields to the host element. ``send`` only
returns once a receiver has taken the token, so stale signals never pile
up behind a busy receiver.
"""

import asyncio
from collections import deque
from typing import Deque

from ..exceptions import ChannelClosedError


class UpdateChannel:
    """Capacity-zero rendezvous channel carrying bare tokens."""

    def __init__(self):
        self._receivers: Deque[asyncio.Future] = deque()
        self._senders: Deque[asyncio.Future] = deque()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self) -> None:
        """Hand one token to a receiver, waiting until one is ready."""
        if self._closed:
            raise ChannelClosedError("send on closed update channel")

        while self._receivers:
            receiver = self._receivers.popleft()
            if not receiver.done():
                receiver.set_result(True)
                return

        sender = asyncio.get_running_loop().create_future()
        self._senders.append(sender)
        await sender

    async def receive(self) -> bool:
        """Wait for a token. Returns False once the channel is closed."""
        while self._senders:
            sender = self._senders.popleft()
            if not sender.done():
                sender.set_result(None)
                return True

        if self._closed:
            return False

        receiver = asyncio.get_running_loop().create_future()
        self._receivers.append(receiver)
        return await receiver

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        while self._receivers:
            receiver = self._receivers.popleft()
            if not receiver.done():
                receiver.set_result(False)

        while self._senders:
            sender = self._senders.popleft()
            if not sender.done():
                sender.set_exception(ChannelClosedError("update channel closed before delivery"))

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"UpdateChannel({state}, senders={len(self._senders)}, receivers={len(self._receivers)})"
