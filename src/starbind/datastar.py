"""
Datastar bridge.

Exposes a live host element's properties to a Datastar front end: as a
``data-signals`` div for the initial render, and as a stream of signal
patches that follows every property write (resyncs included).
"""

import asyncio
import json
from typing import Any, AsyncIterator, Dict, Optional

from datastar_py import SSE_HEADERS
from datastar_py import ServerSentEventGenerator as SSE
from fastcore.xml import Div
from pydantic_core import to_jsonable_python
from starlette.responses import StreamingResponse

from .host.element import Element


def element_signals(element: Element, namespace: Optional[str] = None) -> Dict[str, Any]:
    """Get the element's public properties as JSON-safe signals."""
    data = to_jsonable_python(element.properties)
    if namespace:
        return {namespace: data}
    return data


def signals_div(element: Element, namespace: Optional[str] = None):
    """Render with data-signals attributes."""
    signals = json.dumps(element_signals(element, namespace))
    return Div(**{"data-signals": signals}, id=namespace or element.tag_name)


async def stream_signals(element: Element, namespace: Optional[str] = None) -> AsyncIterator[str]:
    """
    Yield a signal patch for the current state, then one per burst of writes.

    Writes made in one resync pass are coalesced into a single patch. The
    watcher is removed when the consumer closes the generator.
    """
    changes: asyncio.Queue = asyncio.Queue()
    unwatch = element.watch(lambda name, old, new: changes.put_nowait(name))
    try:
        yield SSE.patch_signals(element_signals(element, namespace))
        while True:
            await changes.get()
            while not changes.empty():
                changes.get_nowait()
            yield SSE.patch_signals(element_signals(element, namespace))
    finally:
        unwatch()


def sse_response(element: Element, namespace: Optional[str] = None) -> StreamingResponse:
    return StreamingResponse(
        stream_signals(element, namespace),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
