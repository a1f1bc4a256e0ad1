"""WebSocket live feed of mood records."""

from __future__ import annotations

import asyncio
import json
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool

from moodscape.core.deps import get_store
from moodscape.schemas.mood import MoodRecordView
from moodscape.services.mood_store import MoodStore

logger = logging.getLogger(__name__)

router = APIRouter()


def _records_payload(views: list[MoodRecordView]) -> str:
    return json.dumps({"event": "records", "data": [v.model_dump() for v in views]}, ensure_ascii=False)


@router.websocket("/ws/records")
async def records_feed(websocket: WebSocket, store: MoodStore = Depends(get_store)):
    """
    Pushes the full record list on connect and after every write.
    Client may send "ping" to receive a pong.
    """
    await websocket.accept()
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[list[MoodRecordView]] = asyncio.Queue()

    # Store callbacks run on the writer's thread; subscribe and cancel take the store lock off the loop
    subscription = await run_in_threadpool(
        store.subscribe_records, lambda views: loop.call_soon_threadsafe(queue.put_nowait, views)
    )
    logger.info("Records feed connected")

    receiver = asyncio.ensure_future(websocket.receive_text())
    getter = asyncio.ensure_future(queue.get())
    try:
        while True:
            done, _ = await asyncio.wait({receiver, getter}, return_when=asyncio.FIRST_COMPLETED)
            if getter in done:
                await websocket.send_text(_records_payload(getter.result()))
                getter = asyncio.ensure_future(queue.get())
            if receiver in done:
                # Raises WebSocketDisconnect once the client goes away
                if receiver.result() == "ping":
                    await websocket.send_text('{"event":"pong"}')
                receiver = asyncio.ensure_future(websocket.receive_text())
    except WebSocketDisconnect:
        pass
    finally:
        await run_in_threadpool(subscription.cancel)
        receiver.cancel()
        getter.cancel()
        logger.info("Records feed disconnected")
