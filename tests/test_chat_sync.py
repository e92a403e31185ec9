"""Open-chat message sync: load ordering, merging, errors and teardown."""
from __future__ import annotations

import asyncio
import json

import httpx
import pytest
from conftest import FakeSourceFactory, build_api, json_response

from cinematch.clients.firestore_listener import ChangeEvent
from cinematch.exceptions import CineMatchError, HttpError
from cinematch.services import ChatsService
from cinematch.sync.chat_messages import ChatMessagesSync, SyncState


def _page(*ids: str) -> list[dict[str, object]]:
    return [{"id": message_id, "senderId": "u1", "text": f"text {message_id}"} for message_id in ids]


def _sync(handler, factory: FakeSourceFactory) -> ChatMessagesSync:  # type: ignore[no-untyped-def]
    return ChatMessagesSync("c1", chats_service=ChatsService(build_api(handler)), source_factory=factory)


def test_listener_attaches_only_after_page_loads(source_factory: FakeSourceFactory) -> None:
    seen_listener_during_load: list[bool] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/chats/c1/messages"
        assert request.url.params["limit"] == "30"
        seen_listener_during_load.append("c1" in source_factory.messages)
        await asyncio.sleep(0)
        return json_response(200, _page("m2", "m1"))

    sync = _sync(handler, source_factory)
    asyncio.run(sync.start())

    assert seen_listener_during_load == [False]
    assert source_factory.messages["c1"].attached
    assert source_factory.limits == [30]
    assert sync.state is SyncState.LISTENING
    assert [message.id for message in sync.messages] == ["m2", "m1"]
    assert sync.is_loading is False


def test_failed_page_still_attaches_listener(source_factory: FakeSourceFactory) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return json_response(500, {"message": "boom"})

    sync = _sync(handler, source_factory)
    asyncio.run(sync.start())

    assert sync.error == "boom"
    assert sync.messages == []
    assert source_factory.messages["c1"].attached
    source_factory.messages["c1"].push(ChangeEvent("added", "m9", {"senderId": "u2", "text": "hola"}))
    assert [message.id for message in sync.messages] == ["m9"]
    assert sync.messages[0].chat_id == "c1"


def test_start_twice_is_rejected(source_factory: FakeSourceFactory) -> None:
    sync = _sync(lambda request: json_response(200, []), source_factory)

    async def scenario() -> None:
        await sync.start()
        with pytest.raises(CineMatchError):
            await sync.start()

    asyncio.run(scenario())


def test_listener_batches_are_merged(source_factory: FakeSourceFactory) -> None:
    sync = _sync(lambda request: json_response(200, _page("m2", "m1")), source_factory)
    asyncio.run(sync.start())
    source = source_factory.messages["c1"]

    source.push(
        ChangeEvent("added", "m3", {"senderId": "u2", "text": "nuevo"}),
        ChangeEvent("added", "m2", {"senderId": "u1", "text": "duplicate"}),
        ChangeEvent("modified", "m1", {"senderId": "u1", "text": "editado", "reactions": {"u2": "🔥"}}),
        ChangeEvent("removed", "missing"),
    )

    assert [message.id for message in sync.messages] == ["m3", "m2", "m1"]
    assert sync.messages[1].text == "text m2"
    assert sync.messages[2].text == "editado"
    assert sync.grouped_reactions("m1") == {"🔥": 1}
    assert sync.grouped_reactions("unknown") == {}


def test_listener_error_freezes_updates_until_refresh(source_factory: FakeSourceFactory) -> None:
    sync = _sync(lambda request: json_response(200, _page("m1")), source_factory)
    asyncio.run(sync.start())
    source = source_factory.messages["c1"]

    source.fail(RuntimeError("permission denied"))
    source.push(ChangeEvent("added", "m2", {"senderId": "u2"}))

    assert sync.error == "Error al escuchar mensajes en tiempo real"
    assert [message.id for message in sync.messages] == ["m1"]
    assert not source.unsubscribed

    asyncio.run(sync.refresh_messages())
    assert sync.error is None
    source.push(ChangeEvent("added", "m2", {"senderId": "u2"}))
    assert [message.id for message in sync.messages] == ["m2", "m1"]


def test_close_unsubscribes_and_ignores_late_events(source_factory: FakeSourceFactory) -> None:
    sync = _sync(lambda request: json_response(200, _page("m1")), source_factory)
    asyncio.run(sync.start())
    source = source_factory.messages["c1"]
    on_changes, on_error = source.on_changes, source.on_error

    sync.close()
    sync.close()
    assert on_changes is not None and on_error is not None
    on_changes([ChangeEvent("added", "m2", {"senderId": "u2"})])
    on_error(RuntimeError("late"))

    assert source.unsubscribed
    assert sync.state is SyncState.TORN_DOWN
    assert [message.id for message in sync.messages] == ["m1"]
    assert sync.error is None


def test_close_during_load_skips_listener(source_factory: FakeSourceFactory) -> None:
    holder: list[ChatMessagesSync] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        holder[0].close()
        return json_response(200, _page("m1"))

    sync = _sync(handler, source_factory)
    holder.append(sync)
    asyncio.run(sync.start())

    assert "c1" not in source_factory.messages
    assert sync.messages == []


def test_send_message_posts_without_touching_state(source_factory: FakeSourceFactory) -> None:
    bodies: list[bytes] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            bodies.append(request.content)
            return json_response(201, {"id": "m2", "senderId": "me", "text": "hola"})
        return json_response(200, _page("m1"))

    sync = _sync(handler, source_factory)

    async def scenario() -> None:
        async with sync:
            await sync.send_message("hola")

    asyncio.run(scenario())
    assert [json.loads(body) for body in bodies] == [{"text": "hola", "type": "text"}]
    assert [message.id for message in sync.messages] == ["m1"]


def test_send_message_failure_is_reraised(source_factory: FakeSourceFactory) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            return json_response(400, {"message": "No perteneces a este chat"})
        return json_response(200, [])

    sync = _sync(handler, source_factory)

    async def scenario() -> None:
        await sync.start()
        with pytest.raises(HttpError) as info:
            await sync.send_message("hola")
        assert info.value.status_code == 400

    asyncio.run(scenario())
    assert sync.error is None


def test_malformed_document_does_not_drop_batch(source_factory: FakeSourceFactory) -> None:
    async def scenario() -> ChatMessagesSync:
        sync = _sync(lambda request: json_response(200, _page("m30")), source_factory)
        await sync.start()
        source = source_factory.messages["c1"]
        loop = asyncio.get_running_loop()
        batch = [
            ChangeEvent("added", "m31", {"senderId": "u2", "text": "válido"}),
            ChangeEvent("added", "m32", {"type": "system"}),
        ]
        loop.call_soon_threadsafe(source.on_changes, batch)
        await asyncio.sleep(0)
        return sync

    sync = asyncio.run(scenario())

    assert [message.id for message in sync.messages] == ["m31", "m30"]
    assert sync.error is None
    source = source_factory.messages["c1"]
    source.push(ChangeEvent("added", "m33", {"senderId": "u1", "text": "sigue vivo"}))
    assert [message.id for message in sync.messages] == ["m33", "m31", "m30"]


def test_unexpected_merge_failure_is_reported_as_listener_error(source_factory: FakeSourceFactory) -> None:
    sync = _sync(lambda request: json_response(200, _page("m1")), source_factory)
    asyncio.run(sync.start())

    source_factory.messages["c1"].push(ChangeEvent("added", "m2", None))  # type: ignore[arg-type]

    assert sync.error == "Error al escuchar mensajes en tiempo real"
    assert [message.id for message in sync.messages] == ["m1"]
