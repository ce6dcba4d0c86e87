"""Tests for the message model and brain."""

from unittest.mock import MagicMock

import pytest

from rubo.brain import Brain
from rubo.message import (
    CatchAllMessage,
    EnterMessage,
    LeaveMessage,
    MessageKind,
    TextMessage,
    TopicMessage,
    User,
)


def test_user_name_defaults_to_id():
    user = User(id="42")
    assert user.name == "42"
    assert str(user) == "42"


def test_user_keeps_extra_fields():
    user = User(id="1", name="alice", room="general", email="a@example.com")
    assert user.email == "a@example.com"


def test_each_variant_carries_its_kind():
    user = User(id="1")
    assert TextMessage(user, "hi").kind is MessageKind.TEXT
    assert EnterMessage(user).kind is MessageKind.ENTER
    assert LeaveMessage(user).kind is MessageKind.LEAVE
    assert TopicMessage(user, "t").kind is MessageKind.TOPIC
    assert CatchAllMessage(TextMessage(user, "hi")).kind is MessageKind.CATCH_ALL


def test_finish_sets_done():
    message = TextMessage(User(id="1"), "hi")
    assert message.done is False
    message.finish()
    assert message.done is True


def test_text_message_match_and_str():
    message = TextMessage(User(id="1", room="r"), "deploy api now", "7")
    assert message.match(r"deploy (\w+)").group(1) == "api"
    assert message.match(r"^nope") is None
    assert str(message) == "deploy api now"
    assert message.room == "r"
    assert message.id == "7"


def test_catch_all_wraps_original_and_shares_user():
    original = TextMessage(User(id="1", room="r"), "hi")
    wrapper = CatchAllMessage(original)
    assert wrapper.message is original
    assert wrapper.user is original.user
    assert wrapper.done is False


def test_catch_all_refuses_to_wrap_catch_all():
    wrapper = CatchAllMessage(TextMessage(User(id="1"), "hi"))
    with pytest.raises(TypeError):
        CatchAllMessage(wrapper)


# -------------------------------------------------------------------
# Brain
# -------------------------------------------------------------------

def test_brain_get_set_remove():
    brain = Brain()
    brain.set("counter", 3).set("other", "x")
    assert brain.get("counter") == 3
    brain.remove("counter")
    assert brain.get("counter") is None
    assert brain.get("counter", 0) == 0


def test_brain_user_directory():
    brain = Brain()
    alice = brain.user_for_id("1", name="Alice", room="general")
    assert brain.user_for_id("1") is alice
    assert brain.user_for_name("alice") is alice
    assert brain.user_for_name("bob") is None

    moved = brain.user_for_id("1", name="Alice", room="random")
    assert moved is not alice
    assert moved.room == "random"
    assert brain.users() == [moved]


@pytest.mark.asyncio
async def test_brain_close_saves_once():
    brain = Brain()
    saved = MagicMock()
    closed = MagicMock()
    brain.events.on("save", saved)
    brain.events.on("close", closed)

    await brain.close()
    await brain.close()

    saved.assert_called_once_with(brain.data)
    closed.assert_called_once_with()


@pytest.mark.asyncio
async def test_brain_merge_data_emits_loaded():
    brain = Brain()
    loaded = MagicMock()
    brain.events.on("loaded", loaded)

    await brain.merge_data({"_private": {"k": "v"}})

    assert brain.get("k") == "v"
    loaded.assert_called_once_with(brain.data)
