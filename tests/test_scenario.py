import pytest

from messenger.handlers.account import AccountHandlers
from messenger.handlers.chats import ChatHandlers
from messenger.handlers.lists import ContactHandlers
from messenger.session.machine import MessengerSession
from messenger.session.states import Terminated

pytestmark = pytest.mark.asyncio


async def test_alice_adds_bob_but_not_carol(make_ctx, executor, out):
    script = [
        "1", "alice", "pw1", "555-0001",
        "1", "bob", "pw2", "555-0002",
        "2", "alice", "pw1",
        "1", "bob", "",
        "5", "",
        "1", "carol", "",
        "10",
        "9",
    ]
    session = MessengerSession(make_ctx(*script), AccountHandlers(), ContactHandlers(), ChatHandlers())

    assert await session.run() == Terminated()

    output = out.getvalue()
    assert output.count("User successfully created!") == 2
    assert "Welcome to Messenger alice!" in output
    assert "Successfully added bob to contacts!" in output
    assert "bob\tNone\t" in output.splitlines()
    assert "This user does not exist." in output

    members = await executor.execute_query_rows("SELECT list_member FROM user_list_contains")
    assert members == [["bob"]]


async def test_oversized_chat_number_keeps_the_session_alive(create_user, make_ctx, out):
    await create_user("alice", "pw1", "555-0001")
    script = ["2", "alice", "pw1", "7", "99999999999999999999", "", "10", "9"]
    session = MessengerSession(make_ctx(*script), AccountHandlers(), ContactHandlers(), ChatHandlers())

    assert await session.run() == Terminated()
    assert "Invalid chat" in out.getvalue()
