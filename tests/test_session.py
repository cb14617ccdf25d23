import pytest

from messenger.handlers.account import AccountHandlers
from messenger.handlers.chats import ChatHandlers
from messenger.handlers.lists import ContactHandlers
from messenger.session.machine import MessengerSession
from messenger.session.states import Authenticated, Terminated, Unauthenticated

pytestmark = pytest.mark.asyncio


@pytest.fixture
def make_session(make_ctx):
    def factory(*lines: str) -> MessengerSession:
        return MessengerSession(
            make_ctx(*lines),
            AccountHandlers(),
            ContactHandlers(),
            ChatHandlers(),
        )
    return factory


async def test_invalid_input_keeps_main_menu(make_session, out):
    session = make_session("abc", "7", "9")

    state = await session.step(Unauthenticated())
    assert state == Unauthenticated()
    assert "Your input is invalid!" in out.getvalue()
    assert "Unrecognized choice!" in out.getvalue()

    assert await session.step(state) == Terminated()


async def test_failed_log_in_stays_unauthenticated(create_user, make_session, out):
    await create_user("alice", "pw1", "555-0001")

    state = await make_session("2", "alice", "wrong").step(Unauthenticated())

    assert state == Unauthenticated()
    assert "Invalid login or password." in out.getvalue()


async def test_log_in_then_log_out(create_user, make_session):
    await create_user("alice", "pw1", "555-0001")
    session = make_session("2", "alice", "pw1", "10")

    state = await session.step(Unauthenticated())
    assert state == Authenticated("alice")

    assert await session.step(state) == Unauthenticated()


async def test_unknown_user_menu_choice_keeps_state(create_user, make_session, out):
    await create_user("alice", "pw1", "555-0001")

    state = await make_session("42", "").step(Authenticated("alice"))

    assert state == Authenticated("alice")
    assert "Unrecognized choice!" in out.getvalue()


async def test_deleting_account_logs_out(create_user, make_session, count_rows):
    await create_user("alice", "pw1", "555-0001")

    state = await make_session("9", "yes", "").step(Authenticated("alice"))

    assert state == Unauthenticated()
    assert await count_rows("SELECT * FROM usr") == 0


async def test_cancelled_deletion_keeps_user(create_user, make_session):
    await create_user("alice", "pw1", "555-0001")

    state = await make_session("9", "no", "").step(Authenticated("alice"))

    assert state == Authenticated("alice")


async def test_end_of_input_terminates(make_session):
    assert await make_session("1").run() == Terminated()


async def test_exit_from_main_menu(make_session):
    assert await make_session("9").run() == Terminated()
