import pytest
import pytest_asyncio

from messenger.handlers.lists import ContactHandlers

pytestmark = pytest.mark.asyncio

CONTACT_ROWS = """
    SELECT c.list_member FROM user_list_contains c, usr u
    WHERE u.login = :login AND c.list_id = u.contact_list
"""
BLOCK_ROWS = """
    SELECT c.list_member FROM user_list_contains c, usr u
    WHERE u.login = :login AND c.list_id = u.block_list
"""


@pytest_asyncio.fixture
async def users(create_user):
    await create_user("alice", "pw1", "555-0001")
    await create_user("bob", "pw2", "555-0002")
    await create_user("carol", "pw3", "555-0003")


async def test_add_contact_inserts_one_row(users, make_ctx, executor, out):
    await ContactHandlers().add_to_contact(make_ctx("bob"), "alice")

    assert await executor.execute_query_rows(CONTACT_ROWS, {"login": "alice"}) == [["bob"]]
    assert await executor.execute_query_rows(BLOCK_ROWS, {"login": "alice"}) == []
    assert "Successfully added bob to contacts!" in out.getvalue()


async def test_add_contact_twice_duplicates(users, make_ctx, count_rows):
    handlers = ContactHandlers()
    await handlers.add_to_contact(make_ctx("bob"), "alice")
    await handlers.add_to_contact(make_ctx("bob"), "alice")

    assert await count_rows(CONTACT_ROWS, {"login": "alice"}) == 2


async def test_add_unknown_contact_is_a_no_op(users, make_ctx, count_rows, out):
    await ContactHandlers().add_to_contact(make_ctx("dave"), "alice")

    assert await count_rows("SELECT * FROM user_list_contains") == 0
    assert "This user does not exist." in out.getvalue()


async def test_add_to_block_uses_block_list(users, make_ctx, executor, out):
    await ContactHandlers().add_to_block(make_ctx("carol"), "alice")

    assert await executor.execute_query_rows(BLOCK_ROWS, {"login": "alice"}) == [["carol"]]
    assert await executor.execute_query_rows(CONTACT_ROWS, {"login": "alice"}) == []
    assert "Successfully added carol to your block list!" in out.getvalue()


async def test_list_contacts_prints_members(users, make_ctx, out):
    handlers = ContactHandlers()
    await handlers.add_to_contact(make_ctx("bob"), "alice")
    await handlers.add_to_block(make_ctx("carol"), "alice")
    out.truncate(0)
    out.seek(0)

    await handlers.list_contacts(make_ctx(), "alice")

    lines = out.getvalue().splitlines()
    assert "contacts\tstatus_message\t" in lines
    assert "bob\tNone\t" in lines
    assert not any(line.startswith("carol") for line in lines)


async def test_browse_block_list_prints_members(users, make_ctx, out):
    handlers = ContactHandlers()
    await handlers.add_to_block(make_ctx("carol"), "alice")
    out.truncate(0)
    out.seek(0)

    await handlers.browse_block_list(make_ctx(), "alice")

    lines = out.getvalue().splitlines()
    assert "blocked_contacts\t" in lines
    assert "carol\t" in lines


async def test_delete_from_contact_removes_duplicates(users, make_ctx, executor, out):
    handlers = ContactHandlers()
    await handlers.add_to_contact(make_ctx("bob"), "alice")
    await handlers.add_to_contact(make_ctx("bob"), "alice")
    await handlers.add_to_contact(make_ctx("carol"), "alice")
    await handlers.add_to_block(make_ctx("bob"), "alice")

    await handlers.delete_from_contact(make_ctx("bob"), "alice")

    assert await executor.execute_query_rows(CONTACT_ROWS, {"login": "alice"}) == [["carol"]]
    assert await executor.execute_query_rows(BLOCK_ROWS, {"login": "alice"}) == [["bob"]]
    assert "Successfully removed bob!" in out.getvalue()


async def test_delete_from_block_when_not_listed(users, make_ctx, count_rows, out):
    handlers = ContactHandlers()
    await handlers.add_to_contact(make_ctx("bob"), "alice")

    await handlers.delete_from_block(make_ctx("bob"), "alice")

    assert await count_rows(CONTACT_ROWS, {"login": "alice"}) == 1
    assert "bob is not in your block list." in out.getvalue()
