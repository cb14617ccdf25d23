from dataclasses import dataclass
import logging

from sqlalchemy.exc import SQLAlchemyError

from messenger.session.context import SessionContext


@dataclass(frozen=True)
class ListKind:
    column: str
    added: str
    missing: str

CONTACTS = ListKind(
    column="contact_list",
    added="Successfully added {login} to contacts!",
    missing="{login} is not in your contact list.",
)
BLOCKED = ListKind(
    column="block_list",
    added="Successfully added {login} to your block list!",
    missing="{login} is not in your block list.",
)

USER_EXISTS = "SELECT login FROM usr WHERE login = :login"

LIST_CONTACTS = """
    SELECT u1.login AS contacts, u1.status AS status_message
    FROM (
        SELECT con.list_member
        FROM user_list_contains con, usr u
        WHERE u.login = :login AND u.contact_list = con.list_id
    ) AS members, usr u1
    WHERE members.list_member = u1.login
"""

LIST_BLOCKED = """
    SELECT u1.login AS blocked_contacts
    FROM (
        SELECT con.list_member
        FROM user_list_contains con, usr u
        WHERE u.login = :login AND u.block_list = con.list_id
    ) AS members, usr u1
    WHERE members.list_member = u1.login
"""


class ContactHandlers:
    """
    Contact list and block list management for the logged in user.

    Attributes:
        logger: Logger instance for tracking operations
    """
    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    async def _list_id(self, ctx: SessionContext, user: str, kind: ListKind) -> int:
        rows = await ctx.executor.execute_query_rows(
            f"SELECT {kind.column} FROM usr WHERE login = :login", {"login": user}
        )
        return int(rows[0][0])

    async def _add(self, ctx: SessionContext, user: str, kind: ListKind):
        console = ctx.console
        login = console.read_line("Enter contact: ")
        try:
            found = await ctx.executor.execute_query_rows(USER_EXISTS, {"login": login})
            if not found:
                console.write("This user does not exist.")
                return

            list_id = await self._list_id(ctx, user, kind)
            await ctx.executor.execute_update(
                "INSERT INTO user_list_contains (list_id, list_member) VALUES (:list_id, :member)",
                {"list_id": list_id, "member": login},
            )
        except SQLAlchemyError as e:
            ctx.report_failure(self.logger, f"Add to {kind.column}", e)
            return

        self.logger.info("%s added %s to %s", user, login, kind.column)
        console.write(kind.added.format(login=login))

    async def _delete(self, ctx: SessionContext, user: str, kind: ListKind):
        console = ctx.console
        login = console.read_line("Enter contact: ")
        try:
            list_id = await self._list_id(ctx, user, kind)
            params = {"list_id": list_id, "member": login}
            listed = await ctx.executor.execute_query_count(
                "SELECT list_member FROM user_list_contains WHERE list_id = :list_id AND list_member = :member",
                params,
            )
            if not listed:
                console.write(kind.missing.format(login=login))
                return

            # duplicates go too
            await ctx.executor.execute_update(
                "DELETE FROM user_list_contains WHERE list_id = :list_id AND list_member = :member",
                params,
            )
        except SQLAlchemyError as e:
            ctx.report_failure(self.logger, f"Delete from {kind.column}", e)
            return

        self.logger.info("%s removed %s from %s", user, login, kind.column)
        console.write(f"Successfully removed {login}!")

    async def add_to_contact(self, ctx: SessionContext, user: str) -> None:
        await self._add(ctx, user, CONTACTS)

    async def add_to_block(self, ctx: SessionContext, user: str) -> None:
        await self._add(ctx, user, BLOCKED)

    async def delete_from_contact(self, ctx: SessionContext, user: str) -> None:
        await self._delete(ctx, user, CONTACTS)

    async def delete_from_block(self, ctx: SessionContext, user: str) -> None:
        await self._delete(ctx, user, BLOCKED)

    async def list_contacts(self, ctx: SessionContext, user: str) -> None:
        ctx.console.clear()
        try:
            ctx.console.write("The following are your contacts\n")
            await ctx.executor.execute_query_print(LIST_CONTACTS, {"login": user})
        except SQLAlchemyError as e:
            ctx.report_failure(self.logger, "List contacts", e)

    async def browse_block_list(self, ctx: SessionContext, user: str) -> None:
        ctx.console.clear()
        try:
            ctx.console.write("The following are your blocked contacts\n")
            await ctx.executor.execute_query_print(LIST_BLOCKED, {"login": user})
        except SQLAlchemyError as e:
            ctx.report_failure(self.logger, "Browse block list", e)
