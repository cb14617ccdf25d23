import logging

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from messenger.core.dto import Credentials, NewUser
from messenger.session.context import SessionContext

LIST_SEQUENCE = "user_list_list_id_seq"


class AccountHandlers:
    """
    Account lifecycle: creating a user, logging in and deleting an account.

    Attributes:
        logger: Logger instance for tracking operations
    """
    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    async def create_user(self, ctx: SessionContext) -> None:
        """
        Creates a user together with an empty block list and contact list.

        The list rows are inserted first and their ids read back from the
        list sequence. A duplicate login is rejected by the database and
        reported; the two list rows created before it are left in place.
        """
        console = ctx.console
        try:
            new_user = NewUser(
                login=console.read_line("\tEnter user login: "),
                password=console.read_line("\tEnter user password: "),
                phone=console.read_line("\tEnter user phone: "),
            )
        except ValidationError as e:
            ctx.report_failure(self.logger, "Create user", e)
            return

        executor = ctx.executor
        try:
            await executor.execute_update("INSERT INTO user_list (list_type) VALUES ('block')")
            block_id = await executor.current_sequence_value(LIST_SEQUENCE)
            await executor.execute_update("INSERT INTO user_list (list_type) VALUES ('contact')")
            contact_id = await executor.current_sequence_value(LIST_SEQUENCE)

            await executor.execute_update(
                """
                INSERT INTO usr (phonenum, login, password, block_list, contact_list)
                VALUES (:phone, :login, :password, :block_list, :contact_list)
                """,
                {
                    "phone": new_user.phone,
                    "login": new_user.login,
                    "password": new_user.password,
                    "block_list": block_id,
                    "contact_list": contact_id,
                },
            )
        except SQLAlchemyError as e:
            ctx.report_failure(self.logger, "Create user", e)
            return

        self.logger.info("Created user %s", new_user.login)
        console.write("User successfully created!")

    async def log_in(self, ctx: SessionContext) -> str | None:
        """
        Checks credentials against the users table.
        :return: the login on an exact match, None otherwise
        """
        console = ctx.console
        try:
            credentials = Credentials(
                login=console.read_line("\tEnter user login: "),
                password=console.read_line("\tEnter user password: "),
            )
            found = await ctx.executor.execute_query_count(
                "SELECT * FROM usr WHERE login = :login AND password = :password",
                {"login": credentials.login, "password": credentials.password},
            )
        except (ValidationError, SQLAlchemyError) as e:
            ctx.report_failure(self.logger, "Log in", e)
            return None

        if found:
            self.logger.info("User %s logged in", credentials.login)
            return credentials.login
        return None

    async def delete_account(self, ctx: SessionContext, user: str) -> bool:
        """
        Deletes the account and everything that references it.

        Chats owned by the user go with their messages and rosters, the
        user's messages and memberships elsewhere are removed, and the user
        disappears from other people's lists. Statements run children first
        so a failure part way leaves no dangling references.
        :return: True once the user row is gone
        """
        console = ctx.console
        answer = console.read_line("Type 'yes' to permanently delete your account: ")
        if answer.strip().lower() != "yes":
            console.write("Account deletion cancelled.")
            return False

        executor = ctx.executor
        params = {"login": user}
        try:
            lists = await executor.execute_query_rows(
                "SELECT block_list, contact_list FROM usr WHERE login = :login", params
            )
            if not lists:
                console.write("This user does not exist.")
                return False
            block_id, contact_id = (int(value) for value in lists[0])

            owned_chats = "SELECT chat_id FROM chat WHERE init_sender = :login"
            await executor.execute_update(f"DELETE FROM message WHERE chat_id IN ({owned_chats})", params)
            await executor.execute_update(f"DELETE FROM chat_list WHERE chat_id IN ({owned_chats})", params)
            await executor.execute_update("DELETE FROM chat WHERE init_sender = :login", params)

            await executor.execute_update("DELETE FROM message WHERE sender_login = :login", params)
            await executor.execute_update("DELETE FROM chat_list WHERE member = :login", params)
            await executor.execute_update("DELETE FROM user_list_contains WHERE list_member = :login", params)

            own_lists = {"block_list": block_id, "contact_list": contact_id}
            await executor.execute_update(
                "DELETE FROM user_list_contains WHERE list_id = :block_list OR list_id = :contact_list",
                own_lists,
            )
            await executor.execute_update("DELETE FROM usr WHERE login = :login", params)
            await executor.execute_update(
                "DELETE FROM user_list WHERE list_id = :block_list OR list_id = :contact_list",
                own_lists,
            )
        except SQLAlchemyError as e:
            ctx.report_failure(self.logger, "Delete account", e)
            return False

        self.logger.info("Deleted account %s", user)
        console.write(f"Account {user} has been deleted.")
        return True
