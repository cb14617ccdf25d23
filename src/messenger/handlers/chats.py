from datetime import datetime
import logging

from pydantic import ValidationError
from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.exc import SQLAlchemyError

from messenger.core.dto import OutgoingMessage
from messenger.session.context import SessionContext
from messenger.session.states import ChatMenuAction, parse_action
from .lists import USER_EXISTS

CHAT_SEQUENCE = "chat_chat_id_seq"

# chat ids are 32-bit serials
MAX_CHAT_ID = 2**31 - 1

CURRENT_CHATS = """
    SELECT chats.chat_id AS current_chats
    FROM chat_list chats
    WHERE chats.member = :login
    ORDER BY chats.chat_id
"""

IS_MEMBER = "SELECT member FROM chat_list WHERE chat_id = :chat_id AND member = :login"

IS_OWNER = "SELECT init_sender FROM chat WHERE chat_id = :chat_id AND init_sender = :login"

INSERT_MESSAGE = text(
    """
    INSERT INTO message (msg_text, sender_login, chat_id, msg_timestamp)
    VALUES (:text, :sender, :chat_id, :sent_at)
    """
).bindparams(bindparam("sent_at", type_=DateTime))

# newest first; each page re-reads from the most recent message
MESSAGE_WINDOW = """
    SELECT m.msg_timestamp, m.sender_login, m.msg_text
    FROM message m
    WHERE m.chat_id = :chat_id
    ORDER BY m.msg_timestamp DESC
    LIMIT :limit
"""


class ChatHandlers:
    """
    Chat browsing, the per-chat sub menu and chat creation.

    Only the chat's initiating sender may add or remove members; other
    members see the send and view options only.

    Attributes:
        logger: Logger instance for tracking operations
    """
    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    async def list_chats(self, ctx: SessionContext, user: str) -> None:
        console = ctx.console
        console.clear()
        try:
            console.write("Here are your current chats\n")
            await ctx.executor.execute_query_print(CURRENT_CHATS, {"login": user})

            chat_id = console.read_int("Which chat do you want to work with? ")
            if chat_id is None or not 0 < chat_id <= MAX_CHAT_ID:
                console.write("Invalid chat")
                return
            if not await ctx.executor.execute_query_count(IS_MEMBER, {"chat_id": chat_id, "login": user}):
                console.write("Invalid chat")
                return

            await self._chat_menu(ctx, user, chat_id)
        except SQLAlchemyError as e:
            ctx.report_failure(self.logger, "Browse chats", e)

    async def _chat_menu(self, ctx: SessionContext, user: str, chat_id: int):
        console = ctx.console
        while True:
            console.clear()
            console.write(f"1. Send a Message in chat {chat_id}")
            console.write(f"2. View messages in chat {chat_id}")

            is_owner = await ctx.executor.execute_query_count(
                IS_OWNER, {"chat_id": chat_id, "login": user}
            )
            if is_owner:
                console.write(f"3. Add members to chat {chat_id}")
                console.write(f"4. Remove members from chat {chat_id}")
            console.write("5. return to main menu")

            action = parse_action(ChatMenuAction, console.read_choice())
            if action is ChatMenuAction.RETURN:
                return
            elif action is ChatMenuAction.SEND_MESSAGE:
                await self.send_message(ctx, user, chat_id)
                console.wait()
            elif action is ChatMenuAction.VIEW_MESSAGES:
                await self.view_messages(ctx, chat_id)
            elif action is ChatMenuAction.ADD_MEMBER and is_owner:
                await self.add_member(ctx, chat_id)
                console.wait()
            elif action is ChatMenuAction.REMOVE_MEMBER and is_owner:
                await self.remove_member(ctx, chat_id)
                console.wait()
            else:
                console.write("Invalid Input!\n")
                console.wait()

    async def send_message(self, ctx: SessionContext, user: str, chat_id: int) -> None:
        console = ctx.console
        try:
            message = OutgoingMessage(
                chat_id=chat_id,
                sender=user,
                text=console.read_line("Input your message: \n"),
            )
        except ValidationError as e:
            ctx.report_failure(self.logger, "Send message", e)
            return

        await ctx.executor.execute_update(
            INSERT_MESSAGE,
            {
                "text": message.text,
                "sender": message.sender,
                "chat_id": message.chat_id,
                "sent_at": datetime.now(),
            },
        )
        console.write("\nMessage successfully sent!")

    async def view_messages(self, ctx: SessionContext, chat_id: int) -> None:
        console = ctx.console
        limit = 0
        while True:
            limit += ctx.settings.page_size
            console.clear()
            await ctx.executor.execute_query_print(
                MESSAGE_WINDOW, {"chat_id": chat_id, "limit": limit}
            )
            answer = console.read_line("Enter '1' to view more messages, or ENTER to exit\n")
            if answer.strip() != "1":
                return

    async def add_member(self, ctx: SessionContext, chat_id: int) -> None:
        console = ctx.console
        login = console.read_line("Who do you want to add? ")
        if not await ctx.executor.execute_query_count(USER_EXISTS, {"login": login}):
            console.write("Invalid User!")
            return

        await ctx.executor.execute_update(
            "INSERT INTO chat_list (chat_id, member) VALUES (:chat_id, :member)",
            {"chat_id": chat_id, "member": login},
        )
        self.logger.info("Added %s to chat %s", login, chat_id)
        console.write(f"Successfully added {login} to chat {chat_id}")

    async def remove_member(self, ctx: SessionContext, chat_id: int) -> None:
        console = ctx.console
        console.write("\nThe following users are currently in the chat.")
        await ctx.executor.execute_query_print(
            "SELECT member FROM chat_list WHERE chat_id = :chat_id", {"chat_id": chat_id}
        )

        login = console.read_line("\nWho do you want to remove? ")
        params = {"chat_id": chat_id, "login": login}
        if not await ctx.executor.execute_query_count(IS_MEMBER, params):
            console.write("Invalid User!")
            return

        await ctx.executor.execute_update(
            "DELETE FROM chat_list WHERE member = :login AND chat_id = :chat_id", params
        )
        self.logger.info("Removed %s from chat %s", login, chat_id)
        console.write(f"Successfully removed {login} from chat {chat_id}")

    async def new_chat(self, ctx: SessionContext, user: str) -> None:
        """
        Creates a chat owned by the user.

        Member logins are read one per line until an empty line. The chat is
        private with one other member and a group with more.
        """
        console = ctx.console
        console.write("Enter the members of the new chat, one login per line. Finish with an empty line.")

        members: list[str] = []
        try:
            while True:
                login = console.read_line("Member: ").strip()
                if not login:
                    break
                if login == user:
                    console.write("You are always a member of your own chat.")
                elif login in members:
                    console.write(f"{login} is already in the chat.")
                elif not await ctx.executor.execute_query_count(USER_EXISTS, {"login": login}):
                    console.write("This user does not exist.")
                else:
                    members.append(login)

            if not members:
                console.write("A chat needs at least one other member.")
                return

            chat_type = "private" if len(members) == 1 else "group"
            await ctx.executor.execute_update(
                "INSERT INTO chat (chat_type, init_sender) VALUES (:chat_type, :owner)",
                {"chat_type": chat_type, "owner": user},
            )
            chat_id = await ctx.executor.current_sequence_value(CHAT_SEQUENCE)

            for member in [user, *members]:
                await ctx.executor.execute_update(
                    "INSERT INTO chat_list (chat_id, member) VALUES (:chat_id, :member)",
                    {"chat_id": chat_id, "member": member},
                )
        except SQLAlchemyError as e:
            ctx.report_failure(self.logger, "Create chat", e)
            return

        self.logger.info("%s created %s chat %s", user, chat_type, chat_id)
        console.write(f"Chat {chat_id} created with {', '.join(members)}.")
