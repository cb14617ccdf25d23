import logging

from messenger.console import InputClosed
from messenger.handlers.account import AccountHandlers
from messenger.handlers.chats import ChatHandlers
from messenger.handlers.lists import ContactHandlers
from .context import SessionContext
from .states import (
    Authenticated,
    MainMenuAction,
    SessionState,
    Terminated,
    Unauthenticated,
    UserMenuAction,
    parse_action,
)

MAIN_MENU = """MAIN MENU
---------
1. Create user
2. Log in
9. < EXIT"""

USER_MENU = """MAIN MENU
-----------------------
1. Add to contact list
2. Add to block list
3. Delete from contact list
4. Delete from block list
5. Browse contact list
6. Browse block list
7. Browse/Edit current chats
8. Create a new chat
9. DELETE Account
.........................
10. Log out"""


class MessengerSession:
    """
    Menu-driven session: Unauthenticated -> Authenticated(user) -> Terminated.

    Each step renders the menu of the current state, reads one choice and
    returns the next state. Choices outside the state's menu leave the
    state unchanged.
    """

    def __init__(
            self,
            ctx: SessionContext,
            account: AccountHandlers,
            contacts: ContactHandlers,
            chats: ChatHandlers,
            logger: logging.Logger | None = None
    ):
        self.ctx = ctx
        self.account = account
        self.contacts = contacts
        self.chats = chats
        self.logger = logger or logging.getLogger(__name__)

        self._user_actions = {
            UserMenuAction.ADD_TO_CONTACT: contacts.add_to_contact,
            UserMenuAction.ADD_TO_BLOCK: contacts.add_to_block,
            UserMenuAction.DELETE_FROM_CONTACT: contacts.delete_from_contact,
            UserMenuAction.DELETE_FROM_BLOCK: contacts.delete_from_block,
            UserMenuAction.LIST_CONTACTS: contacts.list_contacts,
            UserMenuAction.BROWSE_BLOCK_LIST: contacts.browse_block_list,
            UserMenuAction.LIST_CHATS: chats.list_chats,
            UserMenuAction.NEW_CHAT: chats.new_chat,
        }

    async def run(self, state: SessionState | None = None) -> SessionState:
        state = state or Unauthenticated()
        while not isinstance(state, Terminated):
            try:
                state = await self.step(state)
            except InputClosed:
                self.logger.info("Input closed, ending session")
                state = Terminated()
        return state

    async def step(self, state: SessionState) -> SessionState:
        if isinstance(state, Unauthenticated):
            return await self._main_menu(state)
        if isinstance(state, Authenticated):
            return await self._user_menu(state)
        return state

    async def _main_menu(self, state: Unauthenticated) -> SessionState:
        console = self.ctx.console
        console.write(MAIN_MENU)

        action = parse_action(MainMenuAction, console.read_choice())
        if action is MainMenuAction.CREATE_USER:
            await self.account.create_user(self.ctx)
        elif action is MainMenuAction.LOG_IN:
            user = await self.account.log_in(self.ctx)
            if user is not None:
                return Authenticated(user)
            console.write("Invalid login or password.")
        elif action is MainMenuAction.EXIT:
            return Terminated()
        else:
            console.write("Unrecognized choice!")
        return state

    async def _user_menu(self, state: Authenticated) -> SessionState:
        console = self.ctx.console
        console.clear()
        console.write(f"Welcome to Messenger {state.user}!\n")
        console.write(USER_MENU)

        action = parse_action(UserMenuAction, console.read_choice())
        if action is UserMenuAction.LOG_OUT:
            console.clear()
            self.logger.info("User %s logged out", state.user)
            return Unauthenticated()

        if action is UserMenuAction.DELETE_ACCOUNT:
            deleted = await self.account.delete_account(self.ctx, state.user)
            console.wait()
            return Unauthenticated() if deleted else state

        handler = self._user_actions.get(action)
        if handler is None:
            console.write("Unrecognized choice!")
            console.wait()
            return state

        await handler(self.ctx, state.user)
        console.wait()
        console.clear()
        return state
