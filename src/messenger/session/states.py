from dataclasses import dataclass
from enum import IntEnum


class MainMenuAction(IntEnum):
    CREATE_USER = 1
    LOG_IN = 2
    EXIT = 9


class UserMenuAction(IntEnum):
    ADD_TO_CONTACT = 1
    ADD_TO_BLOCK = 2
    DELETE_FROM_CONTACT = 3
    DELETE_FROM_BLOCK = 4
    LIST_CONTACTS = 5
    BROWSE_BLOCK_LIST = 6
    LIST_CHATS = 7
    NEW_CHAT = 8
    DELETE_ACCOUNT = 9
    LOG_OUT = 10


class ChatMenuAction(IntEnum):
    SEND_MESSAGE = 1
    VIEW_MESSAGES = 2
    ADD_MEMBER = 3
    REMOVE_MEMBER = 4
    RETURN = 5


def parse_action(enum_type: type[IntEnum], choice: int) -> IntEnum | None:
    try:
        return enum_type(choice)
    except ValueError:
        return None


@dataclass(frozen=True)
class Unauthenticated:
    pass


@dataclass(frozen=True)
class Authenticated:
    user: str


@dataclass(frozen=True)
class Terminated:
    pass


SessionState = Unauthenticated | Authenticated | Terminated
