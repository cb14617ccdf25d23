from sqlalchemy import ForeignKey, String, DateTime, Index, CheckConstraint, PrimaryKeyConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from datetime import datetime
from typing import Optional


class Base(DeclarativeBase):
    pass

# sequence name -> table that owns it, for dialects without named sequences
SEQUENCE_TABLES = {
    "user_list_list_id_seq": "user_list",
    "chat_chat_id_seq": "chat",
}

class UserList(Base):
    __tablename__ = "user_list"
    __table_args__ = (
        CheckConstraint("list_type IN ('block', 'contact')", name="ck_user_list_type"),
        {"sqlite_autoincrement": True},
    )

    list_id: Mapped[int] = mapped_column(primary_key=True)
    list_type: Mapped[str] = mapped_column(String(10), nullable=False)

class User(Base):
    __tablename__ = "usr"

    login: Mapped[str] = mapped_column(String(50), primary_key=True)
    phonenum: Mapped[str] = mapped_column(String(16), unique=True)
    password: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[Optional[str]] = mapped_column(String(140), nullable=True)
    block_list: Mapped[int] = mapped_column(ForeignKey("user_list.list_id"))
    contact_list: Mapped[int] = mapped_column(ForeignKey("user_list.list_id"))

class UserListContains(Base):
    __tablename__ = "user_list_contains"
    __table_args__ = (
        Index('idx_user_list_contains_list', 'list_id'),
    )

    # surrogate key, the same member may be listed twice
    id: Mapped[int] = mapped_column(primary_key=True)
    list_id: Mapped[int] = mapped_column(ForeignKey("user_list.list_id"))
    list_member: Mapped[str] = mapped_column(ForeignKey("usr.login"))

class Chat(Base):
    __tablename__ = "chat"
    __table_args__ = (
        CheckConstraint("chat_type IN ('private', 'group')", name="ck_chat_type"),
        {"sqlite_autoincrement": True},
    )

    chat_id: Mapped[int] = mapped_column(primary_key=True)
    chat_type: Mapped[str] = mapped_column(String(8), nullable=False)
    init_sender: Mapped[str] = mapped_column(ForeignKey("usr.login"))

class ChatList(Base):
    __tablename__ = "chat_list"
    __table_args__ = (
        PrimaryKeyConstraint('chat_id', 'member'),
    )

    chat_id: Mapped[int] = mapped_column(ForeignKey("chat.chat_id"))
    member: Mapped[str] = mapped_column(ForeignKey("usr.login"))

class Message(Base):
    __tablename__ = "message"
    __table_args__ = (
        Index('idx_message_chat_timestamp', 'chat_id', 'msg_timestamp'),
        {"sqlite_autoincrement": True},
    )

    msg_id: Mapped[int] = mapped_column(primary_key=True)
    msg_text: Mapped[str] = mapped_column(String(300), nullable=False)
    msg_timestamp: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)
    sender_login: Mapped[str] = mapped_column(ForeignKey("usr.login"))
    chat_id: Mapped[int] = mapped_column(ForeignKey("chat.chat_id"))
