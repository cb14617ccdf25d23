from pydantic import BaseModel, Field

class Credentials(BaseModel):
    login: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=50)

class NewUser(Credentials):
    phone: str = Field(min_length=1, max_length=16)

class OutgoingMessage(BaseModel):
    chat_id: int
    sender: str
    text: str = Field(min_length=1, max_length=300)
