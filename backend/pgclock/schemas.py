from datetime import datetime

from pydantic import BaseModel


class ServerTime(BaseModel):
    now: datetime


class Message(BaseModel):
    detail: str
