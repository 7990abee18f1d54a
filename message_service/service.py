from typing import List

from fastapi import Depends
from sqlalchemy.orm import Session

from message_service.models import Message
from message_service.repository import MessageRepository
from message_service.storage import get_db


class MessageService:
    """Thin indirection between the HTTP routes and the repository."""

    def __init__(self, repository: MessageRepository):
        self.repository = repository

    def post(self, message: Message) -> None:
        self.repository.save(message)

    def find_messages(self) -> List[Message]:
        return self.repository.find_all()


def get_message_service(db: Session = Depends(get_db)) -> MessageService:
    """Dependency wiring a request-scoped service onto the request's session."""
    return MessageService(MessageRepository(db))
