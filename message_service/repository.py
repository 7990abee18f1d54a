"""
Persistence layer for messages.

MessageRepository is bound to one database session and exposes only the
two operations the service needs: save and find_all.
"""

import logging
from typing import List

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from message_service.models import Message, generate_message_id

logger = logging.getLogger(__name__)

FIND_ALL_QUERY = text("SELECT id, text FROM messages")


class MessageRepository:
    def __init__(self, db: Session):
        self.db = db

    def save(self, message: Message) -> Message:
        """
        Insert a message, generating its id when the caller left it unset.

        Returns:
            The persisted message with id populated.

        Raises:
            SQLAlchemyError: on constraint violations or store failures.
                The session is rolled back before the error propagates.
        """
        if not message.id:
            message.id = generate_message_id()

        logger.info(f"Saving message: id={message.id}")
        logger.debug(f"Message details: text={message.text!r}")

        try:
            self.db.add(message)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save message {message.id}: {e}")
            raise

        self.db.refresh(message)
        logger.info(f"Message saved successfully: {message.id}")
        return message

    def find_all(self) -> List[Message]:
        """Return every row of the messages table in store order."""
        logger.info("Querying all messages")
        messages = self.db.query(Message).from_statement(FIND_ALL_QUERY).all()
        logger.info(f"Retrieved {len(messages)} messages")
        return messages
