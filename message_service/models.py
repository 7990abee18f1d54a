"""
SQLAlchemy ORM models for database tables.

The table itself is created by schema.sql at startup; this mapping must
stay in step with it. For Pydantic request/response schemas, see schemas.py.
"""

import uuid

from sqlalchemy import Column, String

from message_service.storage import Base, MESSAGES_TABLE


def generate_message_id() -> str:
    return str(uuid.uuid4())


class Message(Base):
    """
    A persisted message.

    Table: messages
    Primary Key: id (random UUID unless the client supplies one)
    """
    __tablename__ = MESSAGES_TABLE

    id = Column(String(60), primary_key=True, default=generate_message_id)
    text = Column(String, nullable=False)

    def __repr__(self) -> str:
        return f"Message(id={self.id!r}, text={self.text!r})"
