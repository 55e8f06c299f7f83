from __future__ import annotations

import logging
from typing import Callable, List, Optional, Union

from ..common.datetime_utils import now_millis
from ..common.ids import new_id
from ..common.validators import plain_text, require_non_empty
from ..core.constants import MESSAGE_ID_PREFIX
from ..core.enums import Collection, Role
from ..core.exceptions import ValidationError
from ..database.store import EntityStore
from .model import ChatMessage
from .repository import ChatMessageRepository

logger = logging.getLogger(__name__)


class MessageLog:
    """Append-only group chat. Insertion order is chronological order."""

    def __init__(
        self,
        store: EntityStore,
        messages: Optional[ChatMessageRepository] = None,
        *,
        clock: Callable[[], int] = now_millis,
    ):
        self._store = store
        self._messages = messages or ChatMessageRepository()
        self._clock = clock

    def post_message(self, sender_id: str, sender_name: str, sender_role: Union[Role, str], text: str) -> ChatMessage:
        text = require_non_empty(text, "Message")
        sender_id = require_non_empty(sender_id, "Sender id")
        try:
            role = Role(sender_role)
        except ValueError:
            raise ValidationError(f"Invalid sender role {sender_role!r}")

        with self._store.transaction(Collection.CHAT_MESSAGES) as tx:
            messages = self._messages.load(tx)
            timestamp = self._clock()
            if messages and timestamp <= messages[-1].timestamp:
                # Same millisecond (or clock step back): keep timestamps strictly increasing.
                timestamp = messages[-1].timestamp + 1

            message = ChatMessage(
                message_id=new_id(MESSAGE_ID_PREFIX),
                sender_id=sender_id,
                sender_name=plain_text(sender_name),
                sender_role=role,
                text=text,
                timestamp=timestamp,
            )
            messages.append(message)
            self._messages.save(tx, messages)

        logger.debug("Message %s posted by %s", message.message_id, sender_id)
        return message

    def list_messages(self, since: Optional[int] = None) -> List[ChatMessage]:
        """All messages in insertion order, or only those newer than ``since``."""
        messages = self._messages.load(self._store)
        if since is None:
            return messages
        return [m for m in messages if m.timestamp > since]
