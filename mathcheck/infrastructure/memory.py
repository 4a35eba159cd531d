"""Bounded conversational memory for a single agent run."""

from mathcheck.models.message import Message


class SlidingWindowMemory:
    """Keep the most recent messages of a conversation.

    The window never opens on a tool message, since a tool result without
    the assistant turn that requested it is rejected by chat APIs.
    """

    def __init__(self, window_size: int = 10) -> None:
        """Initialize memory.

        Args:
            window_size: Maximum number of messages recalled
        """
        if window_size < 1:
            raise ValueError(f"window_size must be >= 1, got {window_size}")
        self.window_size = window_size
        self._messages: list[Message] = []

    def __len__(self) -> int:
        return len(self._messages)

    def remember(self, message: Message) -> None:
        self._messages.append(message)

    def recall(self) -> list[Message]:
        """Return the windowed tail of the conversation.

        Returns:
            Up to window_size messages, oldest first
        """
        recent = self._messages[-self.window_size :]
        while recent and recent[0].role == "tool":
            recent = recent[1:]
        return list(recent)

    def clear(self) -> None:
        self._messages.clear()
