from enum import Enum
from typing import Optional


class MessageKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


MESSAGE_COLORS = {
    MessageKind.SUCCESS: "#28a745",
    MessageKind.ERROR: "#dc3545",
}


class MessageSlot:
    """Single status line holding the latest success or error message."""

    def __init__(self) -> None:
        self.text: str = ""
        self.kind: Optional[MessageKind] = None
        self.visible: bool = False

    def show(self, message: str, kind: MessageKind = MessageKind.SUCCESS) -> None:
        # Replaces whatever was shown before; nothing dismisses it but clear()
        self.text = message
        self.kind = MessageKind(kind)
        self.visible = True

    def success(self, message: str) -> None:
        self.show(message, MessageKind.SUCCESS)

    def error(self, message: str) -> None:
        self.show(message, MessageKind.ERROR)

    def clear(self) -> None:
        self.visible = False

    @property
    def color(self) -> Optional[str]:
        return MESSAGE_COLORS.get(self.kind) if self.kind else None

    @property
    def is_error(self) -> bool:
        return self.visible and self.kind is MessageKind.ERROR
