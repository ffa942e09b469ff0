"""Change notification for the tester's document slots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

import lxml.etree as ET


@dataclass(frozen=True)
class XmlChangedEventArgs:
    """Payload of a document change notification."""
    xml: Optional[ET._Element]


XmlChangedHandler = Callable[[Any, XmlChangedEventArgs], None]


class XmlChangedEvent:
    """A plain list of callbacks, invoked in subscription order."""

    def __init__(self):
        self._handlers: list[XmlChangedHandler] = []

    def subscribe(self, handler: XmlChangedHandler) -> XmlChangedHandler:
        self._handlers.append(handler)
        return handler

    def unsubscribe(self, handler: XmlChangedHandler):
        self._handlers.remove(handler)

    def has_subscribers(self) -> bool:
        return len(self._handlers) > 0

    def __bool__(self) -> bool:
        return self.has_subscribers()

    def __len__(self) -> int:
        return len(self._handlers)

    def fire(self, sender: Any, xml: Optional[ET._Element]):
        args = XmlChangedEventArgs(xml)
        for handler in list(self._handlers):
            handler(sender, args)
