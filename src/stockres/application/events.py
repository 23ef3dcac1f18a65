"""In-process event dispatch.

Handlers are plain callables subscribed per event type and invoked
synchronously with ``(event, uow)``, inside the transaction that published
the event.  An exception raised by a handler propagates to the publisher
and rolls the whole unit of work back.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Callable

from stockres.domain.events import DomainEvent

if TYPE_CHECKING:
    from stockres.application.unit_of_work import UnitOfWork

EventHandler = Callable[[DomainEvent, "UnitOfWork"], None]


class EventDispatcher:

    def __init__(self) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)

    def dispatch(self, event: DomainEvent, uow: UnitOfWork) -> None:
        for handler in list(self._handlers[type(event)]):
            handler(event, uow)
