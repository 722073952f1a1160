"""Event service - festival editions and which one is current."""

import logging

from festival.domain import Addon, Event, EventId
from festival.domain.errors import EventNotFoundError, InvalidIdError
from festival.stores.interfaces import FestivalStore

logger = logging.getLogger(__name__)


def parse_event_id(event_id: str) -> EventId:
    try:
        return EventId.from_string(event_id)
    except ValueError as exc:
        raise InvalidIdError() from exc


class EventService:
    """Service for event catalog operations."""

    def __init__(self, store: FestivalStore) -> None:
        self._store = store

    def list_events(self) -> list[Event]:
        """Return all events."""
        return self._store.list_events()

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.get_event(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError()
        return event

    def get_current_event(self) -> Event:
        """Return the current event.

        Raises:
            EventNotFoundError: If no event is flagged current.
        """
        event = self._store.get_current_event()
        if event is None:
            raise EventNotFoundError()
        return event

    def set_current_event(self, event_id: str) -> Event:
        """Make ``event_id`` the only current event.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.set_current_event(parse_event_id(event_id))
        logger.info("Current event switched", extra={"event_id": str(event.id)})
        return event

    def list_addons(self, event_id: EventId) -> list[Addon]:
        """Return the add-ons sold with an event.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        if self._store.get_event(event_id) is None:
            raise EventNotFoundError()
        return self._store.get_addons(event_id)
