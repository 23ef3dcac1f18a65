"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy.orm import sessionmaker

from stockres.application.events import EventDispatcher
from stockres.application.listeners import register_listeners
from stockres.infrastructure.config import Settings, get_settings
from stockres.infrastructure.database import create_schema, make_engine, make_session_factory
from stockres.infrastructure.persistence.sqlalchemy_unit_of_work import SqlAlchemyUnitOfWork


def settings() -> Settings:
    return get_settings()


@lru_cache
def session_factory(database_url: str, echo: bool = False) -> sessionmaker:
    engine = make_engine(database_url, echo=echo)
    create_schema(engine)
    return make_session_factory(engine)


def event_dispatcher() -> EventDispatcher:
    return register_listeners(EventDispatcher())


def unit_of_work() -> SqlAlchemyUnitOfWork:
    current = settings()
    return SqlAlchemyUnitOfWork(
        session_factory(current.database_url, current.debug),
        dispatcher=event_dispatcher(),
    )
