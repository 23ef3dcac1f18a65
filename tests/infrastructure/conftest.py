import pytest

from stockres.application.events import EventDispatcher
from stockres.application.listeners import register_listeners
from stockres.infrastructure.database import create_schema, make_engine, make_session_factory
from stockres.infrastructure.persistence.sqlalchemy_unit_of_work import SqlAlchemyUnitOfWork


@pytest.fixture
def session_factory(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'stockres.db'}")
    create_schema(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def uow(session_factory):
    return SqlAlchemyUnitOfWork(session_factory, dispatcher=register_listeners(EventDispatcher()))
