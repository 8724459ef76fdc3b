import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from reqstore import OwnerGrant, init_store


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield eng
    eng.dispose()


@pytest.fixture
def store(engine):
    return init_store(engine)


@pytest.fixture
def submit(store):
    """Submit as `owner` with a matching grant."""

    def _submit(owner, title="", description="", time="", now=0):
        return store.submit_or_update(
            owner, title, description, time, now, grant=OwnerGrant(owner=owner)
        )

    return _submit


@pytest.fixture
def file_engine(tmp_path):
    eng = create_engine(
        f"sqlite:///{tmp_path / 'requests.db'}",
        connect_args={"check_same_thread": False},
    )
    yield eng
    eng.dispose()
