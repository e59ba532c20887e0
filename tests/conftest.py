import pytest

from tripsettle.api import create_app
from tripsettle.models import ExpenseRecord


@pytest.fixture
def app():
    return create_app(TESTING=True, PRECISION=0, LOCALE="en-US", LOG_LEVEL="WARNING")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_expense():
    counter = iter(range(1, 1000))

    def _make(amount, payer, participants=(), splits=None):
        return ExpenseRecord(
            id=f"e{next(counter)}",
            amount=amount,
            payer=payer,
            participants=tuple(participants),
            splits=splits,
        )
    return _make
