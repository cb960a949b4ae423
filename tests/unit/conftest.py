import pytest


# Pure helper tests: no database, no app wiring.

@pytest.fixture(autouse=True)
def init_db():
    yield


@pytest.fixture(autouse=True)
def override_get_db():
    yield
