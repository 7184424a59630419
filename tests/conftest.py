import pytest

from lotto_research import create_app
from lotto_research.config import TestingConfig
from lotto_research.services.analyzer import analyze_for_weights
from lotto_research.services.history import SEED_DATA


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def mega_draws():
    return [numbers for game, _, numbers in SEED_DATA if game == "mega645"]


@pytest.fixture
def mega_stats(mega_draws):
    return analyze_for_weights(mega_draws, 1, 45)
