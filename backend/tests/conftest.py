import json
import random

import pytest
from unittest.mock import MagicMock

from backend.app import create_app
from backend.modules.garden.flower_classifier import FlowerClassifier


def completion(content):
    """Chat completion response carrying `content` as the assistant message"""
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    return response


@pytest.fixture
def app(tmp_path):
    """App on a throwaway SQLite file with AI, geolocation and rate limits off"""
    app = create_app({
        "TESTING": True,
        "DATABASE_URL": "",
        "DATABASE_PATH": str(tmp_path / "garden.db"),
        "AI_API_KEY": "",
        "GEO_ENABLED": False,
        "RATELIMIT_ENABLED": False,
        "LOG_DIR": "",
    })
    yield app


@pytest.fixture
def client(app):
    """Create a test client for the Flask app."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def mock_openai():
    """Mock OpenAI client answering with a rose"""
    mock = MagicMock()
    mock.chat.completions.create.return_value = completion(
        json.dumps({"flowerType": "rose", "message": "Gratitude blooms like a rose"})
    )
    return mock


@pytest.fixture
def ai_app(app, mock_openai):
    """App whose classifier talks to the mocked OpenAI client"""
    app.garden_service.classifier = FlowerClassifier(client=mock_openai, rng=random.Random(7))
    return app


@pytest.fixture
def ai_client(ai_app):
    with ai_app.test_client() as client:
        yield client
