import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from fastapi.testclient import TestClient

from taskboard.core.config import Settings
from taskboard.core.database import Base
from taskboard.main import create_app

# SQLite pour les tests, à la place du Postgres par défaut
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"

app = create_app(Settings(DATABASE_URL=SQLALCHEMY_TEST_DATABASE_URL))


@pytest.fixture
def client():
    """Client de test FastAPI, DB recréée avant/après chaque test"""
    with TestClient(app) as test_client:
        engine = app.state.engine
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)
        yield test_client
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(client):
    """Session DB pour les tests"""
    db = app.state.SessionLocal()
    yield db
    db.close()


@pytest.fixture
def create_task(client):
    """Crée une tâche via l'API et retourne le JSON"""
    def _create(**fields):
        payload = {"title": "Tâche"}
        payload.update(fields)
        response = client.post("/api/tasks", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _create
