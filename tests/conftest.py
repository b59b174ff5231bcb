import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.database import Database
from app.main import create_app


PIZZA_PLACE = {
    "name": "Pizza Place",
    "menu": [
        {"item": "Margherita", "price": 10},
        {"item": "Pepperoni", "price": 12},
    ],
}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}",
        env_mode="development",
        debug=False,
    )


@pytest.fixture
async def database(settings):
    db = Database.from_settings(settings)
    db.connect()
    await db.init_models()
    yield db
    await db.dispose()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def pizza_place(client) -> dict:
    response = client.post("/restaurants", json=PIZZA_PLACE)
    assert response.status_code == 201
    return response.json()
