import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from skillup.auth.auth_utils import create_access_token
from skillup.main import app
from skillup.payments.payment_service import get_payment_client


class FakeOrders:
    def __init__(self):
        self.created = []

    def create(self, data):
        self.created.append(data)
        return {"id": f"order_{len(self.created)}", "amount": data["amount"], "currency": data["currency"]}


class FakeRazorpay:
    def __init__(self):
        self.order = FakeOrders()


@pytest.fixture
def db():
    return AsyncMongoMockClient()["skillup_test"]


@pytest.fixture
def payment_client():
    return FakeRazorpay()


@pytest_asyncio.fixture
async def client(db, payment_client):
    # no lifespan: the app never opens a real Mongo connection
    app.state.db = db
    app.dependency_overrides[get_payment_client] = lambda: payment_client
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def auth_client(client):
    client.cookies.set("token", create_access_token({"email": "student@skillup.io"}))
    return client
