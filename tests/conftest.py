"""Shared fixtures: an app on a throwaway SQLite file, tokens and seed data."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

import pytest

from lotto_pro import create_app
from lotto_pro.auth import ROLE_STORE_ACCOUNT, ROLE_STORE_OWNER, AuthUser, generate_token
from lotto_pro.models import GameStatus, LotteryMaster, Store, StoreOwner

JWT_SECRET = "test-secret-with-enough-bytes-for-hs256-signing"


@dataclass(frozen=True)
class Seed:
    owner_id: int
    store_id: int
    other_owner_id: int
    other_store_id: int
    lottery_id: int


@pytest.fixture
def app(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "DATABASE_URL": f"sqlite:///{tmp_path / 'lotto_pro_test.db'}",
            "JWT_SECRET": JWT_SECRET,
            "LOG_LEVEL": "WARNING",
        }
    )
    yield app
    app.extensions["engine"].dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session_factory(app):
    return app.extensions["session_factory"]


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seed(session_factory) -> Seed:
    with session_factory() as session:
        owner = StoreOwner(name="Pat Owner", email="owner@example.com", phone="555-0100")
        other_owner = StoreOwner(name="Sam Other", email="other@example.com", phone="555-0101")
        session.add_all([owner, other_owner])
        session.flush()

        store = Store(owner_id=owner.owner_id, store_name="Corner Mart", state="NJ")
        other_store = Store(owner_id=other_owner.owner_id, store_name="Gas & Go", state="NJ")
        session.add_all([store, other_store])

        game = LotteryMaster(
            lottery_name="Lucky 7s",
            lottery_number="045",
            price=Decimal("5.00"),
            start_number=1,
            end_number=100,
            status=GameStatus.ACTIVE,
        )
        session.add_all(
            [
                game,
                LotteryMaster(
                    lottery_name="Cash Blast",
                    lottery_number="046",
                    price=Decimal("2.00"),
                    start_number=1,
                    end_number=50,
                    status=GameStatus.INACTIVE,
                ),
                # Printed high-to-low: bounds are given reversed.
                LotteryMaster(
                    lottery_name="Gold Rush",
                    lottery_number="050",
                    price=Decimal("10.00"),
                    start_number=30,
                    end_number=1,
                    status=GameStatus.ACTIVE,
                ),
            ]
        )
        session.commit()

        return Seed(
            owner_id=owner.owner_id,
            store_id=store.store_id,
            other_owner_id=other_owner.owner_id,
            other_store_id=other_store.store_id,
            lottery_id=game.lottery_id,
        )


def make_headers(user_id: int, role: str = ROLE_STORE_OWNER) -> dict[str, str]:
    user = AuthUser(id=user_id, email=f"user{user_id}@example.com", full_name="Test User", role=role)
    return {"Authorization": f"Bearer {generate_token(user, secret=JWT_SECRET)}"}


@pytest.fixture
def owner_headers(seed) -> dict[str, str]:
    return make_headers(seed.owner_id, ROLE_STORE_OWNER)


@pytest.fixture
def clerk_headers(seed) -> dict[str, str]:
    # A store account authenticates as the store itself.
    return make_headers(seed.store_id, ROLE_STORE_ACCOUNT)


@pytest.fixture
def scan(client, seed, owner_headers):
    """POST /scan for the seeded store; returns the response."""

    def _scan(headers=None, **body):
        body.setdefault("store_id", seed.store_id)
        return client.post("/scan", json=body, headers=headers or owner_headers)

    return _scan
