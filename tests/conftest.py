import os

os.environ["LOG_TO_FILE"] = "false"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace
from typing import AsyncGenerator, Iterable, Optional
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from gelato_ops.core.database import get_async_session
from gelato_ops.core.security import create_access_token
from gelato_ops.main import app
from gelato_ops.models import (
    Category,
    DeliveryItem,
    DeliveryPlan,
    Item,
    Order,
    OrderItem,
    Production,
    ProductionIngredient,
    Stocktake,
    StocktakeItem,
    Store,
    StoreInventory,
)
from gelato_ops.models.base import Base
from gelato_ops.models.shared.enums import DeliveryPlanStatus, OrderStatus, StoreKind

TEST_DATABASE_URL = "sqlite+aiosqlite://"


def make_token(permissions: Iterable[str], user_id: str = "user-1", email: str = "staff@gelato.test") -> str:
    return create_access_token(
        {"sub": user_id, "email": email, "roles": ["staff"], "permissions": list(permissions)}
    )


def bearer(*permissions: str) -> dict:
    return {"Authorization": f"Bearer {make_token(permissions)}"}


@pytest.fixture
async def engine():
    """Fresh in-memory database per test"""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict:
    return bearer("system:admin")


@pytest.fixture
async def catalog(db_session):
    """Hub plus two stores in delivery order, one category and three items"""
    hub = Store(name="Factory", slug="factory", kind=StoreKind.FACTORY.value, delivery_priority=0)
    north = Store(name="North", slug="north", kind=StoreKind.RETAIL.value, delivery_priority=1)
    south = Store(name="South", slug="south", kind=StoreKind.RETAIL.value, delivery_priority=2)
    category = Category(name="Gelato Base", sort_order=1)
    db_session.add_all([hub, north, south, category])
    await db_session.flush()

    milk = Item(name="Milk", category_id=category.id, unit="L", target_number=Decimal("10"), sort_order=1)
    cream = Item(name="Cream", category_id=category.id, unit="L", target_number=Decimal("20"), sort_order=2)
    cones = Item(name="Cones", category_id=category.id, sort_order=3)
    db_session.add_all([milk, cream, cones])
    await db_session.commit()

    return SimpleNamespace(
        hub=hub.id,
        north=north.id,
        south=south.id,
        category=category.id,
        milk=milk.id,
        cream=cream.id,
        cones=cones.id,
    )


@pytest.fixture
def make_stocktake(db_session):
    async def _make(store_id: int, when: datetime, lines: dict, is_master: bool = False,
                    submitted: Optional[datetime] = None) -> int:
        stocktake = Stocktake(
            store_id=store_id,
            date=when,
            is_master=is_master,
            submitted_at=submitted or when,
            items=[StocktakeItem(item_id=item_id, quantity=qty) for item_id, qty in lines.items()],
        )
        db_session.add(stocktake)
        await db_session.commit()
        return stocktake.id
    return _make


@pytest.fixture
def make_order(db_session):
    async def _make(lines: dict, expected: Optional[datetime], status: OrderStatus = OrderStatus.PENDING) -> int:
        order = Order(
            status=status.value,
            supplier_name="Dairy Co",
            order_date=datetime.now(),
            expected_date=expected,
            items=[OrderItem(item_id=item_id, quantity=qty, unit="L") for item_id, qty in lines.items()],
        )
        db_session.add(order)
        await db_session.commit()
        return order.id
    return _make


@pytest.fixture
def make_delivery_plan(db_session):
    async def _make(lines: dict, when: datetime, status: DeliveryPlanStatus = DeliveryPlanStatus.CONFIRMED,
                    store_id: Optional[int] = None) -> int:
        plan = DeliveryPlan(
            date=when,
            status=status.value,
            store_id=store_id,
            items=[DeliveryItem(item_id=item_id, quantity=qty) for item_id, qty in lines.items()],
        )
        db_session.add(plan)
        await db_session.commit()
        return plan.id
    return _make


@pytest.fixture
def make_production(db_session):
    async def _make(lines: dict, when: datetime) -> int:
        production = Production(
            recipe_name="Fior di latte",
            batch_size=Decimal("5"),
            batch_unit="kg",
            produced_at=when,
            ingredients=[ProductionIngredient(item_id=item_id, quantity_used=qty) for item_id, qty in lines.items()],
        )
        db_session.add(production)
        await db_session.commit()
        return production.id
    return _make


@pytest.fixture
def set_target(db_session):
    async def _set(store_id: int, item_id: int, quantity) -> None:
        db_session.add(StoreInventory(store_id=store_id, item_id=item_id, target_quantity=quantity, is_active=True))
        await db_session.commit()
    return _set


@pytest.fixture
def headers_for():
    """headers_for("orders:read", ...) -> bearer headers carrying those permissions"""
    return bearer
