import pytest

from app.core.errors import StorageError, ValidationError
from app.database import Database
from app.schemas import OrderLine, RestaurantCreate
from app.services.orders import OrderStore
from app.services.restaurants import RestaurantStore


PIZZA_PLACE = {
    "name": "Pizza Place",
    "menu": [
        {"item": "Margherita", "price": 10},
        {"item": "Pepperoni", "price": 12},
    ],
}


class TestRestaurantStore:
    """Tests for RestaurantStore against a SQLite datastore."""

    async def test_create_returns_stored_record_with_id(self, database):
        store = RestaurantStore(database)

        restaurant = await store.create(PIZZA_PLACE)

        assert restaurant.id is not None
        assert restaurant.name == "Pizza Place"
        assert restaurant.menu == PIZZA_PLACE["menu"]

    async def test_create_accepts_typed_candidate(self, database):
        store = RestaurantStore(database)

        restaurant = await store.create(RestaurantCreate(name="Noodle Bar"))

        assert restaurant.name == "Noodle Bar"
        assert restaurant.menu == []

    async def test_list_all_in_insertion_order(self, database):
        store = RestaurantStore(database)
        await store.create({"name": "First"})
        await store.create({"name": "Second"})
        await store.create({"name": "Third"})

        restaurants = await store.list_all()

        assert [r.name for r in restaurants] == ["First", "Second", "Third"]

    async def test_list_all_empty(self, database):
        assert await RestaurantStore(database).list_all() == []

    async def test_get_existing_and_missing(self, database):
        store = RestaurantStore(database)
        created = await store.create(PIZZA_PLACE)

        found = await store.get(created.id)

        assert found is not None
        assert found.menu[1] == {"item": "Pepperoni", "price": 12}
        assert await store.get(created.id + 1000) is None

    @pytest.mark.parametrize(
        "candidate",
        [
            {},
            {"name": ""},
            {"name": None},
            {"name": "No Price", "menu": [{"item": "Soup"}]},
            {"name": "Bad Price", "menu": [{"item": "Soup", "price": "cheap"}]},
            {"name": "No Item", "menu": [{"price": 4}]},
            {"name": "Empty Item", "menu": [{"item": "", "price": 4}]},
            {"name": "Negative", "menu": [{"item": "Soup", "price": -1}]},
            ["not", "an", "object"],
        ],
    )
    async def test_create_rejects_malformed_candidates(self, database, candidate):
        store = RestaurantStore(database)

        with pytest.raises(ValidationError) as exc_info:
            await store.create(candidate)

        assert exc_info.value.message.startswith("Restaurant validation failed")
        assert await store.list_all() == []

    async def test_missing_name_is_named_in_message(self, database):
        with pytest.raises(ValidationError) as exc_info:
            await RestaurantStore(database).create({"menu": []})

        assert "name" in exc_info.value.message

    async def test_unconnected_datastore_raises_storage_error(self, settings):
        store = RestaurantStore(Database.from_settings(settings))

        with pytest.raises(StorageError):
            await store.list_all()


class TestOrderStore:
    """Tests for OrderStore against a SQLite datastore."""

    async def test_create_stores_given_total(self, database):
        restaurant = await RestaurantStore(database).create(PIZZA_PLACE)
        store = OrderStore(database)
        items = [OrderLine(item="Margherita", quantity=2)]

        order = await store.create(restaurant.id, items, 20)

        assert order.id is not None
        assert order.restaurant_id == restaurant.id
        assert order.items == [{"item": "Margherita", "quantity": 2}]
        assert order.total == 20

    async def test_create_accepts_mapping_lines(self, database):
        restaurant = await RestaurantStore(database).create(PIZZA_PLACE)

        order = await OrderStore(database).create(
            restaurant.id, [{"item": "Pepperoni", "quantity": 3}], 36
        )

        assert order.items == [{"item": "Pepperoni", "quantity": 3}]

    @pytest.mark.parametrize(
        "restaurant_id, items, total",
        [
            (None, [], 0),
            (1, None, 0),
            (1, [], None),
            (1, [{"item": "Margherita"}], 10),
            (1, [{"quantity": 1}], 10),
        ],
    )
    async def test_create_rejects_missing_fields(self, database, restaurant_id, items, total):
        await RestaurantStore(database).create(PIZZA_PLACE)
        store = OrderStore(database)

        with pytest.raises(ValidationError) as exc_info:
            await store.create(restaurant_id, items, total)

        assert exc_info.value.message.startswith("Order validation failed")
        assert await store.list_all() == []

    async def test_list_all_joins_current_restaurant(self, database):
        restaurants = RestaurantStore(database)
        pizza = await restaurants.create(PIZZA_PLACE)
        noodles = await restaurants.create({"name": "Noodle Bar", "menu": [{"item": "Ramen", "price": 14}]})
        store = OrderStore(database)
        await store.create(pizza.id, [{"item": "Margherita", "quantity": 1}], 10)
        await store.create(noodles.id, [{"item": "Ramen", "quantity": 2}], 28)

        orders = await store.list_all()

        assert [o.restaurant.name for o in orders] == ["Pizza Place", "Noodle Bar"]
        assert orders[1].restaurant.menu == [{"item": "Ramen", "price": 14}]

    async def test_same_order_twice_creates_two_records(self, database):
        restaurant = await RestaurantStore(database).create(PIZZA_PLACE)
        store = OrderStore(database)
        items = [{"item": "Margherita", "quantity": 1}]

        first = await store.create(restaurant.id, items, 10)
        second = await store.create(restaurant.id, items, 10)

        assert first.id != second.id
        assert len(await store.list_all()) == 2
