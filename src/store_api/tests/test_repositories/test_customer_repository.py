import pytest

from store_api.exceptions.base import ConflictError
from store_api.schemas.common import ListOptions
from store_api.schemas.customer import CustomerPage


@pytest.mark.asyncio
class TestCustomerRepository:

    async def test_list_relabels_rows_as_customers(self, customer_repository, create_customer):
        await create_customer(name="Ana")
        await create_customer(name="Bruno")

        page = await customer_repository.list(ListOptions(order_by="name", order_direction="ASC"))

        assert isinstance(page, CustomerPage)
        assert [c.name for c in page.customers] == ["Ana", "Bruno"]
        assert page.pagination.total_items == 2

    async def test_default_search_covers_name_and_email(self, customer_repository, create_customer):
        await create_customer(name="Carla", email="carla@example.com")
        await create_customer(name="Diego", email="diego@carla.dev")
        await create_customer(name="Eva", email="eva@example.com")

        page = await customer_repository.list(ListOptions(search="carla"))

        assert {c.name for c in page.customers} == {"Carla", "Diego"}

    async def test_find_by_email_normalizes_input(self, customer_repository, create_customer):
        customer = await create_customer(email="mixed@example.com")

        found = await customer_repository.find_by_email("  MIXED@Example.com ")

        assert found is not None
        assert found.id == customer.id
        assert await customer_repository.find_by_email("nobody@example.com") is None

    async def test_email_exists_with_exclusion(self, customer_repository, create_customer):
        customer = await create_customer(email="owner@example.com")

        assert await customer_repository.email_exists("owner@example.com") is True
        assert await customer_repository.email_exists("owner@example.com", exclude_id=customer.id) is False
        assert await customer_repository.email_exists("other@example.com") is False

    async def test_email_reusable_after_delete(self, customer_repository, db_session):
        """
        Behavior:
                - A second create with the same email conflicts.
                - After the first customer is deleted the email can be used again.
        """
        first = await customer_repository.create({"name": "First", "email": "reuse@example.com"})
        first_id = first.id  # the rollback below expires loaded instances
        await db_session.commit()

        with pytest.raises(ConflictError):
            await customer_repository.create({"name": "Second", "email": "reuse@example.com"})

        assert await customer_repository.delete(first_id) is True
        second = await customer_repository.create({"name": "Second", "email": "reuse@example.com"})

        assert second.id != first_id
        assert second.email == "reuse@example.com"

    async def test_update_and_exists(self, customer_repository, create_customer):
        customer = await create_customer(name="Before")

        updated = await customer_repository.update(customer.id, {"name": "After"})

        assert updated.name == "After"
        assert await customer_repository.exists(customer.id) is True
        assert await customer_repository.exists(customer.id + 1) is False

    async def test_create_stores_normalized_email(self, customer_repository):
        customer = await customer_repository.create({"name": "Ana", "email": " ANA@Example.com "})

        assert customer.email == "ana@example.com"
