"""
Category service: CRUD over the table store.
"""

import pytest

from catalog_admin.database.exceptions import NotFoundError, StoreError
from catalog_admin.services.category_service import CategoryService


class TestCategoryService:

    @pytest.mark.asyncio
    async def test_list_sorted_by_name(self, seeded_store):
        service = CategoryService(seeded_store)
        categories = await service.get_categories()
        assert [c.name for c in categories] == ["Audio", "Books"]
        assert seeded_store.calls[-1][4] == "name"

    @pytest.mark.asyncio
    async def test_create_then_list_includes_new_row(self, seeded_store):
        service = CategoryService(seeded_store)
        created = await service.create_category({"name": "Games", "description": "Board games"})
        assert created.id is not None

        categories = await service.get_categories()
        assert created.id in [c.id for c in categories]
        names = [c.name for c in categories]
        assert names == sorted(names)

    @pytest.mark.asyncio
    async def test_create_sends_only_form_fields(self, store):
        service = CategoryService(store)
        await service.create_category({"name": "Games", "description": "", "id": 5})
        method, table, rows = store.calls[-1]
        assert (method, table) == ("insert", "categories")
        assert rows == [{"name": "Games", "description": ""}]

    @pytest.mark.asyncio
    async def test_get_category(self, seeded_store):
        category = await CategoryService(seeded_store).get_category(101)
        assert category.name == "Books"

    @pytest.mark.asyncio
    async def test_get_missing_category_raises_not_found(self, seeded_store):
        with pytest.raises(NotFoundError):
            await CategoryService(seeded_store).get_category(999)

    @pytest.mark.asyncio
    async def test_update_returns_patched_row(self, seeded_store):
        updated = await CategoryService(seeded_store).update_category(102, {"description": "Music"})
        assert updated.id == 102
        assert updated.name == "Audio"
        assert updated.description == "Music"

    @pytest.mark.asyncio
    async def test_update_missing_row_returns_none(self, seeded_store):
        assert await CategoryService(seeded_store).update_category(999, {"name": "X"}) is None

    @pytest.mark.asyncio
    async def test_delete_removes_row(self, seeded_store):
        service = CategoryService(seeded_store)
        assert await service.delete_category(101) is True
        assert 101 not in [c.id for c in await service.get_categories()]

    @pytest.mark.asyncio
    async def test_delete_missing_row_is_not_reported(self, seeded_store):
        assert await CategoryService(seeded_store).delete_category(999) is True

    @pytest.mark.asyncio
    async def test_store_error_is_logged_and_reraised(self, store, caplog):
        error = StoreError("permission denied for table categories", code="42501", status=401)
        store.fail("select", error)

        with pytest.raises(StoreError) as exc_info:
            await CategoryService(store).get_categories()

        assert exc_info.value is error
        assert "permission denied" in caplog.text
