import unittest

from northwind_admin.db.connection import MEMORY, SQLiteConnection
from northwind_admin.db.repos.category_repo import CategoryRepo
from northwind_admin.db.repos.customer_repo import CustomerRepo
from northwind_admin.db.repos.order_repo import OrderRepo
from northwind_admin.db.repos.product_repo import ProductRepo
from northwind_admin.db.repos.supplier_repo import SupplierRepo
from northwind_admin.db.schema import create_schema, is_seeded, seed_sample_data
from northwind_admin.errors import NotFoundError, ValidationError
from northwind_admin.models.query import Pagination, SortKey
from northwind_admin.services.query_builder import build


def ids(window):
    return [record.id for record in window.data]


class SeededDatabaseTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.db = SQLiteConnection({"sqlite": {"db_path": MEMORY}})
        create_schema(self.db)
        seed_sample_data(self.db)

    def tearDown(self):
        self.db.close()


class TestSchema(unittest.TestCase):
    def test_seed_only_once(self):
        db = SQLiteConnection({"sqlite": {"db_path": MEMORY}})
        create_schema(db)
        self.assertFalse(is_seeded(db))
        self.assertTrue(seed_sample_data(db))
        self.assertFalse(seed_sample_data(db))
        db.close()


class TestListing(SeededDatabaseTestCase):
    async def test_default_order_is_primary_key(self):
        window = await CustomerRepo(self.db).list(build(Pagination(1, 20)))
        self.assertEqual(ids(window), ["ALFKI", "ANATR", "ANTON", "AROUT", "BERGS", "BLAUS"])
        self.assertEqual(window.total, 6)
        self.assertEqual(window.total_pages, 1)

    async def test_orders_newest_first(self):
        window = await OrderRepo(self.db).list(build(Pagination(1, 20)))
        self.assertEqual(ids(window), [10250, 10249, 10248])

    async def test_pages(self):
        repo = CustomerRepo(self.db)
        window = await repo.list(build(Pagination(2, 4)))
        self.assertEqual(ids(window), ["BERGS", "BLAUS"])
        self.assertEqual(window.total_pages, 2)
        self.assertEqual(await repo.count(build(Pagination(1, 4))), 6)

    async def test_page_past_end_is_clamped(self):
        window = await CustomerRepo(self.db).list(build(Pagination(9, 4)))
        self.assertEqual(window.page, 2)
        self.assertEqual(ids(window), ["BERGS", "BLAUS"])

    async def test_empty_result_is_page_one(self):
        window = await CustomerRepo(self.db).list(build(Pagination(3, 4), "no such company", ["company_name"]))
        self.assertEqual(window.page, 1)
        self.assertEqual(window.total, 0)
        self.assertEqual(window.total_pages, 0)

    async def test_search_is_case_insensitive_over_fields(self):
        repo = CustomerRepo(self.db)
        window = await repo.list(build(Pagination(), "mexico", CustomerRepo.search_fields))
        self.assertEqual(ids(window), ["ANATR", "ANTON"])
        window = await repo.list(build(Pagination(), "HORN", CustomerRepo.search_fields))
        self.assertEqual(ids(window), ["AROUT"])

    async def test_search_wildcards_match_literally(self):
        repo = ProductRepo(self.db)
        tea = await repo.create({"product_name": "Discount 50% Tea"})
        window = await repo.list(build(Pagination(), "50%", ProductRepo.search_fields))
        self.assertEqual(ids(window), [tea.id])
        window = await repo.list(build(Pagination(), "_", ProductRepo.search_fields))
        self.assertEqual(window.total, 0)

    async def test_equality_in_and_like_filters(self):
        repo = ProductRepo(self.db)
        window = await repo.list(build(Pagination(), filters={"category_id": 1}))
        self.assertEqual(ids(window), [1, 2])
        window = await repo.list(build(Pagination(), filters={"supplier_id": [2, 3]}))
        self.assertEqual(ids(window), [4, 5, 6])
        window = await repo.list(build(Pagination(), filters={"product_name": "Chef%"}))
        self.assertEqual(ids(window), [4, 5])
        window = await repo.list(build(Pagination(), filters={"discontinued": True}))
        self.assertEqual(ids(window), [5])

    async def test_blank_filters_are_ignored(self):
        window = await ProductRepo(self.db).list(
            build(Pagination(), filters={"category_id": None, "product_name": ""})
        )
        self.assertEqual(window.total, 6)

    async def test_sort(self):
        window = await ProductRepo(self.db).list(
            build(Pagination(1, 3), sort=[SortKey("unit_price", descending=True)])
        )
        self.assertEqual(ids(window), [6, 4, 5])

    async def test_unknown_fields_are_rejected(self):
        repo = ProductRepo(self.db)
        with self.assertRaises(ValidationError):
            await repo.list(build(Pagination(), filters={"password": "x"}))
        with self.assertRaises(ValidationError):
            await repo.list(build(Pagination(), sort=[SortKey("nope")]))
        with self.assertRaises(ValidationError):
            await repo.list(build(Pagination(), "x", ["nope"]))

    async def test_product_stock_filters(self):
        repo = ProductRepo(self.db)
        window = await repo.list(build(Pagination(), filters={"low_stock": True}))
        self.assertEqual(ids(window), [2, 3])
        window = await repo.list(build(Pagination(), filters={"in_stock": False}))
        self.assertEqual(ids(window), [5])
        window = await repo.list(build(Pagination(), filters={"in_stock": "yes"}))
        self.assertEqual(window.total, 5)

    async def test_order_filters(self):
        repo = OrderRepo(self.db)
        window = await repo.list(build(Pagination(), filters={"date_from": "1996-07-05"}))
        self.assertEqual(ids(window), [10250, 10249])
        window = await repo.list(build(Pagination(), filters={"date_to": "1996-07-05"}))
        self.assertEqual(ids(window), [10249, 10248])
        window = await repo.list(build(Pagination(), filters={"shipped": False}))
        self.assertEqual(ids(window), [10250])
        window = await repo.list(build(Pagination(), filters={"shipped": True, "customer_id": "ALFKI"}))
        self.assertEqual(ids(window), [10248])
        with self.assertRaises(ValidationError):
            await repo.list(build(Pagination(), filters={"date_from": "not a date"}))


class TestWrites(SeededDatabaseTestCase):
    async def test_create_assigns_key(self):
        category = await CategoryRepo(self.db).create(
            {"category_id": 99, "category_name": "Seafood", "description": "Seaweed and fish"}
        )
        self.assertEqual(category.category_id, 5)
        self.assertEqual(category.category_name, "Seafood")

    async def test_create_converts_form_text(self):
        product = await ProductRepo(self.db).create(
            {
                "product_name": " Ikura ",
                "supplier_id": "1",
                "category_id": "4",
                "unit_price": "31.00",
                "units_in_stock": "31",
                "discontinued": "",
            }
        )
        self.assertEqual(product.product_name, "Ikura")
        self.assertEqual(product.unit_price, 31.0)
        self.assertEqual(product.units_in_stock, 31)
        self.assertFalse(product.discontinued)

    async def test_required_fields(self):
        with self.assertRaises(ValidationError) as ctx:
            await ProductRepo(self.db).create({"unit_price": "3"})
        self.assertEqual(ctx.exception.field, "product_name")

    async def test_type_and_range_checks(self):
        repo = ProductRepo(self.db)
        with self.assertRaises(ValidationError) as ctx:
            await repo.create({"product_name": "X", "unit_price": "cheap"})
        self.assertEqual(ctx.exception.field, "unit_price")
        with self.assertRaises(ValidationError):
            await repo.create({"product_name": "X", "units_in_stock": "-1"})
        with self.assertRaises(ValidationError):
            await repo.create({"product_name": "X" * 41})
        with self.assertRaises(ValidationError):
            await repo.create({"product_name": "X", "colour": "red"})

    async def test_customer_keys(self):
        repo = CustomerRepo(self.db)
        customer = await repo.create({"customer_id": "wolza", "company_name": "Wolski Zajazd"})
        self.assertEqual(customer.customer_id, "WOLZA")
        with self.assertRaises(ValidationError):
            await repo.create({"customer_id": "ALFKI", "company_name": "Duplicate"})
        with self.assertRaises(ValidationError):
            await repo.create({"customer_id": "AB-1", "company_name": "Bad key"})
        with self.assertRaises(ValidationError):
            await repo.create({"company_name": "No key"})

    async def test_supplier_home_page(self):
        repo = SupplierRepo(self.db)
        with self.assertRaises(ValidationError) as ctx:
            await repo.create({"company_name": "Tokyo Traders", "home_page": "ftp://tokyo"})
        self.assertEqual(ctx.exception.field, "home_page")
        supplier = await repo.create({"company_name": "Tokyo Traders", "home_page": "https://tokyo.example"})
        self.assertEqual(supplier.home_page, "https://tokyo.example")

    async def test_order_dates(self):
        repo = OrderRepo(self.db)
        with self.assertRaises(ValidationError) as ctx:
            await repo.create(
                {"customer_id": "ALFKI", "order_date": "1997-01-02", "required_date": "1996-12-01"}
            )
        self.assertEqual(ctx.exception.field, "required_date")
        order = await repo.create({"customer_id": "ALFKI", "order_date": "1997-01-02", "freight": "4.5"})
        self.assertEqual(order.order_date.year, 1997)
        self.assertIsNone(order.shipped_date)

    async def test_partial_update_checks_stored_order_date(self):
        repo = OrderRepo(self.db)
        with self.assertRaises(ValidationError) as ctx:
            await repo.update(10248, {"shipped_date": "1996-07-01"})
        self.assertEqual(ctx.exception.field, "shipped_date")
        with self.assertRaises(ValidationError) as ctx:
            await repo.update(10248, {"order_date": "1996-09-01"})
        self.assertEqual(ctx.exception.field, "required_date")

        order = await repo.update(10248, {"shipped_date": "1996-07-10"})
        self.assertEqual(order.shipped_date.day, 10)

    async def test_update(self):
        repo = CategoryRepo(self.db)
        updated = await repo.update(2, {"description": "Sauces"})
        self.assertEqual(updated.description, "Sauces")
        self.assertEqual(updated.category_name, "Condiments")

    async def test_update_with_nothing_returns_current(self):
        current = await CategoryRepo(self.db).update(3, {})
        self.assertEqual(current.category_name, "Confections")

    async def test_update_cannot_clear_required_field(self):
        with self.assertRaises(ValidationError):
            await CategoryRepo(self.db).update(3, {"category_name": " "})

    async def test_update_cannot_change_key(self):
        with self.assertRaises(ValidationError):
            await CustomerRepo(self.db).update("ALFKI", {"customer_id": "NEWID", "company_name": "x"})
        same = await CustomerRepo(self.db).update("ALFKI", {"customer_id": "ALFKI", "city": "Hamburg"})
        self.assertEqual(same.city, "Hamburg")

    async def test_missing_records(self):
        repo = CategoryRepo(self.db)
        self.assertIsNone(await repo.by_id(404))
        with self.assertRaises(NotFoundError):
            await repo.update(404, {"description": "x"})
        with self.assertRaises(NotFoundError):
            await repo.update(404, {})
        with self.assertRaises(NotFoundError) as ctx:
            await repo.delete(404)
        self.assertEqual(ctx.exception.record_id, 404)

    async def test_delete_referenced_record_is_rejected(self):
        with self.assertRaises(ValidationError):
            await CustomerRepo(self.db).delete("ALFKI")
        self.assertIsNotNone(await CustomerRepo(self.db).by_id("ALFKI"))

    async def test_delete_order_removes_lines(self):
        repo = OrderRepo(self.db)
        self.assertEqual(len(await repo.lines(10250)), 2)
        await repo.delete(10250)
        self.assertIsNone(await repo.by_id(10250))
        self.assertEqual(await repo.lines(10250), [])

    async def test_order_total(self):
        total = await OrderRepo(self.db).order_total(10250)
        self.assertAlmostEqual(total, 77.0 + 42.4 * 35 * 0.85)


if __name__ == "__main__":
    unittest.main()
