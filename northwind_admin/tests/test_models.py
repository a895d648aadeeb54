import unittest
from datetime import date, datetime
from unittest.mock import Mock

from northwind_admin.entities import PROFILES_BY_NAME, form_value, value_of
from northwind_admin.errors import TransportError
from northwind_admin.models.actor import Actor
from northwind_admin.models.fields import parse_bool, parse_date
from northwind_admin.models.order import Order, OrderStatus
from northwind_admin.models.pagination import PageWindow
from northwind_admin.models.product import Product
from northwind_admin.models.query import Pagination
from northwind_admin.services.fetch_coordinator import QueryState
from northwind_admin.services.identity import EnvIdentityProvider
from northwind_admin.services.query_builder import build
from northwind_admin.ui.controllers.status_bar import StatusBarController
from northwind_admin.utils.formatters import format_date, format_money, format_value


class TestFields(unittest.TestCase):
    def test_parse_date(self):
        self.assertEqual(parse_date("1996-07-04"), datetime(1996, 7, 4))
        self.assertEqual(parse_date(date(1996, 7, 4)), datetime(1996, 7, 4))
        self.assertEqual(parse_date("4 Jul 1996"), datetime(1996, 7, 4))
        self.assertIsNone(parse_date(""))
        self.assertIsNone(parse_date("someday"))

    def test_parse_bool(self):
        for value in ("yes", "True", " 1 ", "on", True, 1):
            self.assertTrue(parse_bool(value), value)
        for value in ("no", "false", "0", "", False, 0):
            self.assertFalse(parse_bool(value), value)


class TestOrder(unittest.TestCase):
    def test_status(self):
        now = datetime(1996, 8, 10)
        shipped = Order(1, required_date=datetime(1996, 8, 1), shipped_date=datetime(1996, 8, 5))
        overdue = Order(2, required_date=datetime(1996, 8, 1))
        pending = Order(3, required_date=datetime(1996, 9, 1))
        open_ended = Order(4)

        self.assertIs(shipped.status(now), OrderStatus.SHIPPED)
        self.assertIs(overdue.status(now), OrderStatus.OVERDUE)
        self.assertIs(pending.status(now), OrderStatus.PENDING)
        self.assertIs(open_ended.status(now), OrderStatus.PENDING)

    def test_from_sqlite(self):
        order = Order.from_sqlite(
            {"order_id": 10248, "customer_id": "ALFKI", "order_date": "1996-07-04", "freight": "32.38"}
        )
        self.assertEqual(order.order_date, datetime(1996, 7, 4))
        self.assertEqual(order.freight, 32.38)
        self.assertEqual(order.display_name, "Order #10248")


class TestProduct(unittest.TestCase):
    def test_low_stock(self):
        self.assertTrue(Product(1, "Chang", units_in_stock=17, reorder_level=25).is_low_stock)
        self.assertFalse(Product(2, "Chai", units_in_stock=39, reorder_level=10).is_low_stock)
        self.assertFalse(
            Product(3, "Gumbo", units_in_stock=0, reorder_level=5, discontinued=True).is_low_stock
        )
        self.assertFalse(Product(4, "Unknown", units_in_stock=0).is_low_stock)

    def test_stock_value(self):
        self.assertEqual(Product(1, "Chai", unit_price=18.0, units_in_stock=39).stock_value, 702.0)
        self.assertEqual(Product(2, "Empty").stock_value, 0.0)


class TestFormatters(unittest.TestCase):
    def test_format_date(self):
        self.assertEqual(format_date("1996-07-04T00:00:00"), "1996-07-04")
        self.assertEqual(format_date(datetime(1996, 7, 4), "%d/%m/%Y"), "04/07/1996")
        self.assertEqual(format_date(None), "")
        self.assertEqual(format_date("soon"), "soon")

    def test_format_money(self):
        self.assertEqual(format_money(1234.5), "$1,234.50")
        self.assertEqual(format_money("$1,000"), "$1,000.00")
        self.assertEqual(format_money(None), "--")
        self.assertEqual(format_money("n/a"), "n/a")

    def test_format_value(self):
        self.assertEqual(format_value(None), "--")
        self.assertEqual(format_value(True), "Yes")
        self.assertEqual(format_value(18.0), "18.00")
        self.assertEqual(format_value(datetime(1996, 7, 4)), "1996-07-04")
        self.assertEqual(format_value(17), "17")


class TestEntities(unittest.TestCase):
    def test_client_assigned_key_only_on_create(self):
        customers = PROFILES_BY_NAME["customers"]
        creating = [name for name, _ in customers.form_fields(creating=True)]
        editing = [name for name, _ in customers.form_fields(creating=False)]
        self.assertEqual(creating[0], "customer_id")
        self.assertNotIn("customer_id", editing)

    def test_generated_key_is_never_a_form_field(self):
        products = PROFILES_BY_NAME["products"]
        self.assertNotIn("product_id", [name for name, _ in products.form_fields(creating=True)])
        self.assertEqual(products.detail_fields()[0], "product_id")
        self.assertEqual(products.column_title("product_id"), "ID")
        self.assertEqual(products.column_title("unit_price"), "Unit price")

    def test_value_of_derived_fields(self):
        order = Order(1, shipped_date=datetime(1996, 7, 16))
        self.assertEqual(value_of(order, "status"), "Shipped")
        self.assertEqual(value_of(order, "order_id"), 1)
        self.assertIsNone(value_of(order, "missing"))

    def test_form_value(self):
        product = Product(1, "Chai", unit_price=18.0, discontinued=True)
        self.assertEqual(form_value(product, "unit_price"), "18.0")
        self.assertEqual(form_value(product, "discontinued"), "yes")
        self.assertEqual(form_value(product, "category_id"), "")
        self.assertEqual(form_value(Order(1, order_date=datetime(1996, 7, 4)), "order_date"), "1996-07-04")
        self.assertEqual(form_value(None, "anything"), "")


class TestIdentity(unittest.TestCase):
    def test_actor_from_environment(self):
        actor = EnvIdentityProvider(
            {"NORTHWIND_ACTOR": " Nancy Davolio ", "NORTHWIND_ACTOR_EMAIL": "nancy@example.com"}
        ).current_actor()
        self.assertEqual(actor.label, "Nancy Davolio")
        self.assertEqual(actor.email, "nancy@example.com")

    def test_falls_back_to_os_user(self):
        actor = EnvIdentityProvider({}).current_actor()
        self.assertTrue(actor.username)
        self.assertIsNone(actor.email)


class TestStatusBar(unittest.TestCase):
    def setUp(self):
        self.bar = Mock()
        self.controller = StatusBarController(self.bar, Actor("ndavolio", "Nancy"))
        self.descriptor = build(Pagination(2, 20))

    def test_loaded_window(self):
        window = PageWindow.from_total([], page=2, limit=20, total=45)
        state = QueryState(self.descriptor, window, self.descriptor, False, None)
        text = self.controller.render_text(
            "Products", state, search="chai", filters={"in_stock": True}, selected=Product(1, "Chai")
        )
        self.assertEqual(
            text,
            "Products: 45 | Page: 2/3 | Search: 'chai' | Filters: in_stock=True"
            " | Selected: Chai | User: Nancy",
        )

    def test_loading_and_error(self):
        state = QueryState(self.descriptor, None, None, True, TransportError("database is locked"))
        text = self.controller.render_text("Orders", state)
        self.assertEqual(text, "Orders: - | Loading... | Error: database is locked | User: Nancy")

    def test_update_writes_to_bar(self):
        state = QueryState(self.descriptor, None, None, False, None)
        StatusBarController(self.bar).update("Customers", state)
        self.bar.update.assert_called_once_with("Customers: -")


if __name__ == "__main__":
    unittest.main()
