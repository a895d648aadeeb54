"""
Northwind schema and a small sample data set.
"""

from __future__ import annotations

from northwind_admin.db.connection import SQLiteConnection
from simple_logger import Slogger

SCHEMA = """
CREATE TABLE IF NOT EXISTS categories (
    category_id INTEGER PRIMARY KEY,
    category_name TEXT NOT NULL,
    description TEXT
);

CREATE TABLE IF NOT EXISTS suppliers (
    supplier_id INTEGER PRIMARY KEY,
    company_name TEXT NOT NULL,
    contact_name TEXT,
    contact_title TEXT,
    address TEXT,
    city TEXT,
    region TEXT,
    postal_code TEXT,
    country TEXT,
    phone TEXT,
    fax TEXT,
    home_page TEXT
);

CREATE TABLE IF NOT EXISTS customers (
    customer_id TEXT PRIMARY KEY,
    company_name TEXT NOT NULL,
    contact_name TEXT,
    contact_title TEXT,
    address TEXT,
    city TEXT,
    region TEXT,
    postal_code TEXT,
    country TEXT,
    phone TEXT,
    fax TEXT
);

CREATE TABLE IF NOT EXISTS products (
    product_id INTEGER PRIMARY KEY,
    product_name TEXT NOT NULL,
    supplier_id INTEGER REFERENCES suppliers(supplier_id),
    category_id INTEGER REFERENCES categories(category_id),
    quantity_per_unit TEXT,
    unit_price REAL DEFAULT 0,
    units_in_stock INTEGER DEFAULT 0,
    units_on_order INTEGER DEFAULT 0,
    reorder_level INTEGER DEFAULT 0,
    discontinued INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS orders (
    order_id INTEGER PRIMARY KEY,
    customer_id TEXT REFERENCES customers(customer_id),
    employee_id INTEGER,
    order_date TEXT,
    required_date TEXT,
    shipped_date TEXT,
    ship_via INTEGER,
    freight REAL DEFAULT 0,
    ship_name TEXT,
    ship_address TEXT,
    ship_city TEXT,
    ship_region TEXT,
    ship_postal_code TEXT,
    ship_country TEXT
);

CREATE TABLE IF NOT EXISTS order_details (
    order_id INTEGER NOT NULL REFERENCES orders(order_id) ON DELETE CASCADE,
    product_id INTEGER NOT NULL REFERENCES products(product_id),
    unit_price REAL NOT NULL,
    quantity INTEGER NOT NULL,
    discount REAL NOT NULL DEFAULT 0,
    PRIMARY KEY (order_id, product_id)
);

CREATE INDEX IF NOT EXISTS idx_products_category ON products(category_id);
CREATE INDEX IF NOT EXISTS idx_products_supplier ON products(supplier_id);
CREATE INDEX IF NOT EXISTS idx_orders_customer ON orders(customer_id);
CREATE INDEX IF NOT EXISTS idx_orders_date ON orders(order_date);
"""

SAMPLE_DATA = """
INSERT INTO categories (category_id, category_name, description) VALUES
    (1, 'Beverages', 'Soft drinks, coffees, teas, beers, and ales'),
    (2, 'Condiments', 'Sweet and savory sauces, relishes, spreads, and seasonings'),
    (3, 'Confections', 'Desserts, candies, and sweet breads'),
    (4, 'Dairy Products', 'Cheeses');

INSERT INTO suppliers (supplier_id, company_name, contact_name, contact_title, city, country, phone) VALUES
    (1, 'Exotic Liquids', 'Charlotte Cooper', 'Purchasing Manager', 'London', 'UK', '(171) 555-2222'),
    (2, 'New Orleans Cajun Delights', 'Shelley Burke', 'Order Administrator', 'New Orleans', 'USA', '(100) 555-4822'),
    (3, 'Grandma Kelly''s Homestead', 'Regina Murphy', 'Sales Representative', 'Ann Arbor', 'USA', '(313) 555-5735');

INSERT INTO customers (customer_id, company_name, contact_name, contact_title, city, country, phone) VALUES
    ('ALFKI', 'Alfreds Futterkiste', 'Maria Anders', 'Sales Representative', 'Berlin', 'Germany', '030-0074321'),
    ('ANATR', 'Ana Trujillo Emparedados y helados', 'Ana Trujillo', 'Owner', 'Mexico D.F.', 'Mexico', '(5) 555-4729'),
    ('ANTON', 'Antonio Moreno Taqueria', 'Antonio Moreno', 'Owner', 'Mexico D.F.', 'Mexico', '(5) 555-3932'),
    ('AROUT', 'Around the Horn', 'Thomas Hardy', 'Sales Representative', 'London', 'UK', '(171) 555-7788'),
    ('BERGS', 'Berglunds snabbkop', 'Christina Berglund', 'Order Administrator', 'Lulea', 'Sweden', '0921-12 34 65'),
    ('BLAUS', 'Blauer See Delikatessen', 'Hanna Moos', 'Sales Representative', 'Mannheim', 'Germany', '0621-08460');

INSERT INTO products (product_id, product_name, supplier_id, category_id, quantity_per_unit, unit_price, units_in_stock, units_on_order, reorder_level, discontinued) VALUES
    (1, 'Chai', 1, 1, '10 boxes x 20 bags', 18.0, 39, 0, 10, 0),
    (2, 'Chang', 1, 1, '24 - 12 oz bottles', 19.0, 17, 40, 25, 0),
    (3, 'Aniseed Syrup', 1, 2, '12 - 550 ml bottles', 10.0, 13, 70, 25, 0),
    (4, 'Chef Anton''s Cajun Seasoning', 2, 2, '48 - 6 oz jars', 22.0, 53, 0, 0, 0),
    (5, 'Chef Anton''s Gumbo Mix', 2, 2, '36 boxes', 21.35, 0, 0, 0, 1),
    (6, 'Grandma''s Boysenberry Spread', 3, 2, '12 - 8 oz jars', 25.0, 120, 0, 25, 0);

INSERT INTO orders (order_id, customer_id, employee_id, order_date, required_date, shipped_date, ship_via, freight, ship_name, ship_city, ship_country) VALUES
    (10248, 'ALFKI', 5, '1996-07-04', '1996-08-01', '1996-07-16', 3, 32.38, 'Alfreds Futterkiste', 'Berlin', 'Germany'),
    (10249, 'ANATR', 6, '1996-07-05', '1996-08-16', '1996-07-10', 1, 11.61, 'Ana Trujillo Emparedados y helados', 'Mexico D.F.', 'Mexico'),
    (10250, 'ANTON', 4, '1996-07-08', '1996-08-05', NULL, 2, 65.83, 'Antonio Moreno Taqueria', 'Mexico D.F.', 'Mexico');

INSERT INTO order_details (order_id, product_id, unit_price, quantity, discount) VALUES
    (10248, 1, 14.0, 12, 0),
    (10248, 2, 9.8, 10, 0),
    (10249, 4, 18.6, 9, 0),
    (10250, 3, 7.7, 10, 0),
    (10250, 6, 42.4, 35, 0.15);
"""


def create_schema(db: SQLiteConnection) -> None:
    """Create all tables (idempotent)."""
    db.executescript(SCHEMA)
    db.commit()
    Slogger.info("Schema ensured", {"db_path": db.db_path})


def is_seeded(db: SQLiteConnection) -> bool:
    cursor = db.cursor()
    cursor.execute("SELECT COUNT(*) FROM categories")
    return cursor.fetchone()[0] > 0


def seed_sample_data(db: SQLiteConnection) -> bool:
    """Load the sample data set into an empty database. Returns False if data already exists."""
    if is_seeded(db):
        Slogger.info("Sample data already present, skipping seed")
        return False
    db.executescript(SAMPLE_DATA)
    db.commit()
    Slogger.info("Sample data loaded", {"db_path": db.db_path})
    return True
