import pytest

from sales_pipeline import default_options
from sales_pipeline.validate_sales_data import init_report


@pytest.fixture
def report():
    return init_report()


@pytest.fixture
def options():
    return default_options()


@pytest.fixture
def single_seller_data():
    return {
        "sellers": [{"id": 1, "first_name": "A", "last_name": "X"}],
        "products": [{"sku": "P1", "purchase_price": 5}],
        "purchase_records": [
            {
                "seller_id": 1,
                "total_amount": 20,
                "items": [{"sku": "P1", "quantity": 2, "sale_price": 10, "discount": 0}],
            }
        ],
    }


@pytest.fixture
def sales_data():
    """Four sellers, three products; seller 4 never sells."""
    return {
        "sellers": [
            {"id": "s1", "first_name": "Ann", "last_name": "Lee"},
            {"id": "s2", "first_name": "Bob", "last_name": "Ray"},
            {"id": "s3", "first_name": "Cid", "last_name": "Moe"},
            {"id": "s4", "first_name": "Dee", "last_name": "Orr"},
        ],
        "products": [
            {"sku": "A", "purchase_price": 10},
            {"sku": "B", "purchase_price": 4},
            {"sku": "C", "purchase_price": 1},
        ],
        "purchase_records": [
            {
                "seller_id": "s1",
                "total_amount": 100,
                "items": [
                    {"sku": "A", "quantity": 3, "sale_price": 20, "discount": 10},
                    {"sku": "B", "quantity": 5, "sale_price": 8, "discount": 0},
                ],
            },
            {
                "seller_id": "s2",
                "total_amount": 40,
                "items": [{"sku": "C", "quantity": 10, "sale_price": 3, "discount": 50}],
            },
            {
                "seller_id": "s1",
                "total_amount": 30,
                "items": [{"sku": "B", "quantity": 2, "sale_price": 10, "discount": 0}],
            },
            {
                "seller_id": "s3",
                "total_amount": 15,
                "items": [{"sku": "A", "quantity": 1, "sale_price": 9, "discount": 0}],
            },
        ],
    }
