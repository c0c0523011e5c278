"""Shared fixtures: small record sets built from in-memory rows."""

import matplotlib

matplotlib.use("Agg")

import pytest

from item_network.records import records_from_rows


def make_row(item, category, season="Spring", **fields):
    row = {
        "customer_id": 1,
        "age": 30,
        "gender": "Male",
        "item_purchased": item,
        "category": category,
        "purchase_amount": 50,
        "location": "Hawaii",
        "size": "M",
        "color": "Grey",
        "season": season,
        "review_rating": 3.5,
        "subscription_status": "Yes",
        "shipping_type": "Express",
        "discount_applied": "No",
        "promo_code_used": "No",
        "previous_purchases": 3,
        "payment_method": "Venmo",
        "preferred_payment_method": "Credit Card",
        "frequency_of_purchases": "Every 3 Months",
    }
    row.update(fields)
    return row


@pytest.fixture
def row_factory():
    return make_row


@pytest.fixture
def shirt_and_pants():
    return records_from_rows([
        make_row("Shirt", "Clothing", season="Spring", customer_id=1),
        make_row("Pants", "Clothing", season="Winter", customer_id=2),
    ])


@pytest.fixture
def chain_records():
    # A-B share category X, B-C share category Y, A and C share nothing
    return records_from_rows([
        make_row("A", "X"),
        make_row("B", "X"),
        make_row("B", "Y"),
        make_row("C", "Y"),
    ])


@pytest.fixture
def seasonal_records():
    return records_from_rows([
        make_row("Shirt", "Clothing", season="Spring"),
        make_row("Pants", "Clothing", season="Spring"),
        make_row("Boots", "Footwear", season="Winter"),
        make_row("Sandals", "Footwear", season="Winter"),
    ])


@pytest.fixture
def csv_header():
    return ",".join(
        ["Customer ID", "Age", "Gender", "Item Purchased", "Category",
         "Purchase Amount (USD)", "Location", "Size", "Color", "Season",
         "Review Rating", "Subscription Status", "Shipping Type",
         "Discount Applied", "Promo Code Used", "Previous Purchases",
         "Payment Method", "Preferred Payment Method", "Frequency of Purchases"]
    )

