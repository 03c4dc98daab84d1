# =============================================================================
# Derive Seller Sales Facts
# =============================================================================
# - Join purchase line items against seller and product reference data
# - Accumulate revenue, profit, sales count and sold quantities per seller
# - Rank sellers by profit, assign bonuses and top products
# - Output seller fact records safe for direct BI consumption


import os
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple
import pandas as pd

from .sales_records import Product, PurchaseRecord, SalesData, Seller, SellerStat, TopProduct
from .validate_sales_data import (
    MalformedInputError,
    ProductNotFoundError,
    SellerNotFoundError,
    fail,
    init_report,
    log_error,
    log_info,
    run_line_item_checks,
    validate_input_bundle,
    validate_options,
    validate_unique_keys,
)


# ------------------------------------------------------------
# CONFIGURATIONS
# ------------------------------------------------------------

TOP_PRODUCTS_LIMIT = int(os.getenv('TOP_PRODUCTS_LIMIT', '10'))

FACT_COLUMNS = [
    'id', 'name', 'revenue', 'profit', 'sales_count', 'bonus', 'top_products'
]


# ------------------------------------------------------------
# INDEXES
# ------------------------------------------------------------

def build_product_index(products: Sequence[Product]) -> Dict[str, Product]:

    return {product.sku: product for product in products}


def build_seller_index(sellers: Sequence[Seller]
                       ) -> Tuple[List[SellerStat], Dict[Any, SellerStat]]:
    """
    Fresh zeroed accumulators in seller order, plus their id lookup.
    """

    seller_stats = [SellerStat.for_seller(seller) for seller in sellers]
    seller_index = {stat.id: stat for stat in seller_stats}

    return seller_stats, seller_index


# ------------------------------------------------------------
# AGGREGATION
# ------------------------------------------------------------

def aggregate_purchase_records(purchase_records: Sequence[PurchaseRecord],
                               seller_index: Dict[Any, SellerStat],
                               product_index: Dict[str, Product],
                               calculate_revenue: Callable[..., float],
                               report: Dict[str, List[str]]
                               ) -> None:
    """
    Single pass over purchase records in input order.

    Revenue is the receipt total; profit comes from the revenue policy per
    line item minus purchase cost. Unknown sellers or SKUs abort the pass.
    """

    for record in purchase_records:
        seller = seller_index.get(record.seller_id)
        if seller is None:
            fail(SellerNotFoundError(record.seller_id), report)

        seller.sales_count += 1
        seller.revenue += record.total_amount

        for item in record.items:
            product = product_index.get(item.sku)
            if product is None:
                fail(ProductNotFoundError(item.sku), report)

            cost = product.purchase_price * item.quantity
            revenue = calculate_revenue(item, item.quantity)
            seller.profit += revenue - cost

            if item.sku not in seller.products_sold:
                seller.products_sold[item.sku] = 0
            seller.products_sold[item.sku] += item.quantity


# ------------------------------------------------------------
# RANKING & BONUSES
# ------------------------------------------------------------

def derive_top_products(products_sold: Dict[str, int],
                        limit: int = TOP_PRODUCTS_LIMIT
                        ) -> List[TopProduct]:
    ranked = sorted(products_sold.items(), key=lambda entry: entry[1], reverse=True)

    return [TopProduct(sku=sku, quantity=quantity) for sku, quantity in ranked[:limit]]


def rank_sellers(seller_stats: Sequence[SellerStat],
                 calculate_bonus: Callable[..., float],
                 top_products_limit: int = TOP_PRODUCTS_LIMIT
                 ) -> List[SellerStat]:
    """
    Sort by profit descending, then attach rank-dependent bonus and top products.

    Sellers with equal profit keep their input order.
    """

    ranked = sorted(seller_stats, key=lambda stat: stat.profit, reverse=True)
    total = len(ranked)

    for index, seller in enumerate(ranked):
        seller.bonus = calculate_bonus(seller, index, total)
        seller.top_products = derive_top_products(seller.products_sold, top_products_limit)

    return ranked


# ------------------------------------------------------------
# FACT TABLE
# ------------------------------------------------------------

def seller_stats_frame(seller_stats: Sequence[SellerStat]) -> pd.DataFrame:
    """
    One row per seller, in ranking order; `top_products` stays a list column.
    """

    rows = [stat.to_dict() for stat in seller_stats]

    return pd.DataFrame(rows, columns=FACT_COLUMNS)


# ------------------------------------------------------------
# MAIN ENTRY POINT
# ------------------------------------------------------------

def analyze_sales_data(data: Any,
                       options: Any,
                       report: Optional[Dict[str, List[str]]] = None,
                       top_products_limit: int = TOP_PRODUCTS_LIMIT
                       ) -> List[SellerStat]:
    """
    Compute per-seller revenue, profit, sales count, bonus and top products.

    `data` is a `SalesData` or a mapping with `sellers`, `products` and
    `purchase_records`; `options` supplies `calculate_revenue` and
    `calculate_bonus`. Returns seller stats ordered by profit descending.

    Raises a `SalesDataError` subclass on the first violation; no partial
    result is returned.
    """

    if report is None:
        report = init_report()

    validate_input_bundle(data, report)
    calculate_revenue, calculate_bonus = validate_options(options, report)

    try:
        sales_data = SalesData.coerce(data)
    except MalformedInputError as e:
        log_error(str(e), report)

        raise

    validate_unique_keys(sales_data.sellers, sales_data.products, report)
    run_line_item_checks(sales_data.purchase_records, report)

    product_index = build_product_index(sales_data.products)
    seller_stats, seller_index = build_seller_index(sales_data.sellers)
    log_info(
        f'Indexed {len(seller_index)} seller(s) and {len(product_index)} product(s)',
        report
        )

    aggregate_purchase_records(
        sales_data.purchase_records,
        seller_index,
        product_index,
        calculate_revenue,
        report
        )
    log_info(f'Aggregated {len(sales_data.purchase_records)} purchase record(s)', report)

    ranked = rank_sellers(seller_stats, calculate_bonus, top_products_limit)
    log_info(f'Ranked {len(ranked)} seller(s) by profit', report)

    return ranked


# =============================================================================
# END OF SCRIPT
# =============================================================================
