from .sales_policies import (
    AnalysisOptions,
    ProfitRankBonusPolicy,
    SimpleRevenuePolicy,
    calculate_bonus_by_profit,
    calculate_simple_revenue,
    default_options,
)
from .sales_records import Item, Product, PurchaseRecord, SalesData, Seller, SellerStat, TopProduct
from .seller_sales_facts import analyze_sales_data, seller_stats_frame
from .validate_sales_data import (
    DuplicateKeyError,
    MalformedInputError,
    MalformedOptionsError,
    MissingKeyError,
    ProductNotFoundError,
    ReferenceNotFoundError,
    SalesDataError,
    SellerNotFoundError,
)
