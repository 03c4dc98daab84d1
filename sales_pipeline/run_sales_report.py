# =============================================================================
# RUN SELLER SALES REPORT
# =============================================================================
# - Load a sales dataset (sellers, products, purchase records) from JSON
# - Run the seller analysis with the reference revenue and bonus policies
# - Exit non-zero when the dataset fails validation


import json
import os
import sys
from typing import Any, Dict, List

from .sales_policies import default_options
from .seller_sales_facts import analyze_sales_data
from .validate_sales_data import (
    MalformedInputError,
    SalesDataError,
    fail,
    init_report,
    log_info,
)


# ------------------------------------------------------------
# CONFIGURATIONS
# ------------------------------------------------------------

SALES_DATA_PATH = os.getenv('SALES_DATA_PATH', 'data/sales_data.json')


# ------------------------------------------------------------
# Input Helpers
# ------------------------------------------------------------

def load_sales_dataset(json_path: str, report: Dict[str, List[str]]) -> Any:
    if not os.path.exists(json_path):
        fail(MalformedInputError(f'Missing file: {json_path}'), report)

    try:
        with open(json_path, encoding='utf-8') as f:
            data = json.load(f)

    except (OSError, UnicodeDecodeError, ValueError) as e:
        fail(MalformedInputError(f'Failed to load {json_path}: {e}'), report)

    log_info(f'Loaded sales dataset: {os.path.basename(json_path)}', report)

    return data


# ------------------------------------------------------------
# MAIN EXECUTION
# ------------------------------------------------------------

def main() -> None:
    report = init_report()

    try:
        data = load_sales_dataset(SALES_DATA_PATH, report)
        seller_stats = analyze_sales_data(data, default_options(), report)

    except SalesDataError:
        sys.exit(1)

    for rank, stat in enumerate(seller_stats, start=1):
        log_info(
            f'#{rank} {stat.name} (id={stat.id}): revenue={stat.revenue:.2f} '
            f'profit={stat.profit:.2f} sales={stat.sales_count} bonus={stat.bonus:.2f}',
            report
            )

    sys.exit(0)


if __name__ == '__main__':
    main()


# =============================================================================
# END OF SCRIPT
# =============================================================================
