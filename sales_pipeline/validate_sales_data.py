# =============================================================================
# VALIDATE SALES INPUT DATA
# =============================================================================
# - Enforce structural integrity of the sellers, products and purchase records
# - Block duplicate keys that would corrupt seller and product joins
# - Fail fast: the first fatal violation aborts the whole analysis


from collections.abc import Mapping
from numbers import Number
from typing import Any, Callable, Dict, List, NoReturn, Optional, Sequence, Tuple
import pandas as pd


BUNDLE_FIELDS = ['sellers', 'products', 'purchase_records']


# ------------------------------------------------------------
# ERRORS
# ------------------------------------------------------------

class SalesDataError(ValueError):
    """Base class for every fatal sales analysis error."""


class MalformedInputError(SalesDataError):
    pass


class MalformedOptionsError(SalesDataError):
    pass


class MissingKeyError(SalesDataError):
    pass


class DuplicateKeyError(SalesDataError):

    def __init__(self, message: str, duplicates: List[Any]):
        super().__init__(message)
        self.duplicates = duplicates


class ReferenceNotFoundError(SalesDataError):
    pass


class SellerNotFoundError(ReferenceNotFoundError):

    def __init__(self, seller_id: Any):
        super().__init__(f'Seller with id {seller_id} not found')
        self.seller_id = seller_id


class ProductNotFoundError(ReferenceNotFoundError):

    def __init__(self, sku: Any):
        super().__init__(f'Product with sku {sku} not found')
        self.sku = sku


# ------------------------------------------------------------
# VALIDATION REPORT & LOGS
# ------------------------------------------------------------

def init_report() -> Dict[str, List[str]]:

    return {
        'errors': [],
        'warnings': [],
        'info': []
    }


def log_info(message: str, report: Dict[str, List[str]]) -> None:
    print(f'[INFO] {message}')
    report['info'].append(message)


def log_warning(message: str, report: Dict[str, List[str]]) -> None:
    print(f'[WARNING] {message}')
    report['warnings'].append(message)


def log_error(message: str, report: Dict[str, List[str]]) -> None:
    print(f'[ERROR] {message}')
    report['errors'].append(message)


def fail(error: SalesDataError, report: Dict[str, List[str]]) -> NoReturn:
    """
    Record a fatal error in the report and raise it.
    """

    log_error(str(error), report)

    raise error


# ------------------------------------------------------------
# INPUT BUNDLE VALIDATIONS
# ------------------------------------------------------------

def bundle_field(data: Any, name: str) -> Any:
    if isinstance(data, Mapping):
        return data.get(name)

    return getattr(data, name, None)


def is_record_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def validate_input_bundle(data: Any, report: Dict[str, List[str]]) -> None:
    """
    Input bundle must exist and carry three non-empty record sequences.
    """

    if data is None:
        fail(MalformedInputError('Input data is missing'), report)

    for name in BUNDLE_FIELDS:
        value = bundle_field(data, name)

        if value is None:
            fail(MalformedInputError(f'Input data is missing `{name}`'), report)

        if not is_record_sequence(value):
            fail(
                MalformedInputError(
                    f'`{name}` must be a sequence of records, got {type(value).__name__}'
                    ),
                report
                )

        if len(value) == 0:
            fail(MalformedInputError(f'`{name}` is empty'), report)


# ------------------------------------------------------------
# OPTIONS VALIDATIONS
# ------------------------------------------------------------

def resolve_policy(policy: Any, method_name: str) -> Optional[Callable[..., float]]:
    """
    Policy objects expose a single named method; plain callables are used as is.
    Returns None when the policy is not invocable; policy classes are not
    accepted in place of instances.
    """

    if isinstance(policy, type):

        return None

    method = getattr(policy, method_name, None)
    if callable(method):

        return method

    if callable(policy):

        return policy

    return None


def validate_options(options: Any,
                     report: Dict[str, List[str]]
                     ) -> Tuple[Callable[..., float], Callable[..., float]]:
    """
    Options must carry an invocable revenue policy and bonus policy.

    Returns the resolved (calculate_revenue, calculate_bonus) callables.
    """

    if (options is None
            or isinstance(options, (str, bytes, Number))
            or is_record_sequence(options)):
        fail(
            MalformedOptionsError(
                f'Options must be an object, got {type(options).__name__}'
                ),
            report
            )

    calculate_revenue = bundle_field(options, 'calculate_revenue')
    calculate_bonus = bundle_field(options, 'calculate_bonus')

    missing = [
        name for name, policy in (('calculate_revenue', calculate_revenue),
                                  ('calculate_bonus', calculate_bonus))
        if policy is None
        ]
    if missing:
        fail(MalformedOptionsError(f'Options are missing policy: {missing}'), report)

    revenue_fn = resolve_policy(calculate_revenue, 'compute')
    bonus_fn = resolve_policy(calculate_bonus, 'assign')

    not_callable = [
        name for name, fn in (('calculate_revenue', revenue_fn),
                              ('calculate_bonus', bonus_fn))
        if fn is None
        ]
    if not_callable:
        fail(
            MalformedOptionsError(f'Policies must be callable: {not_callable}'),
            report
            )

    return revenue_fn, bonus_fn


# ------------------------------------------------------------
# KEY VALIDATIONS
# ------------------------------------------------------------

def check_primary_key(keys: pd.Series,
                      table_name: str,
                      key_name: str,
                      report: Dict[str, List[str]]
                      ) -> None:

    null_count = keys.isnull().sum()
    if null_count > 0:
        fail(
            MissingKeyError(f'{table_name}: {null_count} record(s) with missing `{key_name}`'),
            report
            )

    duplicated = keys[keys.duplicated()].unique().tolist()
    if duplicated:
        fail(
            DuplicateKeyError(
                f'{table_name}: duplicate `{key_name}` value(s) detected: {duplicated}',
                duplicated
                ),
            report
            )


def validate_unique_keys(sellers: Sequence[Any],
                         products: Sequence[Any],
                         report: Dict[str, List[str]]
                         ) -> None:
    """
    Seller ids and product SKUs must be present and pairwise unique.
    """

    seller_ids = pd.Series([seller.id for seller in sellers], dtype=object)
    check_primary_key(seller_ids, 'sellers', 'id', report)

    product_skus = pd.Series([product.sku for product in products], dtype=object)
    check_primary_key(product_skus, 'products', 'sku', report)


# ------------------------------------------------------------
# LINE ITEM VALIDATIONS
# ------------------------------------------------------------

def run_line_item_checks(purchase_records: Sequence[Any],
                         report: Dict[str, List[str]]
                         ) -> None:
    """
    Line item sanity checks.

    Suspicious values are reported as warnings; aggregation still runs.
    """

    rows = [
        {
            'seller_id': record.seller_id,
            'sku': item.sku,
            'quantity': item.quantity,
            'sale_price': item.sale_price,
            'discount': item.discount,
        }
        for record in purchase_records
        for item in record.items
        ]

    if not rows:
        log_warning('purchase_records: no line items found', report)

        return

    items_df = pd.DataFrame(rows)

    non_positive_qty = (items_df['quantity'] <= 0).sum()
    if non_positive_qty > 0:
        log_warning(
            f'line items: {non_positive_qty} item(s) with non-positive `quantity`',
            report
            )

    bad_discount = (~items_df['discount'].between(0, 100)).sum()
    if bad_discount > 0:
        log_warning(
            f'line items: {bad_discount} item(s) with `discount` outside 0-100',
            report
            )

    negative_price = (items_df['sale_price'] < 0).sum()
    if negative_price > 0:
        log_warning(
            f'line items: {negative_price} item(s) with negative `sale_price`',
            report
            )


# =============================================================================
# END OF SCRIPT
# =============================================================================
