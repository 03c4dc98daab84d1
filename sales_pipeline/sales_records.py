# =============================================================================
# SALES RECORDS
# =============================================================================
# - Reference data (sellers, products) and purchase records with line items
# - Per-seller accumulator filled by the aggregation pass
# - Accepts either these records or the equivalent plain mappings


from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .validate_sales_data import MalformedInputError, is_record_sequence


def read_fields(obj: Any, record_kind: str, names: Sequence[str]) -> Dict[str, Any]:
    if not isinstance(obj, Mapping):
        raise MalformedInputError(
            f'{record_kind} record must be a mapping, got {type(obj).__name__}'
            )

    missing = [name for name in names if name not in obj]
    if missing:
        raise MalformedInputError(f'{record_kind} record is missing field(s): {missing}')

    return {name: obj[name] for name in names}


@dataclass(frozen=True)
class Seller:
    id: Any
    first_name: str
    last_name: str

    @classmethod
    def coerce(cls, obj: Any) -> Seller:
        if isinstance(obj, cls):
            return obj

        return cls(**read_fields(obj, 'seller', ['id', 'first_name', 'last_name']))


@dataclass(frozen=True)
class Product:
    sku: str
    purchase_price: float

    @classmethod
    def coerce(cls, obj: Any) -> Product:
        if isinstance(obj, cls):
            return obj

        return cls(**read_fields(obj, 'product', ['sku', 'purchase_price']))


@dataclass(frozen=True)
class Item:
    sku: str
    quantity: int
    sale_price: float
    discount: float = 0

    @classmethod
    def coerce(cls, obj: Any) -> Item:
        if isinstance(obj, cls):
            return obj

        values = read_fields(obj, 'item', ['sku', 'quantity', 'sale_price'])

        return cls(discount=obj.get('discount', 0), **values)


@dataclass(frozen=True)
class PurchaseRecord:
    seller_id: Any
    total_amount: float
    items: Tuple[Item, ...] = ()

    @classmethod
    def coerce(cls, obj: Any) -> PurchaseRecord:
        if isinstance(obj, cls):
            return obj

        values = read_fields(obj, 'purchase', ['seller_id', 'total_amount', 'items'])
        if not is_record_sequence(values['items']):
            raise MalformedInputError(
                f'purchase record `items` must be a sequence, got '
                f'{type(values["items"]).__name__}'
                )
        values['items'] = tuple(Item.coerce(item) for item in values['items'])

        return cls(**values)


@dataclass(frozen=True)
class TopProduct:
    sku: str
    quantity: int


@dataclass
class SellerStat:
    id: Any
    name: str
    revenue: float = 0
    profit: float = 0
    sales_count: int = 0
    products_sold: Dict[str, int] = field(default_factory=dict)
    bonus: Optional[float] = None
    top_products: List[TopProduct] = field(default_factory=list)

    @classmethod
    def for_seller(cls, seller: Seller) -> SellerStat:
        return cls(id=seller.id, name=f'{seller.first_name} {seller.last_name}')

    def to_dict(self) -> Dict[str, Any]:

        return {
            'id': self.id,
            'name': self.name,
            'revenue': self.revenue,
            'profit': self.profit,
            'sales_count': self.sales_count,
            'bonus': self.bonus,
            'top_products': [
                {'sku': product.sku, 'quantity': product.quantity}
                for product in self.top_products
            ],
        }


@dataclass(frozen=True)
class SalesData:
    sellers: Tuple[Seller, ...]
    products: Tuple[Product, ...]
    purchase_records: Tuple[PurchaseRecord, ...]

    @classmethod
    def coerce(cls, data: Any) -> SalesData:
        """
        Build typed records from a validated input bundle.

        Expects the bundle to have passed `validate_input_bundle`.
        """

        if isinstance(data, cls):
            return data

        if isinstance(data, Mapping):
            get = data.get
        else:
            def get(name):
                return getattr(data, name)

        return cls(
            sellers=tuple(Seller.coerce(seller) for seller in get('sellers')),
            products=tuple(Product.coerce(product) for product in get('products')),
            purchase_records=tuple(
                PurchaseRecord.coerce(record) for record in get('purchase_records')
            ),
        )


# =============================================================================
# END OF SCRIPT
# =============================================================================
