from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Category:
    id: str
    name: str  # i18n key
    slug: str
    description: str = ""
    image: str = ""
    product_count: int = 0


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    description: str
    price: float
    currency: str
    category_id: str
    category: str
    brand: str
    images: List[str] = field(default_factory=list)
    specifications: Dict[str, str] = field(default_factory=dict)
    in_stock: bool = True
    stock_quantity: int = 0
    featured: bool = False
    original_price: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Product":
        return cls(
            id=str(d["id"]),
            name=d["name"],
            description=d.get("description", ""),
            price=float(d["price"]),
            currency=d.get("currency", "USD"),
            category_id=str(d.get("category_id", "")),
            category=d.get("category", ""),
            brand=d.get("brand", ""),
            images=list(d.get("images") or []),
            specifications=dict(d.get("specifications") or {}),
            in_stock=bool(d.get("in_stock", True)),
            stock_quantity=int(d.get("stock_quantity", 0)),
            featured=bool(d.get("featured", False)),
            original_price=d.get("original_price"),
        )


@dataclass(frozen=True)
class CartItem:
    id: str
    product_id: str
    product: Product
    quantity: int
    price: float  # unit price captured when the item was added

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "product_id": self.product_id,
            "product": self.product.to_dict(),
            "quantity": self.quantity,
            "price": self.price,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CartItem":
        return cls(
            id=d["id"],
            product_id=str(d["product_id"]),
            product=Product.from_dict(d["product"]),
            quantity=int(d["quantity"]),
            price=float(d["price"]),
        )


@dataclass(frozen=True)
class Cart:
    id: str
    created_at: str
    updated_at: str
    items: List[CartItem] = field(default_factory=list)
    total_items: int = 0
    total_amount: float = 0.0
    user_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "items": [it.to_dict() for it in self.items],
            "total_items": self.total_items,
            "total_amount": self.total_amount,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Cart":
        return cls(
            id=d.get("id", "local-cart"),
            user_id=d.get("user_id"),
            items=[CartItem.from_dict(it) for it in d.get("items") or []],
            total_items=int(d.get("total_items", 0)),
            total_amount=float(d.get("total_amount", 0.0)),
            created_at=d.get("created_at", ""),
            updated_at=d.get("updated_at", ""),
        )


@dataclass(frozen=True)
class User:
    id: str
    email: str
    first_name: str
    last_name: str
    created_at: str
    updated_at: str
    phone: str = ""
    address: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "User":
        return cls(
            id=str(d["id"]),
            email=d["email"],
            first_name=d.get("first_name", ""),
            last_name=d.get("last_name", ""),
            phone=d.get("phone") or "",
            address=d.get("address") or "",
            created_at=d.get("created_at", ""),
            updated_at=d.get("updated_at", ""),
        )


@dataclass(frozen=True)
class Address:
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    zip_code: str
    apartment: str = ""
    country: str = "TW"


@dataclass(frozen=True)
class OrderItem:
    product_id: str
    name: str
    image: str
    price: float
    quantity: int

    @property
    def total(self) -> float:
        return self.price * self.quantity


@dataclass(frozen=True)
class Order:
    id: str
    order_number: str
    user_id: str
    order_date: str
    status: str
    payment_method: str
    payment_status: str
    items: List[OrderItem]
    subtotal: float
    shipping: float
    tax: float
    discount: float
    total: float
    promo_code: Optional[str] = None
    shipping_address: Optional[Address] = None

    @property
    def item_count(self) -> int:
        return sum(it.quantity for it in self.items)


@dataclass(frozen=True)
class PaymentMethod:
    id: str
    type: str
    holder_name: str
    last4: str
    expiry: str
    is_default: bool = False

    @property
    def brand(self) -> str:
        return "VISA" if self.type == "visa" else "MC"


@dataclass(frozen=True)
class Promotion:
    id: str
    title: str
    description: str
    discount: int
    valid_until: str
    applicable_product_ids: List[str] = field(default_factory=list)
