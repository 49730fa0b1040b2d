PROMO_CODES = {
    "WELCOME10": 10,
    "SAVE15": 15,
    "NEWUSER": 20,
    "BIZOE2024": 25,
}

LOCALES = ("zh-TW", "en")

SORT_FEATURED = "featured"
SORT_PRICE_LOW = "price_low"
SORT_PRICE_HIGH = "price_high"
SORT_NAME = "name"
SORT_NEWEST = "newest"
SORT_OPTIONS = (SORT_FEATURED, SORT_PRICE_LOW, SORT_PRICE_HIGH, SORT_NAME, SORT_NEWEST)

ORDER_STATUSES = ("pending", "confirmed", "processing", "shipped", "delivered", "cancelled")

PAYMENT_METHODS = {
    "credit_card": "Credit card",
    "paypal": "PayPal",
    "apple_pay": "Apple Pay",
}

SHIPPING_REQUIRED_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "address",
    "city",
    "state",
    "zip_code",
)

# persisted entries, one per store
CART_STORAGE_KEY = "cart-storage"
AUTH_STORAGE_KEY = "auth-storage"

MOCK_TOKEN = "mock-jwt-token"
ORDER_PREFIX = "BIZOE-"

STATIC_PAGES = ("about", "faq", "privacy", "terms", "shipping", "returns", "site-map")
