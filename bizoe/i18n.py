"""
Message catalog for zh-TW and en.

Lookup falls back to the default locale, then to the key itself, so a
missing translation never breaks a page.
"""
from __future__ import annotations

from typing import Callable, Dict, Optional

from bizoe.config import settings
from bizoe.constants import LOCALES

MESSAGES: Dict[str, Dict[str, str]] = {
    "zh-TW": {
        # navigation
        "nav.home": "首頁",
        "nav.products": "產品",
        "nav.promotions": "優惠活動",
        "nav.about": "關於我們",
        "nav.contact": "聯絡我們",
        "nav.cart": "購物車",
        "nav.account": "我的帳戶",
        "nav.login": "登入",
        "nav.register": "註冊",
        "nav.logout": "登出",
        "site.tagline": "專業3D列印設備與材料",
        # categories
        "products.3d_printers": "3D 列印機",
        "products.3d_printers_desc": "光固化與FDM列印機",
        "products.printing_materials": "列印材料",
        "products.printing_materials_desc": "樹脂與線材",
        "products.post_processing": "後處理設備",
        "products.post_processing_desc": "清洗與固化設備",
        "products.3d_scanners": "3D掃描器",
        "products.3d_scanners_desc": "高精度三維掃描",
        "products.laser_cutting": "雷切/雷雕機",
        "products.laser_cutting_desc": "雷射切割與雕刻",
        # catalog
        "products.title": "所有產品",
        "products.search": "搜尋產品",
        "products.all_categories": "所有分類",
        "products.sort_featured": "精選推薦",
        "products.sort_price_low": "價格：低到高",
        "products.sort_price_high": "價格：高到低",
        "products.sort_name": "名稱",
        "products.sort_newest": "最新上架",
        "products.no_products": "找不到相關產品",
        "products.in_stock": "現貨",
        "products.out_of_stock": "缺貨",
        "products.add_to_cart": "加入購物車",
        "products.specifications": "產品規格",
        "products.related": "相關產品",
        "products.featured": "精選產品",
        # cart
        "cart.title": "購物車",
        "cart.empty": "您的購物車是空的",
        "cart.continue_shopping": "繼續購物",
        "cart.subtotal": "小計",
        "cart.shipping": "運費",
        "cart.free_shipping": "免運費",
        "cart.tax": "稅金",
        "cart.discount": "折扣",
        "cart.total": "總計",
        "cart.promo_code": "優惠碼",
        "cart.apply": "套用",
        "cart.remove": "移除",
        "cart.save_for_later": "稍後購買",
        "cart.clear": "清空購物車",
        "cart.checkout": "前往結帳",
        "cart.update": "更新",
        "cart.quantity": "數量",
        # checkout
        "checkout.title": "結帳",
        "checkout.shipping_info": "收件資訊",
        "checkout.payment": "付款方式",
        "checkout.review": "確認訂單",
        "checkout.next": "下一步",
        "checkout.place_order": "確認付款",
        "checkout.price_notice": "訂單金額以購物車中的價格計算",
        "payment.credit_card": "信用卡",
        "payment.paypal": "PayPal",
        "payment.apple_pay": "Apple Pay",
        "order.confirmed": "訂單已確認",
        "order.number": "訂單編號",
        "order.receipt": "下載收據",
        # form fields
        "field.first_name": "名字",
        "field.last_name": "姓氏",
        "field.email": "電子郵件",
        "field.phone": "電話",
        "field.address": "地址",
        "field.apartment": "公寓/樓層",
        "field.city": "城市",
        "field.state": "縣市/州",
        "field.zip_code": "郵遞區號",
        "field.country": "國家",
        "field.password": "密碼",
        "field.confirm_password": "確認密碼",
        "field.current_password": "目前密碼",
        "field.new_password": "新密碼",
        "field.confirm_new_password": "確認新密碼",
        "field.agree_to_terms": "我同意服務條款",
        "field.name": "姓名",
        "field.subject": "主旨",
        "field.message": "訊息",
        "field.card_number": "卡號",
        "field.expiry": "到期日 (MM/YY)",
        "field.cvv": "安全碼",
        "field.holder_name": "持卡人姓名",
        "form.submit": "送出",
        "form.save": "儲存",
        # account
        "account.title": "我的帳戶",
        "account.welcome": "歡迎回來，{name}",
        "account.orders": "訂單記錄",
        "account.profile": "個人資料",
        "account.payment": "付款方式",
        "account.change_password": "變更密碼",
        "account.set_default": "設為預設",
        "account.default": "預設",
        "account.add_card": "新增信用卡",
        "orders.title": "訂單記錄",
        "orders.all": "全部",
        "orders.empty": "沒有符合的訂單",
        "status.pending": "待處理",
        "status.confirmed": "已確認",
        "status.processing": "處理中",
        "status.shipped": "已出貨",
        "status.delivered": "已送達",
        "status.cancelled": "已取消",
        # static pages
        "page.about": "關於我們",
        "page.faq": "常見問題",
        "page.privacy": "隱私權政策",
        "page.terms": "服務條款",
        "page.shipping": "運送政策",
        "page.returns": "退換貨政策",
        "page.site-map": "網站地圖",
        "page.about_body": "BIZOE 提供專業的3D列印設備、材料與技術支援。",
        "page.shipping_body": "訂單滿 {threshold} 免運費，未滿收取 {fee} 運費。",
        "page.returns_body": "收到商品7天內可申請退換貨。",
        "page.generic_body": "內容更新中。",
        "promotions.title": "優惠活動",
        "promotions.codes": "優惠碼",
        "promotions.valid_until": "有效期限：{date}",
        "not_found.title": "找不到頁面",
        "not_found.body": "您要找的頁面或產品不存在。",
        # notifications
        "added_to_cart": "已加入購物車",
        "removed_from_cart": "已從購物車移除",
        "saved_for_later": "已移至稍後購買",
        "cart_updated": "購物車已更新",
        "cart_cleared": "購物車已清空",
        "promo_applied": "已套用優惠碼",
        "promo_removed": "已移除優惠碼",
        "order_placed": "訂單已成立",
        "login_success": "登入成功",
        "register_success": "註冊成功",
        "logout_success": "已登出",
        "profile_updated": "個人資料已更新",
        "password_changed": "密碼已變更",
        "card_added": "信用卡已成功添加",
        "card_removed": "付款方式已刪除",
        "card_default": "已設為預設付款方式",
        "message_sent": "訊息已送出，我們會盡快回覆您",
        # errors
        "error": "發生錯誤，請重試",
        "form_invalid": "請修正表單中的錯誤",
        "network_error": "網路連線失敗，請重試",
        "product_not_found": "找不到產品",
        "promo_invalid": "無效的優惠碼",
        "out_of_stock": "商品缺貨",
        "cart_empty": "購物車是空的",
        "login_required": "請先登入",
        "payment_default_locked": "無法刪除預設付款方式，請先設定其他付款方式為預設",
        "field_required": "此欄位為必填",
        "first_name_required": "請輸入名字",
        "last_name_required": "請輸入姓氏",
        "email_required": "請輸入電子郵件",
        "email_invalid": "請輸入有效的電子郵件",
        "phone_required": "請輸入電話號碼",
        "phone_invalid": "請輸入有效的電話號碼",
        "password_required": "請輸入密碼",
        "password_too_short": "密碼至少需要6個字符",
        "password_weak": "密碼需包含大小寫字母和數字",
        "confirm_password_required": "請確認密碼",
        "password_mismatch": "密碼不一致",
        "terms_required": "請同意服務條款",
        "current_password_required": "請輸入目前密碼",
        "payment_method_required": "請選擇付款方式",
        "payment_method_invalid": "不支援的付款方式",
        "card_number_invalid": "請輸入有效的卡號",
        "expiry_invalid": "請輸入有效的到期日",
        "cvv_invalid": "請輸入有效的安全碼",
    },
    "en": {
        "nav.home": "Home",
        "nav.products": "Products",
        "nav.promotions": "Promotions",
        "nav.about": "About",
        "nav.contact": "Contact",
        "nav.cart": "Cart",
        "nav.account": "My account",
        "nav.login": "Sign in",
        "nav.register": "Sign up",
        "nav.logout": "Sign out",
        "site.tagline": "Professional 3D printing equipment and materials",
        "products.3d_printers": "3D Printers",
        "products.3d_printers_desc": "Resin and FDM printers",
        "products.printing_materials": "Printing Materials",
        "products.printing_materials_desc": "Resins and filaments",
        "products.post_processing": "Post-processing",
        "products.post_processing_desc": "Wash and cure stations",
        "products.3d_scanners": "3D Scanners",
        "products.3d_scanners_desc": "High precision 3D scanning",
        "products.laser_cutting": "Laser Cutting",
        "products.laser_cutting_desc": "Laser cutters and engravers",
        "products.title": "All products",
        "products.search": "Search products",
        "products.all_categories": "All categories",
        "products.sort_featured": "Featured",
        "products.sort_price_low": "Price: low to high",
        "products.sort_price_high": "Price: high to low",
        "products.sort_name": "Name",
        "products.sort_newest": "Newest",
        "products.no_products": "No products found",
        "products.in_stock": "In stock",
        "products.out_of_stock": "Out of stock",
        "products.add_to_cart": "Add to cart",
        "products.specifications": "Specifications",
        "products.related": "Related products",
        "products.featured": "Featured products",
        "cart.title": "Shopping cart",
        "cart.empty": "Your cart is empty",
        "cart.continue_shopping": "Continue shopping",
        "cart.subtotal": "Subtotal",
        "cart.shipping": "Shipping",
        "cart.free_shipping": "Free",
        "cart.tax": "Tax",
        "cart.discount": "Discount",
        "cart.total": "Total",
        "cart.promo_code": "Promo code",
        "cart.apply": "Apply",
        "cart.remove": "Remove",
        "cart.save_for_later": "Save for later",
        "cart.clear": "Clear cart",
        "cart.checkout": "Checkout",
        "cart.update": "Update",
        "cart.quantity": "Quantity",
        "checkout.title": "Checkout",
        "checkout.shipping_info": "Shipping information",
        "checkout.payment": "Payment method",
        "checkout.review": "Review order",
        "checkout.next": "Continue",
        "checkout.place_order": "Place order",
        "checkout.price_notice": "Order totals use the prices in your cart",
        "payment.credit_card": "Credit card",
        "payment.paypal": "PayPal",
        "payment.apple_pay": "Apple Pay",
        "order.confirmed": "Order confirmed",
        "order.number": "Order number",
        "order.receipt": "Download receipt",
        "field.first_name": "First name",
        "field.last_name": "Last name",
        "field.email": "Email",
        "field.phone": "Phone",
        "field.address": "Address",
        "field.apartment": "Apartment",
        "field.city": "City",
        "field.state": "State",
        "field.zip_code": "ZIP code",
        "field.country": "Country",
        "field.password": "Password",
        "field.confirm_password": "Confirm password",
        "field.current_password": "Current password",
        "field.new_password": "New password",
        "field.confirm_new_password": "Confirm new password",
        "field.agree_to_terms": "I agree to the terms of service",
        "field.name": "Name",
        "field.subject": "Subject",
        "field.message": "Message",
        "field.card_number": "Card number",
        "field.expiry": "Expiry (MM/YY)",
        "field.cvv": "CVV",
        "field.holder_name": "Card holder",
        "form.submit": "Submit",
        "form.save": "Save",
        "account.title": "My account",
        "account.welcome": "Welcome back, {name}",
        "account.orders": "Orders",
        "account.profile": "Profile",
        "account.payment": "Payment methods",
        "account.change_password": "Change password",
        "account.set_default": "Set as default",
        "account.default": "Default",
        "account.add_card": "Add card",
        "orders.title": "Order history",
        "orders.all": "All",
        "orders.empty": "No matching orders",
        "status.pending": "Pending",
        "status.confirmed": "Confirmed",
        "status.processing": "Processing",
        "status.shipped": "Shipped",
        "status.delivered": "Delivered",
        "status.cancelled": "Cancelled",
        "page.about": "About us",
        "page.faq": "FAQ",
        "page.privacy": "Privacy policy",
        "page.terms": "Terms of service",
        "page.shipping": "Shipping policy",
        "page.returns": "Returns",
        "page.site-map": "Site map",
        "page.about_body": "BIZOE supplies professional 3D printing equipment, materials and support.",
        "page.shipping_body": "Free shipping on orders of {threshold} or more; otherwise a {fee} fee applies.",
        "page.returns_body": "Returns and exchanges are accepted within 7 days of delivery.",
        "page.generic_body": "Content coming soon.",
        "promotions.title": "Promotions",
        "promotions.codes": "Promo codes",
        "promotions.valid_until": "Valid until {date}",
        "not_found.title": "Page not found",
        "not_found.body": "The page or product you are looking for does not exist.",
        "added_to_cart": "Added to cart",
        "removed_from_cart": "Removed from cart",
        "saved_for_later": "Saved for later",
        "cart_updated": "Cart updated",
        "cart_cleared": "Cart cleared",
        "promo_applied": "Promo code applied",
        "promo_removed": "Promo code removed",
        "order_placed": "Order placed",
        "login_success": "Signed in",
        "register_success": "Account created",
        "logout_success": "Signed out",
        "profile_updated": "Profile updated",
        "password_changed": "Password changed",
        "card_added": "Card added",
        "card_removed": "Payment method removed",
        "card_default": "Default payment method updated",
        "message_sent": "Message sent, we will get back to you soon",
        "error": "Something went wrong, please try again",
        "form_invalid": "Please fix the errors in the form",
        "network_error": "Network error, please try again",
        "product_not_found": "Product not found",
        "promo_invalid": "Invalid promo code",
        "out_of_stock": "Out of stock",
        "cart_empty": "Your cart is empty",
        "login_required": "Please sign in first",
        "payment_default_locked": "Set another card as default before removing this one",
        "field_required": "This field is required",
        "first_name_required": "First name is required",
        "last_name_required": "Last name is required",
        "email_required": "Email is required",
        "email_invalid": "Enter a valid email",
        "phone_required": "Phone is required",
        "phone_invalid": "Enter a valid phone number",
        "password_required": "Password is required",
        "password_too_short": "Password must be at least 6 characters",
        "password_weak": "Password needs upper and lower case letters and a digit",
        "confirm_password_required": "Confirm your password",
        "password_mismatch": "Passwords do not match",
        "terms_required": "You must accept the terms",
        "current_password_required": "Current password is required",
        "payment_method_required": "Choose a payment method",
        "payment_method_invalid": "Unsupported payment method",
        "card_number_invalid": "Enter a valid card number",
        "expiry_invalid": "Enter a valid expiry date",
        "cvv_invalid": "Enter a valid CVV",
    },
}


def resolve_locale(*candidates: Optional[str], default: str | None = None) -> str:
    """First candidate that is a supported locale, else the default."""
    for c in candidates:
        if c in LOCALES:
            return c
    return default if default in LOCALES else settings.default_locale


def t(key: str, locale: str | None = None, **kwargs: object) -> str:
    locale = locale or settings.default_locale
    text = MESSAGES.get(locale, {}).get(key)
    if text is None:
        text = MESSAGES.get(settings.default_locale, {}).get(key, key)
    if kwargs:
        try:
            return text.format(**kwargs)
        except (KeyError, IndexError):
            return text
    return text


def translator(locale: str) -> Callable[..., str]:
    def _t(key: str, **kwargs: object) -> str:
        return t(key, locale, **kwargs)

    return _t
