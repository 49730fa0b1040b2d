"""
Mock catalog for the BIZOE store.

Hard-coded categories, products, promotions and order history standing in
for a catalog service. Product rows are plain dicts, turned into immutable
`Product` objects once at import.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional

from bizoe.store.models import Category, Product, Promotion

_IMAGES = [
    "https://images.unsplash.com/photo-1581833971358-2c8b550f87b3?w=500&h=500&fit=crop",
    "https://images.unsplash.com/photo-1612198985863-fbbf7b95b2c4?w=500&h=500&fit=crop",
    "https://images.unsplash.com/photo-1593440552154-a4e1b2c2fecc?w=500&h=500&fit=crop",
    "https://images.unsplash.com/photo-1563089145-599997674d42?w=500&h=500&fit=crop",
    "https://images.unsplash.com/photo-1558618666-fcd25c85cd64?w=500&h=500&fit=crop",
    "https://images.unsplash.com/photo-1605810230434-7631ac76ec81?w=500&h=500&fit=crop",
]

_CATEGORY_ROWS: List[Category] = [
    Category("1", "products.3d_printers", "3d-printers", "products.3d_printers_desc", _IMAGES[0]),
    Category("2", "products.printing_materials", "materials", "products.printing_materials_desc", _IMAGES[2]),
    Category("3", "products.post_processing", "post-processing", "products.post_processing_desc", _IMAGES[3]),
    Category("4", "products.3d_scanners", "3d-scanners", "products.3d_scanners_desc", _IMAGES[4]),
    Category("5", "products.laser_cutting", "laser-cutting", "products.laser_cutting_desc", _IMAGES[5]),
]

_CATEGORY_LABELS = {
    "1": "3D 列印機",
    "2": "列印材料",
    "3": "後處理設備",
    "4": "3D掃描器",
    "5": "雷切/雷雕機",
}

SEED_PRODUCTS = [
    # 3D printers
    {
        "id": "1",
        "name": "Phrozen Sonic Mighty Revo 16K",
        "description": "全新登場｜極致細節，無可挑剔。超細緻列印，肉眼無層紋，免打磨直接用！航太級鋁合金結構＋雙線性導軌，穩定可靠。",
        "price": 899.99,
        "original_price": 999.99,
        "category_id": "1",
        "specifications": {
            "列印體積": "218.88 × 123 × 235 mm",
            "層厚精度": "0.01-0.3mm",
            "列印速度": "30-50mm/h",
            "螢幕規格": "16K Mono LCD",
            "光源": "UV LED Array",
        },
        "stock_quantity": 15,
        "featured": True,
        "brand": "Phrozen 普羅森",
    },
    {
        "id": "2",
        "name": "Phrozen Arco 高階 FDM 3D 列印機套組",
        "description": "現貨熱銷｜大、快、穩：300×300×300mm列印體積、最高1,000mm/s。Chroma Kit四色列印＋智慧烘料系統。",
        "price": 1299.99,
        "category_id": "1",
        "specifications": {
            "列印體積": "300 × 300 × 300 mm",
            "列印速度": "最高 1,000mm/s",
            "線材規格": "1.75mm",
            "噴嘴溫度": "最高280°C",
            "列印平台": "自動調平",
        },
        "stock_quantity": 8,
        "featured": True,
        "brand": "Phrozen 普羅森",
    },
    {
        "id": "3",
        "name": "Formlabs Form 3+ 光固化3D列印機",
        "description": "專業級SLA 3D列印機，提供無與倫比的列印品質和可靠性。適合原型製作、小批量生產和專業應用。",
        "price": 2499.99,
        "category_id": "1",
        "specifications": {
            "列印體積": "145 × 145 × 185 mm",
            "層厚精度": "0.025mm",
            "光源": "LED光源陣列",
            "樹脂槽": "可重複使用LT樹脂槽",
        },
        "stock_quantity": 5,
        "brand": "Formlabs 風雷",
    },
    {
        "id": "4",
        "name": "Bambu Lab X1-Carbon 多色3D列印機",
        "description": "創新的多色列印技術，自動換色系統，適合複雜多彩列印需求。",
        "price": 1199.99,
        "category_id": "1",
        "specifications": {
            "列印體積": "256 × 256 × 256 mm",
            "自動換色": "支援16色自動切換",
            "列印速度": "最高500mm/s",
            "智慧功能": "AI故障檢測",
        },
        "stock_quantity": 12,
        "brand": "Bambu Lab 拓竹",
    },
    # printing materials
    {
        "id": "5",
        "name": "Phrozen 普羅森 標準樹脂 - 透明",
        "description": "高品質標準樹脂，適合各種列印需求。低氣味配方，列印效果優異。",
        "price": 29.99,
        "original_price": 34.99,
        "category_id": "2",
        "specifications": {"容量": "1000ml", "顏色": "透明", "固化時間": "8-12秒", "黏度": "200-300 cPs"},
        "stock_quantity": 50,
        "featured": True,
        "brand": "Phrozen 普羅森",
    },
    {
        "id": "6",
        "name": "Phrozen 普羅森 高韌性樹脂",
        "description": "專為需要高強度和韌性的應用設計，適合功能性零件列印。",
        "price": 39.99,
        "category_id": "2",
        "specifications": {"容量": "1000ml", "特性": "高韌性、抗衝擊", "固化時間": "10-15秒", "顏色": "灰色"},
        "stock_quantity": 30,
        "brand": "Phrozen 普羅森",
    },
    {
        "id": "7",
        "name": "Formlabs Grey Resin V4 標準樹脂",
        "description": "Formlabs最受歡迎的樹脂，提供優秀的細節表現和表面光潔度。",
        "price": 35.99,
        "category_id": "2",
        "specifications": {"容量": "1L", "顏色": "灰色", "拉伸強度": "65 MPa", "適用機型": "Form 2, Form 3/3B/3+"},
        "stock_quantity": 25,
        "brand": "Formlabs 風雷",
    },
    {
        "id": "8",
        "name": "PLA+ 高品質線材 - 多色可選",
        "description": "優質PLA+線材，列印穩定，顏色豐富。適合初學者和專業用戶。",
        "price": 24.99,
        "category_id": "2",
        "specifications": {"重量": "1KG", "直徑": "1.75mm", "列印溫度": "210-230°C", "平台溫度": "60-80°C"},
        "stock_quantity": 100,
        "featured": True,
        "brand": "Enlighten 陽明",
    },
    {
        "id": "9",
        "name": "PETG 透明線材",
        "description": "高透明度PETG線材，化學穩定性好，適合製作透明零件。",
        "price": 32.99,
        "category_id": "2",
        "specifications": {"重量": "1KG", "直徑": "1.75mm", "透明度": "高透明", "列印溫度": "230-250°C"},
        "stock_quantity": 40,
        "brand": "Pancolour 磐采",
    },
    {
        "id": "10",
        "name": "水溶性支撐材料 PVA",
        "description": "水溶性支撐材料，完美適合複雜結構列印，支撐易於去除。",
        "price": 39.99,
        "category_id": "2",
        "specifications": {"重量": "0.5KG", "直徑": "1.75mm", "溶解": "水溶性", "列印溫度": "180-200°C"},
        "stock_quantity": 20,
        "brand": "Pancolour 磐采",
    },
    {
        "id": "11",
        "name": "專業樹脂清洗劑",
        "description": "專為樹脂3D列印設計的清洗劑，快速去除未固化樹脂。",
        "price": 19.99,
        "category_id": "2",
        "specifications": {"容量": "1L", "成分": "異丙醇95%", "用途": "樹脂清洗", "安全性": "低毒環保配方"},
        "stock_quantity": 60,
        "brand": "Enlighten 陽明",
    },
    # post-processing
    {
        "id": "12",
        "name": "專業UV固化清洗工作站",
        "description": "二合一設計，同時具備清洗和UV固化功能。提升後處理效率。",
        "price": 299.99,
        "original_price": 349.99,
        "category_id": "3",
        "specifications": {"UV功率": "40W", "清洗容量": "2L", "固化時間": "可調1-60分鐘", "轉盤": "360度旋轉"},
        "stock_quantity": 15,
        "featured": True,
        "brand": "Generic",
    },
    {
        "id": "13",
        "name": "空氣清淨過濾系統",
        "description": "專業級空氣淨化設備，有效過濾樹脂異味和有害氣體。",
        "price": 399.99,
        "category_id": "3",
        "specifications": {"過濾效率": "99.97%", "適用面積": "20-30平方米", "噪音": "<45dB", "濾網": "HEPA+活性碳"},
        "stock_quantity": 10,
        "brand": "Generic",
    },
    # 3d scanners
    {
        "id": "14",
        "name": "Shining3D EinScan-SP 桌面型3D掃描器",
        "description": "高精度桌面型3D掃描器，適合小到中型物件的快速掃描。",
        "price": 2999.99,
        "category_id": "4",
        "specifications": {"掃描精度": "0.1mm", "掃描速度": "1.5秒/次", "掃描體積": "最大300×300×300mm", "紋理掃描": "支援"},
        "stock_quantity": 3,
        "brand": "Shining3D 先臨三維",
    },
    {
        "id": "15",
        "name": "CREALITY CR-Scan Lizard 手持式3D掃描器",
        "description": "便攜式手持3D掃描器，操作簡單，適合快速建模需求。",
        "price": 799.99,
        "category_id": "4",
        "specifications": {"掃描精度": "0.1mm", "掃描範圍": "150×150×150mm", "重量": "105g", "連接": "USB-C"},
        "stock_quantity": 8,
        "brand": "CREALITY 創想",
    },
    # laser cutting
    {
        "id": "16",
        "name": "Cubiio2 便攜式雷射雕刻機",
        "description": "輕巧便攜的雷射雕刻機，支援多種材料雕刻切割。",
        "price": 599.99,
        "category_id": "5",
        "specifications": {"雷射功率": "5.5W", "雕刻面積": "100×100mm", "重量": "1.2KG", "連接方式": "WiFi + USB"},
        "stock_quantity": 12,
        "brand": "Cubiio",
    },
]


def _build_products() -> List[Product]:
    out = []
    for i, row in enumerate(SEED_PRODUCTS):
        stock = int(row.get("stock_quantity", 0))
        out.append(
            Product(
                id=row["id"],
                name=row["name"],
                description=row["description"],
                price=float(row["price"]),
                original_price=row.get("original_price"),
                currency="USD",
                category_id=row["category_id"],
                category=_CATEGORY_LABELS[row["category_id"]],
                brand=row["brand"],
                images=[_IMAGES[i % len(_IMAGES)]],
                specifications=dict(row.get("specifications") or {}),
                in_stock=stock > 0,
                stock_quantity=stock,
                featured=bool(row.get("featured", False)),
            )
        )
    return out


PRODUCTS: List[Product] = _build_products()
FEATURED_PRODUCTS: List[Product] = [p for p in PRODUCTS if p.featured]

CATEGORIES: List[Category] = [
    replace(c, product_count=sum(1 for p in PRODUCTS if p.category_id == c.id)) for c in _CATEGORY_ROWS
]

PROMOTIONS: List[Promotion] = [
    Promotion(
        id="1",
        title="Phrozen樹脂3件88折",
        description="購買任意3件Phrozen樹脂產品，享受88折優惠",
        discount=12,
        valid_until="2024-12-31",
        applicable_product_ids=[p.id for p in PRODUCTS if "Phrozen" in p.brand and p.category_id == "2"],
    ),
    Promotion(
        id="2",
        title="現貨優惠活動",
        description="指定商品現貨供應，立即發貨",
        discount=0,
        valid_until="2024-10-31",
        applicable_product_ids=[p.id for p in PRODUCTS if p.stock_quantity > 10],
    ),
]

# order history shown to every signed-in account
SEED_ORDERS = [
    {
        "order_number": "BIZOE-20240115-001",
        "order_date": "2024-01-15",
        "status": "delivered",
        "payment_method": "credit_card",
        "items": [("5", 2), ("8", 1)],
    },
    {
        "order_number": "BIZOE-20240110-002",
        "order_date": "2024-01-10",
        "status": "shipped",
        "payment_method": "paypal",
        "items": [("2", 1), ("11", 2)],
    },
    {
        "order_number": "BIZOE-20240105-003",
        "order_date": "2024-01-05",
        "status": "processing",
        "payment_method": "credit_card",
        "items": [("12", 1)],
    },
]

_BY_ID: Dict[str, Product] = {p.id: p for p in PRODUCTS}


def find_product(product_id: str) -> Optional[Product]:
    return _BY_ID.get(product_id)
