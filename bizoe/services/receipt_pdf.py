from __future__ import annotations

from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.pdfgen import canvas

from bizoe.config import Settings, settings
from bizoe.constants import PAYMENT_METHODS
from bizoe.store.models import Order

# product names are Traditional Chinese; Helvetica has no glyphs for them
CJK_FONT = "MSung-Light"
pdfmetrics.registerFont(UnicodeCIDFont(CJK_FONT))


def receipt_filename(order: Order) -> str:
    return f"receipt_{order.order_number}.pdf"


def render_receipt_pdf(order: Order, cfg: Settings = settings) -> bytes:
    """Render the receipt in memory; nothing is written to disk."""
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    w, h = A4

    y = h - 50
    c.setFont("Helvetica-Bold", 14)
    c.drawString(40, y, f"BIZOE RECEIPT #{order.order_number}")
    y -= 20

    c.setFont("Helvetica", 11)
    c.drawString(40, y, f"Date: {order.order_date}")
    y -= 16
    c.drawString(40, y, f"Payment: {PAYMENT_METHODS.get(order.payment_method, order.payment_method)}")
    y -= 16
    c.drawString(40, y, f"Status: {order.status}")
    y -= 16
    if order.shipping_address:
        a = order.shipping_address
        c.setFont(CJK_FONT, 11)
        c.drawString(40, y, f"Ship to: {a.first_name} {a.last_name}, {a.address}, {a.city} {a.zip_code}"[:90])
        y -= 16
    y -= 8

    # header
    c.setFont("Helvetica-Bold", 10)
    c.drawString(40, y, "Item")
    c.drawString(310, y, "Qty")
    c.drawString(360, y, "Price")
    c.drawString(440, y, "Total")
    y -= 10
    c.line(40, y, 550, y)
    y -= 16

    for it in order.items:
        c.setFont(CJK_FONT, 10)
        c.drawString(40, y, it.name[:30])
        c.setFont("Helvetica", 10)
        c.drawRightString(340, y, str(it.quantity))
        c.drawRightString(420, y, f"{it.price:.{cfg.decimals}f}")
        c.drawRightString(550, y, f"{it.total:.{cfg.decimals}f}")
        y -= 14
        if y < 120:
            c.showPage()
            y = h - 50

    y -= 10
    c.line(40, y, 550, y)
    y -= 16
    c.setFont("Helvetica", 10)
    rows = [
        ("Subtotal", order.subtotal),
        ("Shipping", order.shipping),
        ("Tax", order.tax),
    ]
    if order.discount:
        rows.append((f"Discount ({order.promo_code})", -order.discount))
    for label, value in rows:
        c.drawString(360, y, label)
        c.drawRightString(550, y, f"{value:.{cfg.decimals}f}")
        y -= 14

    y -= 6
    c.setFont("Helvetica-Bold", 12)
    c.drawRightString(550, y, f"TOTAL: {order.total:.{cfg.decimals}f} {cfg.currency}")

    c.save()
    return buf.getvalue()
