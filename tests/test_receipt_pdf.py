"""PDF receipts."""

from dataclasses import replace

from bizoe.services.orders import MockOrderService
from bizoe.services.receipt_pdf import receipt_filename, render_receipt_pdf
from bizoe.store.models import Address


def _address(first_name: str) -> Address:
    return Address(first_name, "Lin", f"{first_name.lower()}@example.com", "0912345678", "No. 1 Road", "Taipei", "TPE", "100")


def test_receipt_rendered_for_seeded_order(cfg):
    order = MockOrderService(cfg=cfg).list_orders("u1")[0]
    content = render_receipt_pdf(order, cfg)

    assert receipt_filename(order) == f"receipt_{order.order_number}.pdf"
    assert content.startswith(b"%PDF")


class TestSharedOrderNumbers:
    """Seeded order numbers repeat across users; receipts must stay per order."""

    def test_two_users_same_number_render_independently(self, cfg, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        service = MockOrderService(cfg=cfg)
        alice = replace(service.list_orders("alice")[0], shipping_address=_address("Alice"))
        bob = replace(service.list_orders("bob")[0], shipping_address=_address("Bob"))
        assert alice.order_number == bob.order_number

        first = render_receipt_pdf(alice, cfg)
        second = render_receipt_pdf(bob, cfg)

        assert first.startswith(b"%PDF") and second.startswith(b"%PDF")
        # nothing lands on disk for another request to pick up
        assert list(tmp_path.iterdir()) == []
