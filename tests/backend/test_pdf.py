"""
Tests for order PDF rendering.
"""

import re

import pytest


def page_count(content: bytes) -> int:
    return len(re.findall(rb"/Type /Page\b", content))


class TestPdfFilename:
    """Tests for pdf_filename."""

    def test_numbered_order(self):
        from app.services.pdf_service import pdf_filename

        assert pdf_filename("1387") == "Pedido-1387.pdf"
        assert pdf_filename(" 1388 ") == "Pedido-1388.pdf"

    def test_unnumbered_order(self):
        from app.services.pdf_service import pdf_filename

        assert pdf_filename("") == "Pedido-Novo.pdf"
        assert pdf_filename("   ") == "Pedido-Novo.pdf"


class TestRenderOrderPdf:
    """Tests for render_order_pdf."""

    def test_filled_order_renders_pdf(self, order_payload):
        from app.models.order import OrderFields
        from app.services.pdf_service import render_order_pdf

        content = render_order_pdf(OrderFields(**{**order_payload, "order_number": "1387"}))

        assert content.startswith(b"%PDF")
        assert content.rstrip().endswith(b"%%EOF")

    def test_empty_order_renders_pdf(self):
        from app.models.order import OrderFields
        from app.services.pdf_service import render_order_pdf

        assert render_order_pdf(OrderFields()).startswith(b"%PDF")

    @pytest.mark.parametrize("text", ["<b>Bordados & Cia</b>", "Linha 1\nLinha 2\n\nLinha 4"])
    def test_markup_and_newlines_in_fields_are_safe(self, order_payload, text):
        from app.models.order import OrderFields
        from app.services.pdf_service import render_order_pdf

        order = OrderFields(**{**order_payload, "client_company_name": text, "notes": text})

        assert render_order_pdf(order).startswith(b"%PDF")

    def test_long_description_and_notes_continue_on_next_page(self, order_payload):
        from app.models.order import OrderFields
        from app.services.pdf_service import render_order_pdf

        long_text = "\n".join(f"Item {i}: bastidor tubular" for i in range(120))
        order = OrderFields(**{
            **order_payload,
            "order_number": "1400",
            "product_description": long_text,
            "notes": long_text,
        })

        content = render_order_pdf(order)

        assert content.startswith(b"%PDF")
        assert page_count(content) > 1

    def test_short_order_fits_one_page(self, order_payload):
        from app.models.order import OrderFields
        from app.services.pdf_service import render_order_pdf

        content = render_order_pdf(OrderFields(**{**order_payload, "order_number": "1387"}))

        assert page_count(content) == 1
