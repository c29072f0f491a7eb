"""
Order PDF rendering.

The PDF mirrors the order form: letterhead with the order number block,
then the client, product, commercial and transport sections. It is always
rendered in the light theme on an A4 portrait page.
"""
import io
import logging
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.catalog_data import COMPANY_LETTERHEAD
from app.models.order import OrderFields

logger = logging.getLogger(__name__)

PAGE_MARGIN = 20  # points

BORDER_COLOR = colors.HexColor("#d1d5db")
LABEL_COLOR = colors.HexColor("#4b5563")


def pdf_filename(order_number: str) -> str:
    """File name used for downloads, ``Pedido-Novo.pdf`` for unnumbered orders."""
    return f"Pedido-{order_number.strip() or 'Novo'}.pdf"


def _styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "company": ParagraphStyle("company", parent=base["Heading2"], fontSize=12, spaceAfter=2),
        "letterhead": ParagraphStyle("letterhead", parent=base["Normal"], fontSize=7, leading=9,
                                     textColor=LABEL_COLOR),
        "section": ParagraphStyle("section", parent=base["Heading3"], fontSize=10,
                                  spaceBefore=8, spaceAfter=4),
        "label": ParagraphStyle("label", parent=base["Normal"], fontSize=7, leading=9,
                                textColor=LABEL_COLOR),
        "value": ParagraphStyle("value", parent=base["Normal"], fontSize=9, leading=11),
        "text_area": ParagraphStyle("text_area", parent=base["Normal"], fontSize=9, leading=11,
                                    borderWidth=0.5, borderColor=BORDER_COLOR, borderPadding=4,
                                    leftIndent=4, rightIndent=4, spaceBefore=4, spaceAfter=10),
    }


def _text(value: str, style: ParagraphStyle) -> Paragraph:
    # Newlines from text areas become line breaks
    return Paragraph(escape(value or "").replace("\n", "<br/>"), style)


def _field(label: str, value: str, styles: dict) -> list:
    return [_text(label, styles["label"]), _text(value, styles["value"])]


def _text_area(label: str, value: str, styles: dict) -> list:
    """
    A free-text field as plain paragraphs.

    Table rows cannot break across pages, so long descriptions and notes are
    kept out of the grids and may continue on the next page.
    """
    return [_text(label, styles["label"]), _text(value, styles["text_area"])]


def _grid(rows: list[list[tuple[str, str]]], width: float, styles: dict) -> Table:
    """Lay out labelled fields, one table row per form row, spanning ``width``."""
    columns = max(len(row) for row in rows)
    data = []
    spans = []
    for r, row in enumerate(rows):
        cells = [_field(label, value, styles) for label, value in row]
        # Last field of a short row stretches to the right edge
        cells.extend([""] * (columns - len(cells)))
        if len(row) < columns:
            spans.append(("SPAN", (len(row) - 1, r), (columns - 1, r)))
        data.append(cells)

    table = Table(data, colWidths=[width / columns] * columns)
    table.setStyle(TableStyle([
        ("GRID", (0, 0), (-1, -1), 0.5, BORDER_COLOR),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        *spans,
    ]))
    return table


def render_order_pdf(order: OrderFields) -> bytes:
    """Render an order (saved or not) to PDF bytes."""
    styles = _styles()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=PAGE_MARGIN,
        rightMargin=PAGE_MARGIN,
        topMargin=PAGE_MARGIN,
        bottomMargin=PAGE_MARGIN,
        title=pdf_filename(order.order_number)[:-4],
    )
    width = doc.width

    letterhead = [_text(COMPANY_LETTERHEAD["name"], styles["company"])]
    letterhead += [_text(line, styles["letterhead"]) for line in COMPANY_LETTERHEAD["lines"]]

    order_block = _grid([
        [("Nº Pedido", order.order_number), ("Data", order.order_date)],
        [("Vendedor", order.seller_name)],
        [("Tipo de Venda", order.sale_type)],
    ], width * 0.35, styles)

    header = Table([[letterhead, order_block]], colWidths=[width * 0.65, width * 0.35])
    header.setStyle(TableStyle([
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LEFTPADDING", (0, 0), (0, 0), 0),
        ("RIGHTPADDING", (-1, 0), (-1, 0), 0),
        ("LINEBELOW", (0, 0), (-1, 0), 0.75, BORDER_COLOR),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
    ]))

    story = [
        header,
        _text("Dados do Cliente", styles["section"]),
        _grid([
            [("Razão Social", order.client_company_name)],
            [("CNPJ", order.client_cnpj), ("Inscrição Estadual", order.client_state_registration),
             ("Telefone", order.client_phone)],
            [("Endereço", order.client_address)],
            [("Bairro", order.client_district), ("Cidade", order.client_city),
             ("CEP", order.client_zip_code)],
            [("UF", order.client_state), ("E-mail", order.client_email),
             ("Contato (A/C)", order.client_contact)],
        ], width, styles),
        _text("Produto / Observações", styles["section"]),
        _grid([[("Quantidade", order.product_quantity)]], width, styles),
        Spacer(1, 6),
        *_text_area("Descrição do Produto", order.product_description, styles),
        *_text_area("Observação Geral", order.notes, styles),
        _text("Condições Comerciais", styles["section"]),
        _grid([[("Valor Total (R$)", order.total_value)]], width, styles),
        _text("Transporte", styles["section"]),
        _grid([[("Transportadora", order.carrier)]], width, styles),
        Spacer(1, 12),
    ]

    doc.build(story)
    logger.debug("Rendered PDF for order %s", order.order_number or "(new)")
    return buffer.getvalue()
