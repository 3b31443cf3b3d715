"""PDF renderer using reportlab."""

import logging
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, LETTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ...domain.abn import format_abn
from ...domain.models import BusinessProfile, InvoiceNormalized
from ...domain.money import format_currency
from ...ports.renderer import RendererPort
from .logo import resolve_logo

logger = logging.getLogger(__name__)

PAGE_SIZES = {"A4": A4, "LETTER": LETTER}
ACCENTS = {"invoice": colors.HexColor("#1f4e79"), "quote": colors.HexColor("#7a4f01")}
# reportlab draws raster images only
RASTER_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif"}


def _lines(*values: str | None) -> str:
    return "<br/>".join(escape(v) for v in values if v)


class PdfRenderer(RendererPort):
    """Renderer producing the printable PDF.

    Quotes are laid out with a larger font scale so they read differently
    from invoices at a glance.
    """

    suffix = ".pdf"

    def __init__(self, page_size: str = "A4", quote_scale: float = 1.0) -> None:
        if page_size not in PAGE_SIZES:
            raise ValueError(f"Unsupported page size: {page_size}")
        self.page_size = PAGE_SIZES[page_size]
        self.quote_scale = quote_scale

    def render(
        self, profile: BusinessProfile, normalized: InvoiceNormalized, path: Path
    ) -> Path:
        logger.info(f"Rendering PDF: {path.name}")
        scale = self.quote_scale if normalized.document_type == "quote" else 1.0
        accent = ACCENTS[normalized.document_type]

        def money(amount: float) -> str:
            return format_currency(amount, normalized.currency)

        doc = SimpleDocTemplate(
            str(path),
            pagesize=self.page_size,
            leftMargin=15 * mm,
            rightMargin=15 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=f"{normalized.invoice_label} {normalized.invoice_number}",
            author=profile.legal_name,
            subject=normalized.client.name,
        )

        styles = getSampleStyleSheet()
        body = ParagraphStyle(
            "Body", parent=styles["Normal"], fontSize=9 * scale, leading=12 * scale
        )
        title = ParagraphStyle(
            "DocTitle", parent=styles["Title"], fontSize=20 * scale, textColor=accent
        )

        elements = []
        logo = resolve_logo(profile.logo_path)
        if logo and logo.suffix.lower() in RASTER_SUFFIXES:
            elements.append(
                Image(
                    str(logo), width=40 * mm, height=18 * mm, kind="proportional", hAlign="LEFT"
                )
            )
        elements += [
            Paragraph(escape(normalized.invoice_label.upper()), title),
            Paragraph(escape(normalized.invoice_number), body),
            Spacer(1, 6 * mm),
        ]

        abn = format_abn(profile.abn)
        seller = _lines(
            profile.display_name,
            profile.legal_name if profile.business_name else None,
            f"ABN {abn}" if abn else None,
            profile.address,
            profile.email,
            profile.phone,
        )
        client = normalized.client
        buyer = _lines(
            client.name,
            client.address,
            client.email,
            client.phone,
            f"ABN {client.abn}" if client.abn else None,
        )
        dates = _lines(
            f"Issue Date: {normalized.issue_date}",
            f"{normalized.date_label}: {normalized.date_value}",
        )
        header = Table(
            [[Paragraph(buyer, body), Paragraph(dates, body), Paragraph(seller, body)]],
            colWidths=["34%", "33%", "33%"],
        )
        header.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))
        elements += [header, Spacer(1, 6 * mm)]

        session = normalized.session
        if session and (session.type or session.shoot_date or session.location):
            elements.append(
                Paragraph(
                    _lines(
                        f"Session: {session.type}" if session.type else None,
                        f"Shoot Date: {session.shoot_date}" if session.shoot_date else None,
                        f"Location: {session.location}" if session.location else None,
                    ),
                    body,
                )
            )
            elements.append(Spacer(1, 4 * mm))

        rows = [["Description", "Qty", "Unit Price", "Amount"]]
        for item in normalized.line_items:
            description = item.description
            if normalized.gst_enabled and not item.taxable:
                description += " (GST-free)"
            rows.append(
                [
                    Paragraph(escape(description), body),
                    f"{item.quantity:g}",
                    money(item.unit_price),
                    money(item.line_total),
                ]
            )
        rows.append(["", "", "Subtotal", money(normalized.subtotal)])
        if normalized.gst_enabled:
            rows.append(["", "", "GST included", money(normalized.gst_total)])
        rows.append(["", "", f"Total {normalized.currency}", money(normalized.total)])

        items = Table(rows, colWidths=["55%", "10%", "17%", "18%"], repeatRows=1)
        items.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), accent),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 9 * scale),
                    ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                    ("LINEBELOW", (0, 0), (-1, -2), 0.25, colors.lightgrey),
                    ("FONTNAME", (2, -1), (-1, -1), "Helvetica-Bold"),
                ]
            )
        )
        elements += [items, Spacer(1, 8 * mm)]

        if normalized.document_type == "invoice":
            payment = profile.payment
            elements.append(
                Paragraph(
                    _lines(
                        f"Payment terms: {normalized.terms_days} days",
                        f"{payment.bank_name} - {payment.account_name}",
                        f"BSB {payment.bsb}  Account {payment.account_number}",
                        f"PayID {payment.pay_id}",
                        f"{payment.payment_reference_label or 'Reference'}: "
                        f"{normalized.payment_reference}",
                    ),
                    body,
                )
            )
        if normalized.notes:
            elements += [Spacer(1, 4 * mm), Paragraph(escape(normalized.notes), body)]
        if profile.notes_footer:
            elements += [Spacer(1, 4 * mm), Paragraph(escape(profile.notes_footer), body)]

        doc.build(elements)
        logger.info(f"PDF written: {path.name}")
        return path
