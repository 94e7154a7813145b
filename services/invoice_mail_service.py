from typing import List
from collections import OrderedDict
from html import escape
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from adapters import mail_adapter
from domain.enums import InvoiceRenderMode
from domain.models import Invoice
from domain.schemas.invoice_schemas import SendInvoiceRequest
from repositories import InvoiceRepository, CenterRepository, TemplateAttachmentRepository
from app.exceptions import NotFoundError

logger = logging.getLogger("lodging.invoice_mail")

ATTACHMENT_NAMES = {"fr": "facture", "nl": "factuur", "en": "invoice"}

TITLES = {"fr": "Facture", "nl": "Factuur", "en": "Invoice"}


def _money(value) -> str:
    return f"{(value or 0.0):.2f}"


class InvoiceMailService:
    @staticmethod
    def attachment_name(lang: str) -> str:
        """Name of the invoice attachment, by language prefix"""
        return ATTACHMENT_NAMES.get((lang or "")[:2].lower(), "invoice")

    @staticmethod
    def render_invoice(invoice: Invoice, mode: InvoiceRenderMode, lang: str) -> str:
        """
        Render an invoice as an HTML document.

        simple: one row for the whole invoice
        grouped: one row per sojourn (lines sharing a group name)
        detailed: every line with its quantity, unit price and VAT rate
        """
        title = TITLES.get((lang or "")[:2].lower(), "Invoice")
        customer = invoice.customer.name if invoice.customer else ""
        rows: List[str] = []

        if mode == InvoiceRenderMode.SIMPLE:
            label = invoice.booking.name if invoice.booking and invoice.booking.name else title
            rows.append(
                f"<tr><td>{escape(label)}</td><td>{_money(invoice.total)}</td><td>{_money(invoice.price)}</td></tr>"
            )
        elif mode == InvoiceRenderMode.GROUPED:
            groups: "OrderedDict[str, List[float]]" = OrderedDict()
            for line in invoice.invoice_lines:
                totals = groups.setdefault(line.group_name or line.name, [0.0, 0.0])
                totals[0] += line.total or 0.0
                totals[1] += line.price or 0.0
            for name, (total, price) in groups.items():
                rows.append(
                    f"<tr><td>{escape(name)}</td><td>{_money(total)}</td><td>{_money(price)}</td></tr>"
                )
        else:
            for line in invoice.invoice_lines:
                rows.append(
                    "<tr>"
                    f"<td>{escape(line.name)}</td>"
                    f"<td>{line.qty:g}</td>"
                    f"<td>{_money(line.unit_price)}</td>"
                    f"<td>{line.vat_rate * 100:g}%</td>"
                    f"<td>{_money(line.total)}</td>"
                    f"<td>{_money(line.price)}</td>"
                    "</tr>"
                )

        return (
            "<!DOCTYPE html>"
            f'<html lang="{escape(lang or "en")}"><head><meta charset="utf-8">'
            f"<title>{escape(title)} {escape(invoice.number or '')}</title></head><body>"
            f"<h1>{escape(title)} {escape(invoice.number or '')}</h1>"
            f"<p>{escape(customer)}</p>"
            f"<table>{''.join(rows)}</table>"
            f"<p>{_money(invoice.total)} / {_money(invoice.price)}</p>"
            "</body></html>"
        )

    @staticmethod
    def get_signature(db: Session, center_id: int) -> str:
        """Signature of a center, or an empty string if it cannot be retrieved"""
        try:
            center = CenterRepository(db).get_by_id(center_id)
        except SQLAlchemyError as e:
            logger.warning("Unable to fetch signature of center %s: %s", center_id, e)
            return ""
        if center is None:
            logger.warning("Unable to fetch signature: unknown center %s", center_id)
            return ""
        return center.signature or ""

    @staticmethod
    def send_invoice(db: Session, request: SendInvoiceRequest):
        """
        Send an invoice by e-mail, with the rendered invoice and the requested
        template attachments joined.

        Raises:
            NotFoundError: unknown invoice, or invoice without booking
            ConfigurationError: SMTP is not configured or unreachable
        """
        invoice = InvoiceRepository(db).get_by_id(request.invoice_id)
        if not invoice:
            raise NotFoundError("unknown_invoice", code="unknown_invoice")

        booking = invoice.booking
        if not booking:
            raise NotFoundError("unknown_booking", code="unknown_booking")

        lang = request.lang
        document = InvoiceMailService.render_invoice(invoice, request.mode, lang)
        attachments: List[mail_adapter.Attachment] = [
            (f"{InvoiceMailService.attachment_name(lang)}.html", document.encode("utf-8"), "text/html")
        ]

        body = request.message + InvoiceMailService.get_signature(db, booking.center_id)

        if request.attachments_ids:
            template_attachments = TemplateAttachmentRepository(db).get_with_documents(
                request.attachments_ids
            )
            for attachment in template_attachments:
                if attachment.document is None:
                    logger.debug("Template attachment %s has no document", attachment.id)
                    continue
                attachments.append(
                    (attachment.document.name, attachment.document.data or b"", attachment.document.type)
                )

        msg = mail_adapter.build_message(
            sender=str(request.sender_email),
            recipient=str(request.recipient_email),
            subject=request.title,
            html_body=body,
            attachments=attachments,
        )
        mail_adapter.send(msg)
        logger.info("Invoice %s sent to %s", invoice.id, request.recipient_email)
