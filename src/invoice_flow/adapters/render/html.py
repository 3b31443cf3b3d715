"""HTML renderer using Jinja2."""

import logging
from pathlib import Path

from jinja2 import Environment, select_autoescape

from ...domain.abn import format_abn
from ...domain.models import BusinessProfile, InvoiceNormalized
from ...domain.money import format_currency
from ...ports.renderer import RendererPort
from .logo import logo_data_uri

logger = logging.getLogger(__name__)

TEMPLATE = """\
<!DOCTYPE html>
<html lang="en-AU">
<head>
<meta charset="utf-8">
<title>{{ doc.invoiceLabel }} {{ doc.invoiceNumber }}</title>
<style>
  body { font-family: Helvetica, Arial, sans-serif; color: #1f2933; margin: 40px; }
  header { display: flex; justify-content: space-between; border-bottom: 3px solid {{ accent }}; }
  h1 { color: {{ accent }}; margin: 0 0 8px; letter-spacing: 0.05em; }
  table { width: 100%; border-collapse: collapse; margin-top: 24px; }
  th { text-align: left; background: {{ accent }}; color: #fff; padding: 6px; }
  td { padding: 6px; border-bottom: 1px solid #e4e7eb; }
  .num { text-align: right; }
  .totals td { border: none; }
  .totals .grand td { font-weight: bold; border-top: 2px solid #1f2933; }
  footer { margin-top: 32px; font-size: 0.85em; color: #52606d; }
  .brand-logo { max-height: 52px; margin-bottom: 9px; }
</style>
</head>
<body>
<header>
  <div>
    {% if logo %}<img class="brand-logo" src="{{ logo }}" alt="Business logo"><br>{% endif %}
    <h1>{{ doc.invoiceLabel | upper }}</h1>
    <div>{{ doc.invoiceNumber }}</div>
  </div>
  <div class="num">
    <strong>{{ profile.display_name }}</strong><br>
    {% if profile.business_name %}{{ profile.legal_name }}<br>{% endif %}
    {% if abn %}ABN {{ abn }}<br>{% endif %}
    {{ profile.address }}<br>
    {{ profile.email }} &middot; {{ profile.phone }}
    {% if profile.website %}<br>{{ profile.website }}{% endif %}
  </div>
</header>

<section>
  <p>
    <strong>Issue Date:</strong> {{ doc.issueDate }}<br>
    <strong>{{ doc.dateLabel }}:</strong> {{ doc.dateValue }}
  </p>
  <p>
    <strong>{{ "Prepared for" if doc.documentType == "quote" else "Bill to" }}</strong><br>
    {{ doc.client.name }}
    {% if doc.client.address %}<br>{{ doc.client.address }}{% endif %}
    {% if doc.client.email %}<br>{{ doc.client.email }}{% endif %}
    {% if doc.client.phone %}<br>{{ doc.client.phone }}{% endif %}
    {% if doc.client.abn %}<br>ABN {{ doc.client.abn }}{% endif %}
  </p>
  {% if doc.session %}
  <p>
    {% if doc.session.type %}<strong>Session:</strong> {{ doc.session.type }}<br>{% endif %}
    {% if doc.session.shootDate %}<strong>Shoot Date:</strong> {{ doc.session.shootDate }}<br>{% endif %}
    {% if doc.session.location %}<strong>Location:</strong> {{ doc.session.location }}{% endif %}
  </p>
  {% endif %}
</section>

<table>
  <tr><th>Description</th><th class="num">Qty</th><th class="num">Unit Price</th><th class="num">Amount</th></tr>
  {% for item in doc.lineItems %}
  <tr>
    <td>{{ item.description }}{% if doc.gstEnabled and not item.taxable %} (GST-free){% endif %}</td>
    <td class="num">{{ "%g" | format(item.quantity) }}</td>
    <td class="num">{{ money(item.unitPrice) }}</td>
    <td class="num">{{ money(item.lineTotal) }}</td>
  </tr>
  {% endfor %}
</table>

<table class="totals">
  <tr><td class="num">Subtotal</td><td class="num">{{ money(doc.subtotal) }}</td></tr>
  {% if doc.gstEnabled %}
  <tr><td class="num">GST included</td><td class="num">{{ money(doc.gstTotal) }}</td></tr>
  {% endif %}
  <tr class="grand"><td class="num">Total {{ doc.currency }}</td><td class="num">{{ money(doc.total) }}</td></tr>
</table>

<footer>
  {% if doc.documentType == "invoice" %}
  <p>
    <strong>Payment terms:</strong> {{ doc.termsDays }} days<br>
    {{ profile.payment.bank_name }} &middot; {{ profile.payment.account_name }}<br>
    BSB {{ profile.payment.bsb }} &middot; Account {{ profile.payment.account_number }}<br>
    PayID {{ profile.payment.pay_id }}<br>
    {{ profile.payment.payment_reference_label or "Reference" }}: {{ doc.paymentReference }}
  </p>
  {% endif %}
  {% if doc.notes %}<p>{{ doc.notes }}</p>{% endif %}
  {% if profile.notes_footer %}<p>{{ profile.notes_footer }}</p>{% endif %}
</footer>
</body>
</html>
"""

ACCENTS = {"invoice": "#1f4e79", "quote": "#7a4f01"}

_env = Environment(autoescape=select_autoescape(default=True, default_for_string=True))
_template = _env.from_string(TEMPLATE)


def render_html(profile: BusinessProfile, normalized: InvoiceNormalized) -> str:
    """Render the document as a standalone HTML page."""

    def money(amount: float) -> str:
        return format_currency(amount, normalized.currency)

    return _template.render(
        doc=normalized.to_json_dict(),
        profile=profile,
        abn=format_abn(profile.abn),
        logo=logo_data_uri(profile.logo_path),
        accent=ACCENTS[normalized.document_type],
        money=money,
    )


class HtmlRenderer(RendererPort):
    """Renderer producing the HTML preview page."""

    suffix = ".preview.html"

    def render(
        self, profile: BusinessProfile, normalized: InvoiceNormalized, path: Path
    ) -> Path:
        path.write_text(render_html(profile, normalized), encoding="utf-8")
        logger.info(f"Preview HTML written: {path.name}")
        return path
