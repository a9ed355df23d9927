"""Generate spending report PDFs for the dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from io import BytesIO
from datetime import date

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import Image, PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle


_TRANSACTIONS_DISPLAY_LIMIT = 250
_CURRENCY_SYMBOLS = {"ZAR": "R"}


@dataclass(slots=True)
class SpendingCategoryRow:
    """Aggregated spending by category."""

    name: str
    amount: Decimal


@dataclass(slots=True)
class SpendingTrendRow:
    month: str
    total: Decimal
    count: int


@dataclass(slots=True)
class SpendingGoalRow:
    category: str
    budget: Decimal
    spent: Decimal
    percentage_used: float
    status: str


@dataclass(slots=True)
class SpendingTransactionRow:
    """Ledger row for the detail page."""

    date: str
    merchant: str
    category: str
    amount: Decimal


@dataclass(slots=True)
class SpendingReportData:
    """Input payload for spending report rendering."""

    customer_name: str
    period_label: str
    currency: str
    total: Decimal
    count: int
    average: Decimal
    top_category: str
    spent_change: float
    categories: list[SpendingCategoryRow] = field(default_factory=list)
    trends: list[SpendingTrendRow] = field(default_factory=list)
    goals: list[SpendingGoalRow] = field(default_factory=list)
    transactions: list[SpendingTransactionRow] = field(default_factory=list)
    transactions_truncated: bool = False


def format_amount(value: Decimal, currency: str) -> str:
    """Format an amount the way the dashboard cards do, e.g. ``R 1,234.50``."""

    symbol = _CURRENCY_SYMBOLS.get(currency, currency)
    return f"{symbol} {value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):,.2f}"


def format_month(value: str) -> str:
    """Turn ``2024-03`` into ``Mar 2024``."""

    year, month = value.split("-", maxsplit=1)
    return date(int(year), int(month), 1).strftime("%b %Y")


def _format_change(value: float) -> str:
    return f"{value:+.1f}% vs previous period"


def _figure_to_png(fig) -> bytes:
    image_buffer = BytesIO()
    fig.savefig(image_buffer, format="png", bbox_inches="tight")
    plt.close(fig)
    image_buffer.seek(0)
    return image_buffer.read()


def _build_trend_chart(trends: list[SpendingTrendRow]) -> bytes:
    labels = [format_month(row.month) for row in trends]
    values = [float(row.total) for row in trends]

    fig, ax = plt.subplots(figsize=(7.0, 3.0), dpi=140)
    ax.bar(labels, values, color="#45B7D1")
    ax.set_title("Monthly spending")
    ax.tick_params(axis="x", labelrotation=45, labelsize=7)
    ax.tick_params(axis="y", labelsize=7)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    return _figure_to_png(fig)


class _FooterCanvas(Canvas):
    def __init__(self, *args, generated_on: str, **kwargs):
        super().__init__(*args, **kwargs)
        self._generated_on = generated_on
        self._saved_page_states: list[dict] = []

    def showPage(self) -> None:  # noqa: N802 (ReportLab API)
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self) -> None:
        page_count = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(page_count=page_count)
            super().showPage()
        super().save()

    def _draw_footer(self, *, page_count: int) -> None:
        self.setFont("Helvetica", 8)
        self.setFillColor(colors.HexColor("#8A8F98"))
        self.drawString(20 * mm, 10 * mm, f"Generated on {self._generated_on}")
        self.drawRightString(190 * mm, 10 * mm, f"Page {self._pageNumber}/{page_count}")


def _striped_table_style(row_count: int, *, right_align_from: int) -> TableStyle:
    table_style: list[tuple] = [
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#EEF1F4")),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#D7DCE2")),
        ("ALIGN", (right_align_from, 1), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]
    for row_index in range(1, row_count):
        if row_index % 2 == 0:
            table_style.append(("BACKGROUND", (0, row_index), (-1, row_index), colors.HexColor("#FAFBFC")))
    return TableStyle(table_style)


def _build_kpi_cards(data: SpendingReportData) -> Table:
    styles = getSampleStyleSheet()
    card_style = ParagraphStyle(
        name="KpiCard",
        parent=styles["BodyText"],
        fontSize=10,
        leading=14,
        textColor=colors.HexColor("#1F2937"),
    )
    cells = [
        [
            Paragraph(
                "<b>Total spent</b><br/>"
                + format_amount(data.total, data.currency)
                + '<br/><font size="7">'
                + _format_change(data.spent_change)
                + "</font>",
                card_style,
            ),
            Paragraph("<b>Transactions</b><br/>" + f"{data.count:,}", card_style),
            Paragraph("<b>Avg. transaction</b><br/>" + format_amount(data.average, data.currency), card_style),
            Paragraph("<b>Top category</b><br/>" + data.top_category, card_style),
        ]
    ]
    table = Table(cells, colWidths=[50 * mm, 40 * mm, 42 * mm, 42 * mm])
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor("#F4F6F8")),
                ("BOX", (0, 0), (-1, -1), 0.6, colors.HexColor("#DDE2E8")),
                ("INNERGRID", (0, 0), (-1, -1), 0.4, colors.HexColor("#DDE2E8")),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("LEFTPADDING", (0, 0), (-1, -1), 8),
                ("RIGHTPADDING", (0, 0), (-1, -1), 8),
                ("TOPPADDING", (0, 0), (-1, -1), 8),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
            ]
        )
    )
    return table


def _build_categories_table(data: SpendingReportData) -> Table:
    total_categories = sum((row.amount for row in data.categories), Decimal("0"))
    table_data = [["Category", "Amount", "Share (%)"]]
    for row in sorted(data.categories, key=lambda row: row.amount, reverse=True):
        ratio = (row.amount / total_categories * Decimal("100")) if total_categories > 0 else Decimal("0")
        table_data.append(
            [
                row.name,
                format_amount(row.amount, data.currency),
                f"{ratio.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)}%",
            ]
        )
    table = Table(table_data, colWidths=[90 * mm, 50 * mm, 20 * mm], repeatRows=1)
    table.setStyle(_striped_table_style(len(table_data), right_align_from=1))
    return table


def _build_goals_table(data: SpendingReportData) -> Table:
    status_labels = {"on_track": "On Track", "warning": "Warning", "exceeded": "Exceeded"}
    table_data = [["Category", "Spent", "Budget", "Used", "Status"]]
    for row in data.goals:
        table_data.append(
            [
                row.category,
                format_amount(row.spent, data.currency),
                format_amount(row.budget, data.currency),
                f"{row.percentage_used:.0f}%",
                status_labels.get(row.status, row.status),
            ]
        )
    table = Table(table_data, colWidths=[48 * mm, 34 * mm, 34 * mm, 20 * mm, 30 * mm], repeatRows=1)
    table.setStyle(_striped_table_style(len(table_data), right_align_from=1))
    return table


def _build_transactions_table(data: SpendingReportData) -> Table:
    def _truncate_text(value: str, max_length: int = 36) -> str:
        if len(value) <= max_length:
            return value
        return value[: max_length - 1].rstrip() + "…"

    table_data = [["Date", "Merchant", "Category", "Amount"]]
    if not data.transactions:
        table_data.append(["-", "No transactions", "-", format_amount(Decimal("0"), data.currency)])
    else:
        for row in data.transactions[:_TRANSACTIONS_DISPLAY_LIMIT]:
            table_data.append(
                [
                    row.date,
                    _truncate_text(row.merchant),
                    row.category,
                    format_amount(row.amount, data.currency),
                ]
            )

    table = Table(table_data, colWidths=[28 * mm, 62 * mm, 54 * mm, 34 * mm], repeatRows=1)
    table.setStyle(_striped_table_style(len(table_data), right_align_from=3))
    return table


def generate_spending_report_pdf(data: SpendingReportData) -> bytes:
    """Render the dashboard overview and the period ledger as a PDF."""

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=16 * mm,
        leftMargin=16 * mm,
        topMargin=16 * mm,
        bottomMargin=14 * mm,
        title="Spending report",
    )
    styles = getSampleStyleSheet()
    section_title_style = ParagraphStyle(name="SectionTitle", parent=styles["Heading2"], spaceAfter=4, fontSize=12)

    story = [
        Paragraph("Spending report", styles["Title"]),
        Spacer(1, 1 * mm),
        Paragraph(f"{data.customer_name} · {data.period_label}", styles["BodyText"]),
        Spacer(1, 5 * mm),
        _build_kpi_cards(data),
        Spacer(1, 6 * mm),
        Paragraph("Category breakdown", section_title_style),
        Spacer(1, 1 * mm),
    ]

    if not data.categories:
        story.append(Paragraph("No spending in this period.", styles["BodyText"]))
    else:
        story.append(_build_categories_table(data))

    if data.trends:
        story.append(Spacer(1, 6 * mm))
        story.append(Paragraph("Spending trends", section_title_style))
        story.append(Image(BytesIO(_build_trend_chart(data.trends)), width=170 * mm, height=73 * mm))

    if data.goals:
        story.append(Spacer(1, 6 * mm))
        story.append(Paragraph("Budget goals", section_title_style))
        story.append(_build_goals_table(data))

    story.append(PageBreak())
    story.append(Paragraph("Transactions", styles["Title"]))
    story.append(Spacer(1, 2 * mm))
    story.append(Paragraph(data.period_label, styles["BodyText"]))
    story.append(Spacer(1, 4 * mm))
    if data.transactions_truncated or len(data.transactions) > _TRANSACTIONS_DISPLAY_LIMIT:
        story.append(
            Paragraph(f"List truncated to {_TRANSACTIONS_DISPLAY_LIMIT} transactions.", styles["Italic"])
        )
        story.append(Spacer(1, 2 * mm))
    story.append(_build_transactions_table(data))

    generated_on = date.today().isoformat()
    doc.build(
        story,
        canvasmaker=lambda *args, **kwargs: _FooterCanvas(*args, generated_on=generated_on, **kwargs),
    )
    buffer.seek(0)
    return buffer.read()
