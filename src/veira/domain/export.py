"""Document exports: sales ledger CSV, tax summary and audit pack.

Output depends only on the inputs (including ``generated_at``), so the same
snapshot always produces the same bytes.
"""

import csv
from datetime import date, datetime
from decimal import Decimal
from io import StringIO
from typing import Sequence

from veira.domain.entities import BusinessSettings, Transaction
from veira.domain.reporting import ReportingService, newest_first
from veira.utils.money import format_amount
from veira.utils.timestamps import to_iso, utc_day

SALES_LEDGER_COLUMNS = (
    "Date",
    "Sale ID",
    "Revenue",
    "Tax",
    "Cost",
    "Profit",
    "Method",
    "Flagged",
)

AUDIT_PACK_DAYS = 7


def _format_generated_at(generated_at: datetime) -> str:
    return generated_at.replace(microsecond=0).isoformat()


def sales_ledger_rows(transactions: Sequence[Transaction]) -> list[list[str]]:
    """Rows for the sales ledger CSV, newest first.

    Profit is revenue less VAT and cost of goods.
    """
    rows = []
    for txn in newest_first(transactions):
        profit = txn.total - txn.vat - txn.cost_of_goods
        rows.append(
            [
                utc_day(txn.timestamp).isoformat(),
                txn.id,
                format_amount(txn.total),
                format_amount(txn.vat),
                format_amount(txn.cost_of_goods),
                format_amount(profit),
                txn.payment_method.value,
                "YES" if txn.is_anomaly else "NO",
            ]
        )
    return rows


def sales_ledger_csv(transactions: Sequence[Transaction]) -> str:
    """Render the sales ledger as CSV text with a header row."""
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(SALES_LEDGER_COLUMNS)
    writer.writerows(sales_ledger_rows(transactions))
    return buffer.getvalue()


def sales_ledger_filename(day: date) -> str:
    return f"sales_report_{day.isoformat()}.csv"


def tax_summary_text(
    transactions: Sequence[Transaction], kra_pin: str, generated_at: datetime
) -> str:
    """Render the plain-text VAT summary submitted for e-TIMS."""
    ordered = newest_first(transactions)
    total_vat = sum((t.vat for t in ordered), Decimal("0"))

    lines = [
        "TAX REPORT (E-TIMS)",
        f"KRA PIN: {kra_pin}",
        f"Created: {_format_generated_at(generated_at)}",
        "",
        "Summary:",
        f"Total Sales Sent: {len(ordered)}",
        f"Total Tax Collected (VAT): KES {format_amount(total_vat)}",
        "",
        "Sales History:",
    ]
    for txn in ordered:
        lines.append(
            f"{txn.id} | {to_iso(txn.timestamp)} | Tax: KES {format_amount(txn.vat)} | Status: SENT"
        )
    return "\n".join(lines) + "\n"


def tax_summary_filename(kra_pin: str) -> str:
    return f"tax_report_{kra_pin}.txt"


def audit_pack_csv(
    report: ReportingService,
    settings: BusinessSettings,
    generated_at: datetime,
    today: date,
    days: int = AUDIT_PACK_DAYS,
) -> str:
    """Render the business report: money summary, daily sales, flagged sales.

    Args:
        report: Snapshot to report on
        settings: Business settings (name, role)
        generated_at: Timestamp printed in the header
        today: Last day of the daily sales section (UTC)
        days: Length of the daily sales section

    Returns:
        CSV-style text
    """
    totals = report.totals()
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow([f"BUSINESS REPORT - {settings.business_name}"])
    writer.writerow([f"Created: {_format_generated_at(generated_at)}"])
    writer.writerow([f"Job Role: {settings.user_role.value}"])
    writer.writerow([])

    writer.writerow(["--- MONEY SUMMARY ---"])
    writer.writerow(["Total Sales", f"KES {format_amount(totals.revenue)}"])
    writer.writerow(["Cost of Goods", f"KES {format_amount(totals.cost_of_goods)}"])
    writer.writerow(["Gross Profit", f"KES {format_amount(totals.gross_profit)}"])
    writer.writerow(["Profit Margin", f"{format_amount(totals.margin)}%"])
    writer.writerow(["Tax Collected (VAT)", f"KES {format_amount(totals.tax_collected)}"])
    writer.writerow(["Stock Value", f"KES {format_amount(report.inventory_valuation())}"])
    writer.writerow([])

    writer.writerow([f"--- DAILY SALES (LAST {days} DAYS) ---"])
    writer.writerow(["Date", "Sales", "Profit"])
    for day in report.daily_sales(days, today=today):
        writer.writerow(
            [day.day.isoformat(), format_amount(day.revenue), format_amount(day.profit)]
        )
    writer.writerow([])

    writer.writerow(["--- FLAGGED PROBLEMS ---"])
    anomalies = report.anomalies()
    if not anomalies:
        writer.writerow(["No problems found."])
    else:
        writer.writerow(["Sale ID", "Time", "Reason", "Amount"])
        for txn in anomalies:
            writer.writerow(
                [
                    txn.id,
                    to_iso(txn.timestamp),
                    txn.anomaly_reason,
                    f"KES {format_amount(txn.total)}",
                ]
            )

    return buffer.getvalue()


def audit_pack_filename(generated_at: datetime) -> str:
    return f"veira_business_report_{generated_at.strftime('%Y%m%dT%H%M%S')}.csv"
