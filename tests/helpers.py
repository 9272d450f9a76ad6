"""
CSV builders shared by the test modules.
"""
import csv
import io

HEADER = ["Date", "Time", "TimeZone", "Name", "Type", "Status", "Currency", "Gross", "Fee", "Net"]


def export_row(date, name, type_, status, currency, amount):
    """One row in the export's column layout."""
    return [date, "10:00:00", "EST", name, type_, status, currency, amount, "0.00", amount]


def csv_text(rows, header=HEADER):
    """Render a header plus rows as quoted CSV text."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue()
