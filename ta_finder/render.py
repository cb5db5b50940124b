"""
Card rendering.

A card is the text shown for one applicant and also the text the search box
is matched against, so labels and padding here change search results. Keep
the output byte-for-byte stable.
"""

from __future__ import annotations

from ta_finder.schema import Record

BULLET = "• "
LABEL_WIDTH = 16
ITEM_INDENT = " " * 17

# (record field, label) in display order. qualified_for and other are
# rendered separately after these.
FIELD_LABELS: tuple[tuple[str, str], ...] = (
    ("first_name",           "First Name"),
    ("last_name",            "Last Name"),
    ("candidate_id",         "Student ID"),
    ("candidate_email",      "Email"),
    ("phone_no",             "Phone Number"),
    ("student_status",       "Student Status"),
    ("degree",               "Degree Program"),
    ("date_program_entered", "Program Entry"),
    ("gpa",                  "GPA"),
    ("credit_hours",         "Credit Hours"),
    ("currently_working",    "Working?"),
)


def _line(label: str, value: str) -> str:
    return f"{BULLET}{(label + ':').ljust(LABEL_WIDTH)}{value}\n"


def render(record: Record) -> str:
    parts = [f"{record.index}.\n"]

    for field_name, label in FIELD_LABELS:
        value = getattr(record, field_name)
        if value != "":
            parts.append(_line(label, value))

    if record.qualified_for != "":
        parts.append(f"{BULLET}Qualified For:\n")
        for item in record.qualified_for.split("\n"):
            parts.append(f"{ITEM_INDENT}{BULLET}{item.strip()}\n")

    if record.other != "":
        parts.append(_line("Other", record.other.strip()))

    return "".join(parts)


def render_sentinel() -> str:
    """The spacer card appended after every ingested batch is blank."""
    return ""
