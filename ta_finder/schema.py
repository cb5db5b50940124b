"""
Canonical applicant record and the CSV → Record mapping.

The survey form exports one column per question. Columns come and go between
form revisions, so every field is optional and defaults to an empty string.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, fields
from typing import Mapping

from ta_finder.errors import RowDecodeError
from ta_finder.normalizer import collapse_list

logger = logging.getLogger(__name__)

OTHER_HEADER = (
    "Other skills or information you would like to provide "
    "(e.g.  Dean's List, Chancellor's List, Prior TA experience, etc.)"
)

# Record field -> source column header. "Email Address" appears twice in the
# export; the later column wins, so both email fields carry its value.
COLUMN_MAP: dict[str, str] = {
    "timestamp":            "Timestamp",
    "submit_email":         "Email Address",
    "first_name":           "First Name",
    "last_name":            "Last Name",
    "candidate_id":         "UNC Charlotte ID (800#) ",
    "candidate_email":      "Email Address",
    "phone_no":             "Phone Number",
    "student_status":       "Student Status",
    "gender":               "Gender",
    "degree":               "Degree Program",
    "advisor":              "Current Advisor",
    "date_program_entered": "Date Program Entered",
    "gpa":                  "GPA",
    "credit_hours":         "Credit Hours Completed",
    "currently_working":    "Currently Working on Campus?",
    "supervisor":           "Supervisor",
    "department":           "Department",
    "position":             "Position",
    "qualified_for":        "Courses Qualified to Grade",
    "other":                OTHER_HEADER,
    "resume":               "Upload CV or resume (Optional)",
}


@dataclass
class Record:
    """One survey submission. ``index`` 0 marks the spacer record."""

    timestamp: str = ""
    submit_email: str = ""
    first_name: str = ""
    last_name: str = ""
    candidate_id: str = ""
    candidate_email: str = ""
    phone_no: str = ""
    student_status: str = ""
    gender: str = ""
    degree: str = ""
    advisor: str = ""
    date_program_entered: str = ""
    gpa: str = ""
    credit_hours: str = ""
    currently_working: str = ""
    supervisor: str = ""
    department: str = ""
    position: str = ""
    qualified_for: str = ""
    other: str = ""
    resume: str = ""
    index: int = 0
    score: int = 0

    def __setattr__(self, name, value):
        # index is fixed once the dataclass __init__ has assigned it
        if name == "index" and "index" in self.__dict__:
            raise AttributeError("Record.index cannot be reassigned")
        object.__setattr__(self, name, value)

    @property
    def is_sentinel(self) -> bool:
        return self.index == 0

    def as_row(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def parse_row(raw_row: Mapping[str, str | None], index: int = 0) -> Record:
    values = {}
    for field_name, header in COLUMN_MAP.items():
        value = raw_row.get(header)
        values[field_name] = value if value is not None else ""
    values["qualified_for"] = collapse_list(values["qualified_for"])
    return Record(**values, index=index)


def _decode_row(header: list[str], row: list[str], row_number: int) -> dict[str, str]:
    if len(row) != len(header):
        raise RowDecodeError(
            row_number,
            f"expected {len(header)} fields, found {len(row)}",
        )
    return dict(zip(header, row))


def read_records(text: str, start_index: int = 1) -> tuple[list[Record], list[str]]:
    """
    Parse CSV text into Records, numbering them from ``start_index``.

    Rows that cannot be decoded are skipped and do not consume an index.

    Returns:
        (records, skipped) where skipped holds one "row N: reason" message
        per rejected row, N being the physical line the row ended on.
    """
    reader = csv.reader(io.StringIO(text, newline=""))
    header: list[str] | None = None
    records: list[Record] = []
    skipped: list[str] = []
    next_index = start_index

    while True:
        try:
            row = next(reader)
        except StopIteration:
            break
        except csv.Error as exc:
            error = RowDecodeError(reader.line_num, str(exc))
            logger.warning("Skipping undecodable CSV row: %s", error)
            skipped.append(str(error))
            continue

        # blank lines are not rows
        if not row:
            continue

        if header is None:
            header = row
            continue

        try:
            raw_row = _decode_row(header, row, reader.line_num)
        except RowDecodeError as error:
            logger.warning("Skipping undecodable CSV row: %s", error)
            skipped.append(str(error))
            continue

        records.append(parse_row(raw_row, index=next_index))
        next_index += 1

    return records, skipped
