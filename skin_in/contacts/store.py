# skin_in/contacts/store.py
"""
Contact Submissions
===================
In-memory store for the contact form and its CSV export.
"""

import csv
from datetime import datetime, timezone
from typing import Iterable, List

import pandas as pd
from pydantic import BaseModel, Field, field_validator

from skin_in.utils.exception import ExportError
from skin_in.utils.logger import get_logger

logger = get_logger(__name__)

CSV_COLUMNS = ["Name", "Email", "Message", "Date"]
CSV_FILENAME = "skin_in_contact_submissions.csv"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ContactSubmission(BaseModel):
    """One contact form entry. All text fields are required."""

    name: str
    email: str
    message: str
    timestamp: str = Field(default_factory=_utc_timestamp)

    @field_validator("name", "email", "message")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please fill in all fields")
        return value


class ContactStore:
    """Keeps submissions for the lifetime of the process, in insertion order."""

    def __init__(self):
        self._submissions: List[ContactSubmission] = []

    def add(self, name: str, email: str, message: str) -> ContactSubmission:
        """
        Validate and store a submission.

        Raises:
            pydantic.ValidationError: If a field is empty
        """
        submission = ContactSubmission(name=name, email=email, message=message)
        self._submissions.append(submission)
        logger.info(f"Contact submission stored ({len(self._submissions)} total)")
        return submission

    def all(self) -> List[ContactSubmission]:
        return list(self._submissions)

    def __len__(self) -> int:
        return len(self._submissions)


def contacts_to_csv(submissions: Iterable[ContactSubmission]) -> str:
    """
    Render submissions as CSV.

    Every field is quoted and embedded double quotes are doubled
    (standard CSV escaping).

    Raises:
        ExportError: If there is nothing to export
    """
    rows = [
        [s.name, s.email, s.message, s.timestamp]
        for s in submissions
    ]
    if not rows:
        raise ExportError("No contact submissions to export")

    df = pd.DataFrame(rows, columns=CSV_COLUMNS)
    body = df.to_csv(index=False, header=False, quoting=csv.QUOTE_ALL, doublequote=True, lineterminator="\n")
    return ",".join(CSV_COLUMNS) + "\n" + body
