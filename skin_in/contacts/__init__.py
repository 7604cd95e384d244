"""Contact form storage and export"""
from .store import ContactSubmission, ContactStore, contacts_to_csv, CSV_FILENAME

__all__ = ["ContactSubmission", "ContactStore", "contacts_to_csv", "CSV_FILENAME"]
