"""Data loading module for user records."""

from .loaders import candidates_from_records, find_record, load_user_records, records_from_frame

__all__ = ["candidates_from_records", "find_record", "load_user_records", "records_from_frame"]
