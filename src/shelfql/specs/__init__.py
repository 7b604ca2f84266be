"""
Specification types for shelfql.

This module exports the record types.
"""

from shelfql.specs.record import REQUIRED_FIELDS, Record, RecordInput, RecordPatch

__all__ = ["REQUIRED_FIELDS", "Record", "RecordInput", "RecordPatch"]
