"""
Reason codes for forwarded header resolution failures.

Using IntEnum for fast integer comparisons on the request path.
"""

from enum import IntEnum


class ParseFailure(IntEnum):
    """Reasons why a forwarded header did not yield an address"""
    NO_HEADER = 0              # Header absent or empty (silent, most common)
    INVALID_FORMAT = 1         # Header present but no valid address in the selected slot
