"""
omst - Reveals whomst thou art with a single character.

Reports the permission tier of the user running the current process:
guest, ordinary user, system account, or full administrator. The result
is purely informational and must never gate a privileged operation.
"""

__version__ = "3.0.0"

from .exceptions import ClassificationError, OmstError
from .models import Classification, Tier, UidRange
from .resolver import (
    classify_current_user,
    classify_current_user_or_unknown,
    try_classify_current_user,
)

__all__ = [
    "classify_current_user",  # Raises ClassificationError on failure
    "try_classify_current_user",  # Returns a Classification
    "classify_current_user_or_unknown",  # Logs and returns Tier.UNKNOWN
    "Tier",
    "UidRange",
    "Classification",
    "ClassificationError",
    "OmstError",
]
