"""
Provider failure classification.

Quota/balance failures (exhausted allowance, billing problems, HTTP 429/402)
put a provider on a long cooldown; anything else is treated as transient.
"""

from enum import Enum

QUOTA_MESSAGE_MARKERS = ("insufficient", "quota", "balance", "billing", "limit exceeded")
QUOTA_ERROR_CODES = {429, 402, "429", "402", "insufficient_quota"}


class FailureKind(str, Enum):
    QUOTA = "quota"
    TRANSIENT = "transient"


def _error_codes(error: BaseException) -> list[object]:
    codes = []
    for attr in ("status_code", "status", "code"):
        value = getattr(error, attr, None)
        if value is not None:
            codes.append(value)
    return codes


def is_quota_error(error: BaseException) -> bool:
    """Check whether a provider error means the account ran out of allowance."""
    message = str(error).lower()
    if any(marker in message for marker in QUOTA_MESSAGE_MARKERS):
        return True

    for code in _error_codes(error):
        try:
            if code in QUOTA_ERROR_CODES:
                return True
        except TypeError:
            # Unhashable code payloads (dicts from some SDKs)
            continue
    return False


def classify_failure(error: BaseException) -> FailureKind:
    return FailureKind.QUOTA if is_quota_error(error) else FailureKind.TRANSIENT
