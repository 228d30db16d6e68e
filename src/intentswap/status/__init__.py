"""Swap settlement tracking."""

from intentswap.status.poller import TIMEOUT_MESSAGE, poll_status

__all__ = ["TIMEOUT_MESSAGE", "poll_status"]
