"""Test utilities for querystate users.

Provides a virtual-clock scheduler and navigation assertions::

    from querystate.testing import ManualScheduler, assert_navigated
"""

from querystate.testing.assertions import (
    assert_hx_history,
    assert_navigated,
    assert_no_navigation,
)
from querystate.testing.clock import ManualScheduler, ScheduledCall

__all__ = [
    "ManualScheduler",
    "ScheduledCall",
    "assert_hx_history",
    "assert_navigated",
    "assert_no_navigation",
]
