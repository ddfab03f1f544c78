"""Building blocks shared by every domain module.

``Ok``/``Err`` carry expected failures as values; ``DomainEvent`` is the
base class of the events an aggregate queues for dispatch.
"""

from todoapp.domain.shared.events import DomainEvent
from todoapp.domain.shared.result import Err, Ok, Result, is_err, is_ok

__all__ = ["Ok", "Err", "Result", "is_ok", "is_err", "DomainEvent"]
