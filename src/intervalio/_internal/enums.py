from enum import Enum, unique


@unique
class Status(str, Enum):
    """Lifecycle status of a recurring task.

    - ``ACTIVE``: ticks are armed and may begin attempts.
    - ``INACTIVE``: nothing is scheduled.
    - ``TERMINATING``: a stop is in progress and the last attempt of the
      session has not settled yet.
    """

    ACTIVE = "active"
    INACTIVE = "inactive"
    TERMINATING = "terminating"

    def __str__(self) -> str:
        return self.value
