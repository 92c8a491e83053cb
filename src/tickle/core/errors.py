"""Exception hierarchy shared by all tickle components."""


class TickleError(Exception):
    """Base class for every failure tickle reports to the user."""


class ControlPlaneUnavailable(TickleError):
    """Raised when a control-plane executable cannot be launched at all."""


class OperationFailed(TickleError):
    """Raised when a control-plane subcommand exits non-zero."""


class NoTargetError(TickleError):
    """Raised when neither a service name nor a compose file is available."""


class UsageError(TickleError):
    """Raised for invalid command-line arguments."""


class HistoryError(TickleError):
    """Raised when the history ledger cannot be read or written."""
