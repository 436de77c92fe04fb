class PlanningError(Exception):
    """Base class for errors raised by the planning engine."""

    pass


class InapplicableActionError(PlanningError):
    """Raised when an action is applied to a state outside its applicable set A(s)."""

    def __init__(self, action, state):
        super().__init__(f"action {action!r} is not applicable in state {state!r}")
        self.action = action
        self.state = state


class UnsupportedOperationError(PlanningError, NotImplementedError):
    """Raised for optional operations an algorithm or view does not provide."""

    pass


class InvariantError(PlanningError, AssertionError):
    """Raised when a problem implementation breaks an invariant the engine relies on."""

    pass


# Short category names for reporting
ERROR_KINDS = {
    InapplicableActionError: "contract-violation",
    UnsupportedOperationError: "unsupported",
    InvariantError: "invariant",
}


def error_kind(exc: BaseException) -> str:
    for cls, kind in ERROR_KINDS.items():
        if isinstance(exc, cls):
            return kind
    return "error"
