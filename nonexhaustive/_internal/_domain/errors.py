from __future__ import annotations

from .._utils.call_site import CallSite


class StoreFailure(AssertionError):
    """A test failure raised through the store's failure channel.

    Subclasses `AssertionError` so any test runner treats it as a failed
    assertion rather than an error.
    """

    kind = "failure"

    def __init__(self, message: str, *, location: CallSite | None = None):
        self.message = message
        self.location = location
        super().__init__(message if location is None else f"{message}\n\n  at {location}")


class ActionNotReceived(StoreFailure):
    kind = "action_not_received"


class UnexpectedAction(StoreFailure):
    kind = "unexpected_action"


class StateMismatch(StoreFailure):
    kind = "state_mismatch"


class UnexpectedStrictSuccess(StoreFailure):
    kind = "unexpected_strict_success"


class MutationBlockFailed(StoreFailure):
    kind = "mutation_block_failed"

    def __init__(self, cause: BaseException, *, location: CallSite | None = None):
        self.cause = cause
        super().__init__(f"Threw error: {type(cause).__name__}: {cause}", location=location)


class UnsupportedStateComparison(StoreFailure):
    kind = "unsupported_state_comparison"


class UnhandledActions(StoreFailure):
    kind = "unhandled_actions"


class EffectsStillRunning(StoreFailure):
    kind = "effects_still_running"


class NothingToSkip(StoreFailure):
    kind = "nothing_to_skip"


class EffectFailed(StoreFailure):
    kind = "effect_failed"


class QueueEmpty(IndexError):
    """Popped an empty action queue. Always a bug in the caller, never a test failure."""
