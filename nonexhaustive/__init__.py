from ._internal._domain.action_queue import ActionQueue, Origin, PendingAction
from ._internal._domain.effect import Effect, Reducer, combine
from ._internal._domain.errors import (
    ActionNotReceived,
    EffectFailed,
    EffectsStillRunning,
    MutationBlockFailed,
    NothingToSkip,
    QueueEmpty,
    StateMismatch,
    StoreFailure,
    UnexpectedAction,
    UnexpectedStrictSuccess,
    UnhandledActions,
    UnsupportedStateComparison,
)
from ._internal._domain.expected_failure import ExpectedFailureAdapter, report_failure
from ._internal._domain.matching import Case, Value
from ._internal._domain.non_exhaustive_store import NonExhaustiveTestStore
from ._internal._domain.report import SKIPPED_ASSERTIONS_MARKER, ReportEntry, SessionReport
from ._internal._domain.skip_forward import MatchState, SkipForwardMatcher
from ._internal._domain.state_diff import DiffEntry, Outcome, StateDiff, compare, diff_states
from ._internal._domain.test_store import TestStore, TestStoreTask
from ._internal._framework.config import StoreConfig, load_config
from ._internal._framework.logger import Logger
from ._internal._framework.logger_console import ConsoleLogger
from ._internal._framework.logger_jsonl import JsonlLogger
from ._internal._framework.logger_noop import NoOpLogger
from ._internal._framework.metrics import Metrics
from ._internal._framework.metrics_noop import NoOpMetrics
from ._internal._framework.metrics_prometheus import PrometheusMetrics

__all__ = [
    "NonExhaustiveTestStore",
    "TestStore",
    "TestStoreTask",
    "Effect",
    "Reducer",
    "combine",
    "Case",
    "Value",
    "ActionQueue",
    "PendingAction",
    "Origin",
    "SkipForwardMatcher",
    "MatchState",
    "ExpectedFailureAdapter",
    "report_failure",
    "compare",
    "diff_states",
    "Outcome",
    "StateDiff",
    "DiffEntry",
    "SKIPPED_ASSERTIONS_MARKER",
    "SessionReport",
    "ReportEntry",
    "StoreConfig",
    "load_config",
    "Logger",
    "NoOpLogger",
    "ConsoleLogger",
    "JsonlLogger",
    "Metrics",
    "NoOpMetrics",
    "PrometheusMetrics",
    "StoreFailure",
    "ActionNotReceived",
    "UnexpectedAction",
    "StateMismatch",
    "UnexpectedStrictSuccess",
    "MutationBlockFailed",
    "UnsupportedStateComparison",
    "UnhandledActions",
    "EffectsStillRunning",
    "EffectFailed",
    "NothingToSkip",
    "QueueEmpty",
]
