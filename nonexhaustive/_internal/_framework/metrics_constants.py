LABEL_STORE = "store"
LABEL_KIND = "kind"

SKIPPED_ACTIONS_TOTAL = "nonexhaustive_skipped_actions_total"
DOWNGRADED_FAILURES_TOTAL = "nonexhaustive_downgraded_failures_total"
UNEXPECTED_STRICT_SUCCESS_TOTAL = "nonexhaustive_unexpected_strict_success_total"
FLUSHED_EFFECTS_TOTAL = "nonexhaustive_flushed_effects_total"

METRIC_DESCRIPTIONS: dict[str, str] = {
    SKIPPED_ACTIONS_TOTAL: "Queued actions replayed and skipped while searching for an expected action.",
    DOWNGRADED_FAILURES_TOTAL: "Strict harness failures downgraded to expected failures.",
    UNEXPECTED_STRICT_SUCCESS_TOTAL: "Relaxed calls whose strict counterpart raised no failure.",
    FLUSHED_EFFECTS_TOTAL: "In-flight effects cancelled by the teardown guard.",
}

METRIC_LABEL_NAMES: dict[str, list[str]] = {
    SKIPPED_ACTIONS_TOTAL: [LABEL_STORE],
    DOWNGRADED_FAILURES_TOTAL: [LABEL_STORE, LABEL_KIND],
    UNEXPECTED_STRICT_SUCCESS_TOTAL: [LABEL_STORE],
    FLUSHED_EFFECTS_TOTAL: [LABEL_STORE],
}
