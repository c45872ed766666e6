"""
Structured error codes for configuration and problem-loading failures.
Use these keys on raised errors; map to user-facing messages in the CLI.
"""

# Known error keys (carried by LabelerConfigError.code)
NO_LABELS = "no_labels"
LABEL_ANCHOR_MISMATCH = "label_anchor_mismatch"
DEGENERATE_LABEL = "degenerate_label"
NON_FINITE_LABEL = "non_finite_label"
INVALID_ANCHOR = "invalid_anchor"
INVALID_BOUNDS = "invalid_bounds"
INVALID_OBSTACLE = "invalid_obstacle"
INVALID_WEIGHT = "invalid_weight"
INVALID_RUN_PARAM = "invalid_run_param"
INVALID_PROBLEM = "invalid_problem"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    NO_LABELS: "No labels to place. Provide at least one label.",
    LABEL_ANCHOR_MISMATCH: "Label and anchor counts differ. Provide one anchor per label.",
    DEGENERATE_LABEL: "A label box has min > max. Check label coordinates.",
    NON_FINITE_LABEL: "A label box has NaN or infinite coordinates.",
    INVALID_ANCHOR: "An anchor has a non-finite center or a negative radius.",
    INVALID_BOUNDS: "Bounds must be four finite numbers with min <= max.",
    INVALID_OBSTACLE: "An obstacle lacks a usable extent or intersection test.",
    INVALID_WEIGHT: "Weights must be finite and non-negative.",
    INVALID_RUN_PARAM: "Run parameters are out of range. Check sweeps, moves and temperature.",
    INVALID_PROBLEM: "Problem file is malformed. Check labels, anchors and bounds.",
}


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)
