"""Invariant checks over a reconstructed model."""

from __future__ import annotations

from pwtrace.models.trace import Context, TraceModel


def check_context(ctx: Context) -> list[str]:
    """Check one context. Returns a list of violation messages."""
    errors: list[str] = []
    seen: set[str] = set()
    previous = None

    for action in ctx.actions:
        if action.call_id in seen:
            errors.append(f"Duplicate call id: {action.call_id}")
        seen.add(action.call_id)

        if previous is not None and action.start_time < previous:
            errors.append(f"Actions not sorted by start time at {action.call_id}")
        previous = action.start_time

        if action.start_time < ctx.start_time:
            errors.append(f"Action {action.call_id} starts before its context")
        if action.end_time is not None:
            if action.end_time < action.start_time:
                errors.append(f"Action {action.call_id} ends before it starts")
            if action.end_time > ctx.end_time:
                errors.append(f"Action {action.call_id} ends after its context")

    for action in ctx.actions:
        if action.parent_id is not None and action.parent_id not in seen:
            errors.append(f"Action {action.call_id} references unknown parent {action.parent_id}")

    return errors


def check_model(model: TraceModel) -> list[str]:
    """Check every context; messages are prefixed with the context index."""
    errors: list[str] = []
    for i, ctx in enumerate(model.contexts):
        errors.extend(f"context[{i}]: {msg}" for msg in check_context(ctx))
    return errors
