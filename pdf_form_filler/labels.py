"""
Label inference for form fields.

Given a field's rectangle and the positioned text runs of its page, pick the
run most likely to be the field's caption. Labels on PDF forms sit either
directly above the input box or just to its left, so two search windows are
tested and the survivors are ranked by distance to the field.

This is a best-effort heuristic: densely packed forms can produce the wrong
pick. It never raises; no candidates simply means no label.
"""

import math
from typing import Iterable, Sequence

from .models import FieldContext, Rect, TextRun

MARGIN_X = 150  # how far left of a field a label may start
MARGIN_Y = 50  # how far above a field's top a label may sit
MAX_NEARBY = 5

ABOVE_OVERLAP = 5
ABOVE_SLACK_X = 20
LEFT_OVERLAP = 5
LEFT_SLACK_Y = 10


def _within_coarse_bounds(rect: Rect, run: TextRun) -> bool:
    return (
        abs(run.x - rect.x) <= MARGIN_X + rect.width
        and abs(run.y - rect.y) <= MARGIN_Y + rect.height
    )


def _is_above(rect: Rect, run: TextRun) -> bool:
    top = rect.y + rect.height
    return (
        run.y > rect.y
        and run.y >= top - ABOVE_OVERLAP
        and run.y <= top + MARGIN_Y
        and rect.x - ABOVE_SLACK_X <= run.x <= rect.x + rect.width + ABOVE_SLACK_X
    )


def _is_left(rect: Rect, run: TextRun) -> bool:
    top = rect.y + rect.height
    return (
        run.x < rect.x + LEFT_OVERLAP
        and run.x >= rect.x - MARGIN_X
        and rect.y - LEFT_SLACK_Y <= run.y <= top + LEFT_SLACK_Y
    )


def find_candidates(rect: Rect, runs: Iterable[TextRun]) -> list[TextRun]:
    """Runs positioned where a label for ``rect`` could plausibly be."""
    return [
        run for run in runs
        if _within_coarse_bounds(rect, run) and (_is_above(rect, run) or _is_left(rect, run))
    ]


def label_distance(rect: Rect, run: TextRun) -> float:
    """Distance from a run to the nearer of the field's top-center and left-center."""
    top_center = (rect.x + rect.width / 2, rect.y + rect.height)
    left_center = (rect.x, rect.y + rect.height / 2)
    return min(
        math.hypot(run.x - top_center[0], run.y - top_center[1]),
        math.hypot(run.x - left_center[0], run.y - left_center[1]),
    )


def rank_candidates(rect: Rect, candidates: Iterable[TextRun]) -> list[TextRun]:
    # equal distances: leftmost first, then topmost
    return sorted(candidates, key=lambda run: (label_distance(rect, run), run.x, -run.y))


def infer_label(rect: Rect, runs: Sequence[TextRun]) -> tuple[str | None, list[str]]:
    """Return ``(label, nearby_text)`` for a field; ``(None, [])`` when nothing is close."""
    ranked = rank_candidates(rect, find_candidates(rect, runs))
    if not ranked:
        return None, []
    nearby = [run.text for run in ranked[:MAX_NEARBY]]
    return nearby[0], nearby


def build_field_context(rect: Rect, page_number: int, runs: Sequence[TextRun]) -> FieldContext:
    label, nearby = infer_label(rect, runs)
    return FieldContext(page_number=page_number, inferred_label=label, nearby_text=nearby)
