"""Run an order's actions over a transcript."""

from __future__ import annotations

import logging

from models import ChainResult, Order

logger = logging.getLogger(__name__)


def execute_order(order: Order, transcript: str) -> ChainResult:
    """Apply each step of ``order`` in sequence.

    A step whose ``keep()`` is false leaves the transcript untouched.
    ``should_rerun`` sees the transcript after the step; once any step asks for
    a rerun the result keeps asking. Errors from ``run`` propagate and abort
    the remaining steps.
    """
    current = transcript
    rerun = False
    for index, action in enumerate(order.steps):
        name = type(action).__name__
        if action.keep():
            logger.debug("Step %d (%s): running", index, name)
            current = action.run(current)
        else:
            logger.debug("Step %d (%s): skipped", index, name)
        if action.should_rerun(current):
            logger.debug("Step %d (%s): rerun requested", index, name)
            rerun = True
    return ChainResult(transcript=current, rerun=rerun)
