"""Statement blocks and persistent evaluation sessions."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .context import EvaluationContext
from .parser import TokenSource, evaluate_expression, evaluate_statement

logger = logging.getLogger(__name__)


def evaluate(source: str | TokenSource, context: EvaluationContext | None = None) -> float | None:
    """Evaluate one statement, in a fresh context unless one is given."""
    runtime_context = EvaluationContext() if context is None else context
    return evaluate_statement(runtime_context, source)


def evaluate_block(
    statements: Iterable[str | TokenSource],
    context: EvaluationContext | None = None,
) -> float | None:
    """Run statements in order against one context.

    Returns the result of the last statement that produced a value, or
    ``None`` if none did. The first failing statement aborts the block;
    writes made by earlier statements stay in the context.
    """
    runtime_context = EvaluationContext() if context is None else context
    result: float | None = None
    for lineno, stmt in enumerate(statements, start=1):
        logger.debug("block statement %d", lineno)
        out = evaluate_statement(runtime_context, stmt)
        if out is not None:
            result = out
    return result


@dataclass
class Session:
    """Callable wrapper that evaluates statements in a persistent context."""

    context: EvaluationContext = field(default_factory=EvaluationContext)

    def __call__(self, source: str | TokenSource) -> float | None:
        return evaluate_statement(self.context, source)

    def expression(self, source: str | TokenSource) -> float:
        return evaluate_expression(self.context, source)

    def run(self, statements: Iterable[str | TokenSource]) -> float | None:
        return evaluate_block(statements, self.context)
