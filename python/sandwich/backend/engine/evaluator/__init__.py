from sandwich.backend.engine.evaluator.evaluator import (
    CompletionEvent,
    FailureEvent,
    Outcome,
    OutcomeEvaluator,
    Rating,
)

__all__ = ["CompletionEvent", "FailureEvent", "Outcome", "OutcomeEvaluator", "Rating"]
