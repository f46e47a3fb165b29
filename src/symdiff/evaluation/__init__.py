"""Numeric evaluation of expression trees."""

from symdiff.evaluation.evaluator import (
    CompiledExpression,
    Evaluator,
    NumericResult,
    Shape,
    evaluate,
    evaluate_scalar,
    evaluate_vector,
    evaluate_vector_scalar,
    get_evaluator,
)

__all__ = [
    "CompiledExpression",
    "Evaluator",
    "NumericResult",
    "Shape",
    "evaluate",
    "evaluate_scalar",
    "evaluate_vector",
    "evaluate_vector_scalar",
    "get_evaluator",
]
