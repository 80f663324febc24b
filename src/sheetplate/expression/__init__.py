"""
Template expression module.

Provides the variable Context and expression evaluation used for template
conditions and collection expressions.
"""

from sheetplate.expression.context import Context
from sheetplate.expression.evaluator import (
    ExpressionEvaluator,
    SafeExpressionEvaluator,
    is_condition_true,
    transform_to_collection,
    transform_to_iterable,
)

__all__ = [
    "Context",
    "ExpressionEvaluator",
    "SafeExpressionEvaluator",
    "is_condition_true",
    "transform_to_collection",
    "transform_to_iterable",
]
