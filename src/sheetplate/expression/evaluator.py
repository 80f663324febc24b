"""
Evaluation of template expressions against a variable context.

Template conditions ("employee.salary > 2000") and collection names
("department.staff") are Python expressions. They are parsed with ``ast`` and
walked by SafeExpressionEvaluator, which supports a fixed set of expression
nodes and never calls ``eval``.

Supports:
- Literals: 1, 2.5, 'text', True, None, [1, 2], (1, 2)
- Variables and property access: employee, employee.name, row['dept']
- Arithmetic and unary operators: + - * / // % **, -x, not x
- Comparisons, including chains and membership: a < b <= c, x in items
- Boolean logic and conditionals: a and b, a or b, x if cond else y

Does not support:
- Function or method calls
- Comprehensions, lambdas, assignments
"""

import ast
import operator
from collections.abc import Collection, Iterable
from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional, Protocol

import pandas as pd

from sheetplate.exceptions import EvaluationError, TemplateError
from sheetplate.expression.context import Context
from sheetplate.utils.properties import get_object_property


class ExpressionEvaluator(Protocol):
    """Protocol for expression evaluation backends."""

    def evaluate(self, expression: str, variables: Dict[str, Any]) -> Any:
        """Evaluate ``expression`` with ``variables`` in scope.

        Raises:
            EvaluationError: If the expression cannot be evaluated
        """
        ...


_BIN_OPS: Dict[type, Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

_UNARY_OPS: Dict[type, Callable[[Any], Any]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
    ast.Not: operator.not_,
}

_COMPARE_OPS: Dict[type, Callable[[Any, Any], Any]] = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.Is: operator.is_,
    ast.IsNot: operator.is_not,
    ast.In: lambda a, b: a in b,
    ast.NotIn: lambda a, b: a not in b,
}


class SafeExpressionEvaluator:
    """Evaluates Python-syntax expressions against a variable mapping.

    Parsed expressions are cached, so repeated evaluation of the same
    condition for every collection item only parses it once.
    """

    def __init__(self, cache_size: int = 256):
        """Initialize evaluator.

        Args:
            cache_size: Maximum number of parsed expressions kept in memory
        """
        self._parse = lru_cache(maxsize=cache_size)(self._parse_expression)

    @staticmethod
    def _parse_expression(expression: str) -> ast.AST:
        try:
            return ast.parse(expression.strip(), mode='eval').body
        except SyntaxError as e:
            raise EvaluationError(f"Syntax error in expression '{expression}': {e}") from e

    def evaluate(self, expression: str, variables: Dict[str, Any]) -> Any:
        """Evaluate an expression.

        Args:
            expression: Expression text (e.g., "item.amount > 100")
            variables: Mapping from variable names to values

        Returns:
            The expression value

        Raises:
            EvaluationError: If the expression is invalid, uses an unsupported
                construct, references an undefined variable or fails at runtime
        """
        if not isinstance(expression, str) or not expression.strip():
            raise EvaluationError("Expression must be a non-empty string")

        node = self._parse(expression)
        try:
            return self._eval(node, variables)
        except EvaluationError:
            raise
        except Exception as e:
            raise EvaluationError(f"Failed to evaluate '{expression}': {e}") from e

    def _eval(self, node: ast.AST, variables: Dict[str, Any]) -> Any:
        """Recursively evaluate an AST expression node."""
        if isinstance(node, ast.Constant):
            return node.value

        elif isinstance(node, ast.Name):
            if node.id not in variables:
                raise EvaluationError(f"Undefined variable '{node.id}'")
            return variables[node.id]

        elif isinstance(node, ast.Attribute):
            return get_object_property(self._eval(node.value, variables), node.attr)

        elif isinstance(node, ast.Subscript):
            return self._eval(node.value, variables)[self._eval(node.slice, variables)]

        elif isinstance(node, ast.BinOp):
            op = _BIN_OPS.get(type(node.op))
            if op is None:
                raise EvaluationError(f"Unsupported operator: {type(node.op).__name__}")
            return op(self._eval(node.left, variables), self._eval(node.right, variables))

        elif isinstance(node, ast.UnaryOp):
            op = _UNARY_OPS.get(type(node.op))
            if op is None:
                raise EvaluationError(f"Unsupported operator: {type(node.op).__name__}")
            return op(self._eval(node.operand, variables))

        elif isinstance(node, ast.BoolOp):
            # Short-circuit like Python: return the deciding operand
            if isinstance(node.op, ast.And):
                result = True
                for value in node.values:
                    result = self._eval(value, variables)
                    if not result:
                        return result
                return result
            result = False
            for value in node.values:
                result = self._eval(value, variables)
                if result:
                    return result
            return result

        elif isinstance(node, ast.Compare):
            left = self._eval(node.left, variables)
            for op_node, comparator in zip(node.ops, node.comparators):
                op = _COMPARE_OPS.get(type(op_node))
                if op is None:
                    raise EvaluationError(f"Unsupported comparison: {type(op_node).__name__}")
                right = self._eval(comparator, variables)
                if not op(left, right):
                    return False
                left = right
            return True

        elif isinstance(node, ast.IfExp):
            if self._eval(node.test, variables):
                return self._eval(node.body, variables)
            return self._eval(node.orelse, variables)

        elif isinstance(node, ast.List):
            return [self._eval(elt, variables) for elt in node.elts]

        elif isinstance(node, ast.Tuple):
            return tuple(self._eval(elt, variables) for elt in node.elts)

        else:
            raise EvaluationError(f"Unsupported expression type: {type(node).__name__}")


def _as_records(value: Any) -> Optional[List[Dict[str, Any]]]:
    if isinstance(value, pd.DataFrame):
        return value.to_dict(orient='records')
    return None


def is_condition_true(evaluator: ExpressionEvaluator, condition: str, context: Context) -> bool:
    """Evaluate a template condition.

    Raises:
        TemplateError: If the condition does not evaluate to a boolean
    """
    result = evaluator.evaluate(condition, context.to_dict())
    if not isinstance(result, bool):
        raise TemplateError(f"Condition result is not a boolean value - {condition}")
    return result


def transform_to_collection(evaluator: ExpressionEvaluator, collection_name: str, context: Context) -> Collection:
    """Evaluate a collection expression.

    A pandas DataFrame is returned as a list of row dictionaries.

    Raises:
        TemplateError: If the expression does not evaluate to a collection
    """
    value = evaluator.evaluate(collection_name, context.to_dict())
    records = _as_records(value)
    if records is not None:
        return records
    if isinstance(value, (str, bytes)) or not isinstance(value, Collection):
        raise TemplateError(f"{collection_name} expression is not a collection")
    return value


def transform_to_iterable(evaluator: ExpressionEvaluator, collection_name: str, context: Context) -> List[Any]:
    """Evaluate a collection expression and materialize its items.

    Unlike transform_to_collection, any iterable (e.g. a generator) is
    accepted. Mappings yield their keys, as when iterating a dict.

    Raises:
        TemplateError: If the expression does not evaluate to an iterable
    """
    value = evaluator.evaluate(collection_name, context.to_dict())
    records = _as_records(value)
    if records is not None:
        return records
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise TemplateError(f"{collection_name} expression is not a collection")
    return list(value)
