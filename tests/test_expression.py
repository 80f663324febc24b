"""
Unit tests for template expression evaluation.

Tests cover:
- Context variable management
- SafeExpressionEvaluator: supported constructs and rejected ones
- is_condition_true, transform_to_collection, transform_to_iterable
"""

from types import SimpleNamespace

import pandas as pd
import pytest

from sheetplate.exceptions import EvaluationError, TemplateError
from sheetplate.expression import (
    Context,
    SafeExpressionEvaluator,
    is_condition_true,
    transform_to_collection,
    transform_to_iterable,
)


@pytest.fixture
def evaluator() -> SafeExpressionEvaluator:
    return SafeExpressionEvaluator()


@pytest.fixture
def context() -> Context:
    employee = SimpleNamespace(name="Alice", salary=2500, dept={"name": "eng"})
    return Context({
        "employee": employee,
        "items": [1, 2, 3],
        "limit": 2000,
    })


class TestContext:
    """Tests for Context."""

    def test_put_get_remove(self):
        context = Context()
        context.put_var("x", 1)
        assert context.get_var("x") == 1
        assert context.contains_var("x")
        assert "x" in context
        assert len(context) == 1

        context.remove_var("x")
        assert not context.contains_var("x")
        assert context.get_var("x") is None
        context.remove_var("x")

    def test_initial_variables_are_copied(self):
        variables = {"a": 1}
        context = Context(variables)
        context.put_var("b", 2)
        assert variables == {"a": 1}
        assert context.to_dict() == {"a": 1, "b": 2}


class TestSafeExpressionEvaluator:
    """Tests for SafeExpressionEvaluator."""

    def test_literals(self, evaluator):
        assert evaluator.evaluate("42", {}) == 42
        assert evaluator.evaluate("'text'", {}) == "text"
        assert evaluator.evaluate("[1, 2]", {}) == [1, 2]
        assert evaluator.evaluate("(1, 'a')", {}) == (1, "a")

    def test_property_access(self, evaluator, context):
        variables = context.to_dict()
        assert evaluator.evaluate("employee.name", variables) == "Alice"
        assert evaluator.evaluate("employee.dept.name", variables) == "eng"
        assert evaluator.evaluate("employee.dept['name']", variables) == "eng"

    def test_arithmetic(self, evaluator):
        assert evaluator.evaluate("a * 2 + b", {"a": 3, "b": 1}) == 7
        assert evaluator.evaluate("-a ** 2", {"a": 3}) == -9
        assert evaluator.evaluate("7 // 2 + 7 % 2", {}) == 4

    def test_comparisons(self, evaluator, context):
        variables = context.to_dict()
        assert evaluator.evaluate("employee.salary > limit", variables) is True
        assert evaluator.evaluate("0 < 1 < 1", {}) is False
        assert evaluator.evaluate("2 in items", variables) is True
        assert evaluator.evaluate("5 not in items", variables) is True

    def test_boolean_logic(self, evaluator):
        assert evaluator.evaluate("a and not b", {"a": True, "b": False}) is True
        assert evaluator.evaluate("a or b", {"a": 0, "b": "x"}) == "x"

    def test_conditional(self, evaluator):
        assert evaluator.evaluate("'hi' if x > 1 else 'lo'", {"x": 0}) == "lo"

    def test_undefined_variable(self, evaluator):
        with pytest.raises(EvaluationError, match="Undefined variable 'missing'"):
            evaluator.evaluate("missing + 1", {})

    def test_syntax_error(self, evaluator):
        with pytest.raises(EvaluationError, match="Syntax error"):
            evaluator.evaluate("a +", {"a": 1})

    def test_function_calls_rejected(self, evaluator):
        with pytest.raises(EvaluationError, match="Unsupported expression type: Call"):
            evaluator.evaluate("len(items)", {"items": []})

    def test_runtime_error_wrapped(self, evaluator):
        with pytest.raises(EvaluationError) as exc_info:
            evaluator.evaluate("1 / x", {"x": 0})
        assert isinstance(exc_info.value.__cause__, ZeroDivisionError)

    def test_missing_attribute_wrapped(self, evaluator, context):
        with pytest.raises(EvaluationError):
            evaluator.evaluate("employee.age", context.to_dict())

    def test_empty_expression(self, evaluator):
        with pytest.raises(EvaluationError, match="non-empty"):
            evaluator.evaluate("  ", {})

    def test_evaluation_error_is_template_error(self, evaluator):
        with pytest.raises(TemplateError):
            evaluator.evaluate("missing", {})


class TestConditionAndCollections:
    """Tests for the evaluator-driven template helpers."""

    def test_condition_true(self, evaluator, context):
        assert is_condition_true(evaluator, "employee.salary > limit", context) is True
        assert is_condition_true(evaluator, "employee.name == 'Bob'", context) is False

    def test_condition_not_boolean(self, evaluator, context):
        with pytest.raises(TemplateError, match="not a boolean"):
            is_condition_true(evaluator, "employee.salary", context)

    def test_collection(self, evaluator, context):
        assert transform_to_collection(evaluator, "items", context) == [1, 2, 3]

    def test_string_is_not_collection(self, evaluator, context):
        with pytest.raises(TemplateError, match="employee.name expression is not a collection"):
            transform_to_collection(evaluator, "employee.name", context)

    def test_number_is_not_collection(self, evaluator, context):
        with pytest.raises(TemplateError, match="not a collection"):
            transform_to_collection(evaluator, "limit", context)

    def test_dataframe_collection_as_records(self, evaluator, employees):
        context = Context({"staff": employees})
        records = transform_to_collection(evaluator, "staff", context)
        assert len(records) == 8
        assert records[0]["name"] == "Alice"

    def test_iterable_materializes_generators(self, evaluator):
        context = Context({"gen": (n * 2 for n in range(3))})
        assert transform_to_iterable(evaluator, "gen", context) == [0, 2, 4]

    def test_iterable_rejects_scalars(self, evaluator, context):
        with pytest.raises(TemplateError, match="not a collection"):
            transform_to_iterable(evaluator, "limit", context)

    def test_iterable_dataframe_rows(self, evaluator, employees):
        context = Context({"staff": employees})
        rows = transform_to_iterable(evaluator, "staff", context)
        assert [row["dept"] for row in rows][:3] == ["eng", "eng", "sales"]
