"""
Exception classes for sheetplate.

These exceptions are raised by the collaborators that sit around the formula
reference core: expression evaluation, property access and collection lookup.
The reference parser and range grouper themselves never raise.
"""


class TemplateError(Exception):
    """Raised when template processing cannot continue.

    This is the base class for every sheetplate error. It is raised directly
    when a template expression evaluates to a value of the wrong kind.

    Examples:
        - A condition expression that evaluates to a non-boolean value
        - A collection expression that does not evaluate to a collection
    """
    pass


class EvaluationError(TemplateError):
    """Raised when an expression cannot be evaluated.

    Common causes include:
        - Syntax errors in the expression text
        - References to variables missing from the context
        - Use of expression constructs the evaluator does not support
        - Errors raised by the operands themselves (e.g. division by zero)
    """
    pass


class PropertyAccessError(TemplateError):
    """Raised when reading or writing a named property of an object fails.

    The original exception (AttributeError, TypeError, ...) is chained as
    ``__cause__``.
    """
    pass
