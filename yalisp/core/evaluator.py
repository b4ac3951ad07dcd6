"""Evaluator for yalisp ASTs. Evaluation is a pure function of the node: there is no environment, and the only
callable things are the built-in operators in OPERATORS.
"""

import logging

from yalisp.core.lexical import IntLiteral, List, StringLiteral, Symbol
from yalisp.core.values import IntValue, StringValue
from yalisp.lang.error import (
    ArityError,
    BareSymbolNotEvaluable,
    EmptyListNotEvaluable,
    OperatorMustBeSymbol,
    TypeMismatch,
    UnknownOperator,
)


logger = logging.getLogger(__name__)


def _integers(op, args):
    """Lazily evaluates args left to right, yielding their integer values. Stops at the first error."""
    for arg in args:
        value = evaluate(arg)
        if not isinstance(value, IntValue):
            raise TypeMismatch.at(arg, f"Non-integer argument to {op.name}")
        yield value.value


def _strings(op, args):
    """Lazily evaluates args left to right, yielding their string values. Stops at the first error."""
    for arg in args:
        value = evaluate(arg)
        if not isinstance(value, StringValue):
            raise TypeMismatch.at(arg, f"Non-string argument to {op.name}")
        yield value.text


def add(op, args):
    """(+ a b ...): sum of the arguments, 0 if there are none."""
    return IntValue(sum(_integers(op, args)))


def subtract(op, args):
    """(- a b ...): a minus each following argument in turn. Needs at least one argument."""
    if not args:
        raise ArityError.at(op, f"Operator '{op.name}' expects at least one argument")

    values = _integers(op, args)
    total = next(values)
    for value in values:
        total -= value
    return IntValue(total)


def concat(op, args):
    """(concat a b ...): the arguments joined with no separator, "" if there are none."""
    return StringValue("".join(_strings(op, args)))


OPERATORS = {
    "+": add,
    "-": subtract,
    "concat": concat,
}


def evaluate(node):
    """Evaluates node to an IntValue or StringValue. Raises an EvalError subclass if node cannot be evaluated."""
    if isinstance(node, IntLiteral):
        return IntValue(node.value)

    elif isinstance(node, StringLiteral):
        return StringValue(node.text)

    elif isinstance(node, Symbol):
        raise BareSymbolNotEvaluable.at(node)

    elif isinstance(node, List):
        if not node.items:
            raise EmptyListNotEvaluable.at(node)

        op, *args = node.items
        if not isinstance(op, Symbol):
            raise OperatorMustBeSymbol.at(op)

        operator = OPERATORS.get(op.name)
        if operator is None:
            raise UnknownOperator.at(op)

        value = operator(op, args)
        logger.debug("%s => %s", node, value)
        return value

    raise TypeError(f"not an AST node: {node!r}")
