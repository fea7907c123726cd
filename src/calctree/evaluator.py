from __future__ import annotations

from .tree import BinaryOperation, Node, NumberLiteral, UnaryOperation, format_number


class CalcRuntimeError(ArithmeticError):
    """Evaluation error (division by zero, nesting too deep)"""
    def __init__(self, message: str, node: Node | None = None):
        self.message = message
        self.node = node
        super().__init__(message)


def eval_expr(node: Node) -> float:
    try:
        return _eval(node)
    except RecursionError:
        raise CalcRuntimeError("Expression nested too deeply", node) from None


def _eval(node: Node) -> float:
    match node:
        case NumberLiteral(value=value):
            return value
        case UnaryOperation(op=op, operand=operand):
            return _eval_unary(op, _eval(operand))
        case BinaryOperation(left=left, op=op, right=right):
            lhs = _eval(left)
            rhs = _eval(right)
            return _eval_binary(node, op, lhs, rhs)
        case _:
            raise TypeError(f"not an AST node: {type(node).__name__}")


def _eval_unary(op: str, value: float) -> float:
    match op:
        case '+':
            return +value
        case '-':
            return -value
        case _:
            raise ValueError(f"unknown unary operator {op!r}")


def _eval_binary(node: BinaryOperation, op: str, lhs: float, rhs: float) -> float:
    match op:
        case '+':
            return lhs + rhs
        case '-':
            return lhs - rhs
        case '*':
            return lhs * rhs
        case '/':
            if rhs == 0:
                raise CalcRuntimeError(
                    f"Division by zero: {format_number(lhs)} / {format_number(rhs)}", node
                )
            return lhs / rhs
        case _:
            raise ValueError(f"unknown binary operator {op!r}")
