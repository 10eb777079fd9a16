"""Tree-walking evaluator for the Jaksel language.

Runtime values are plain Python objects: str, float, bool and None (hampa). Only hampa and impossible are falsy.
Arithmetic is IEEE: dividing by zero gives an infinity or nan, never an error.
"""

import math

from jaksel.core import tree
from jaksel.core.environment import Environment
from jaksel.core.token import Token, TokenType
from jaksel.core.tree import ExprVisitor, StmtVisitor
from jaksel.lang.error import JakselRuntimeError, NestingTooDeep, OperandTypeError


def is_truthy(value):
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_number(value):
    """bool is an int subclass in Python, but never a number in Jaksel."""
    return isinstance(value, float) and not isinstance(value, bool)


def is_equal(left, right):
    """No coercion between kinds: 1 is not "1" and 1 is not ril."""
    if type(left) is not type(right):
        return False
    return left == right


def stringify(value):
    """Textual form of a runtime value, as spill prints it."""
    if value is None:
        return "hampa"
    if isinstance(value, bool):
        return "ril" if value else "impossible"
    if is_number(value):
        if value == 0:
            return "-0" if math.copysign(1.0, value) < 0 else "0"
        # integral values print without .0 while every digit is exact
        if value.is_integer() and abs(value) < 1e16:
            return str(int(value))
        return repr(value)
    return str(value)


def divide(left, right):
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def modulo(left, right):
    """Remainder with the sign of the dividend."""
    if right == 0 or math.isinf(left):
        return math.nan
    return math.fmod(left, right)


def statement_token(stmt):
    """A token to report a statement at: its name, or the outermost operator or name of its expression. Walks the
    tree iteratively, so it works on trees too deep to visit.
    """
    if isinstance(stmt, tree.Var):
        return stmt.name
    expr = stmt.condition if isinstance(stmt, tree.If) else stmt.expression

    while expr is not None:
        if isinstance(expr, (tree.Binary, tree.Unary)):
            return expr.operator
        if isinstance(expr, (tree.Assign, tree.Variable)):
            return expr.name
        expr = expr.expression if isinstance(expr, tree.Grouping) else None
    return Token(TokenType.EOF, "", None, 1, 1)


ARITHMETIC = {
    TokenType.MINUS: lambda left, right: left - right,
    TokenType.STAR: lambda left, right: left * right,
    TokenType.SLASH: divide,
    TokenType.PERCENT: modulo,
}

COMPARISON = {
    TokenType.GREATER: lambda left, right: left > right,
    TokenType.GREATER_EQUAL: lambda left, right: left >= right,
    TokenType.LESS: lambda left, right: left < right,
    TokenType.LESS_EQUAL: lambda left, right: left <= right,
}


class Evaluator(ExprVisitor, StmtVisitor):
    """Executes statement trees. The global environment lives as long as the evaluator, so bindings made by one call to
    interpret are visible to the next.
    """

    def __init__(self, error_handler, output=print):
        self.error_handler = error_handler
        self.output = output

        self.globals = Environment()
        self.environment = self.globals

    def interpret(self, statements):
        """Runs statements in order. The first runtime error is reported and stops the run."""
        try:
            for stmt in statements:
                self.execute(stmt)
        except JakselRuntimeError as error:
            self.error_handler.runtime_error(error)

    def execute(self, stmt):
        try:
            stmt.accept(self)
        except RecursionError:
            raise NestingTooDeep(statement_token(stmt)) from None

    def evaluate(self, expr):
        return expr.accept(self)

    def execute_block(self, statements, environment):
        """Runs statements with environment as the current scope, restoring the previous scope afterwards."""
        previous = self.environment
        try:
            self.environment = environment
            for stmt in statements:
                self.execute(stmt)
        finally:
            self.environment = previous

    # --- statements ---

    def visit_expression(self, stmt):
        self.evaluate(stmt.expression)

    def visit_print(self, stmt):
        self.output(stringify(self.evaluate(stmt.expression)))

    def visit_var(self, stmt):
        value = None
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)
        self.environment.define(stmt.name.lexeme, value)

    def visit_if(self, stmt):
        branches = [(stmt.condition, stmt.then_branch), *stmt.elif_branches]
        for condition, branch in branches:
            if is_truthy(self.evaluate(condition)):
                self.execute_block(branch, self.environment.child())
                return

        if stmt.else_branch is not None:
            self.execute_block(stmt.else_branch, self.environment.child())

    # --- expressions ---

    def visit_literal(self, expr):
        return expr.value

    def visit_grouping(self, expr):
        return self.evaluate(expr.expression)

    def visit_variable(self, expr):
        return self.environment.get(expr.name)

    def visit_assign(self, expr):
        value = self.evaluate(expr.value)
        self.environment.assign(expr.name, value)
        return value

    def visit_unary(self, expr):
        right = self.evaluate(expr.right)
        kind = expr.operator.type

        if kind == TokenType.BANG:
            return not is_truthy(right)

        if kind == TokenType.MINUS:
            if not is_number(right):
                raise OperandTypeError(expr.operator, "Operand must be a number.")
            return -right

        raise JakselRuntimeError(expr.operator, f"Unknown unary operator '{expr.operator.lexeme}'.")

    def visit_binary(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        kind = expr.operator.type

        if kind == TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if kind == TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        if kind == TokenType.PLUS:
            if is_number(left) and is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise OperandTypeError(expr.operator, "Operands must be two numbers or two strings.")

        if kind in ARITHMETIC or kind in COMPARISON:
            if not (is_number(left) and is_number(right)):
                raise OperandTypeError(expr.operator, "Operands must be a number.")
            operation = ARITHMETIC.get(kind) or COMPARISON[kind]
            return operation(left, right)

        raise JakselRuntimeError(expr.operator, f"Unknown binary operator '{expr.operator.lexeme}'.")
