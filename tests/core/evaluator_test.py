import io
import math
import unittest

from jaksel.core import tree
from jaksel.core.evaluator import Evaluator, is_equal, is_truthy, statement_token, stringify
from jaksel.core.parser import Parser
from jaksel.core.scanner import Scanner
from jaksel.core.token import Token, TokenType
from jaksel.lang.error import ErrorHandler


class EvaluatorTestCase(unittest.TestCase):

    def setUp(self):
        self.error_handler = ErrorHandler(stream=io.StringIO())
        self.printed = []
        self.evaluator = Evaluator(self.error_handler, self.printed.append)

    def run_source(self, source):
        self.error_handler.register_source(source)
        tokens = Scanner(source, self.error_handler).scan()
        statements = Parser(tokens, self.error_handler).parse()
        self.assertFalse(self.error_handler.had_error, self.error_handler.stream.getvalue())
        self.evaluator.interpret(statements)
        return self.printed

    def value_of(self, expr):
        """Evaluates expr through a variable, so the raw runtime value can be inspected."""
        self.run_source(f"literally result itu {expr}")
        return self.evaluator.globals.values["result"]

    def assert_runtime_error(self, source, message):
        self.run_source(source)
        self.assertTrue(self.error_handler.had_runtime_error)
        self.assertIn(message, self.error_handler.stream.getvalue())

    def test_arithmetic(self):
        cases = {
            "2 + 3 * 4": 14.0,
            "(2 + 3) * 4": 20.0,
            "10 - 4 - 3": 3.0,
            "2 * (3 + 4) - 6 / 2": 11.0,
            "8 / 4 / 2": 1.0,
            "-(1 + 2) * 2": -6.0,
            "7 % 3": 1.0,
            "-7 % 3": -1.0,
            "1 + 2": 3.0,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, self.value_of(case), case)

    def test_division_by_zero(self):
        self.assertEqual(math.inf, self.value_of("1 / 0"))
        self.assertEqual(-math.inf, self.value_of("-1 / 0"))
        self.assertTrue(math.isnan(self.value_of("0 / 0")))
        self.assertTrue(math.isnan(self.value_of("5 % 0")))
        self.assertFalse(self.error_handler.had_runtime_error)

    def test_string_concatenation(self):
        self.assertEqual("ab", self.value_of('"a" + "b"'))

    def test_plus_type_error(self):
        self.assert_runtime_error('1 + "a"', "Operands must be two numbers or two strings.")

    def test_comparison_type_error(self):
        self.assert_runtime_error('"a" < "b"', "Operands must be a number.")

    def test_negate_type_error(self):
        self.assert_runtime_error('-"a"', "Operand must be a number.")

    def test_booleans_are_not_numbers(self):
        self.assert_runtime_error("ril + 1", "Operands must be two numbers or two strings.")

    def test_comparison(self):
        cases = {"1 < 2": True, "2 <= 2": True, "3 > 4": False, "4 >= 5": False}
        for case, expected in cases.items():
            self.assertIs(expected, self.value_of(case), case)

    def test_equality(self):
        cases = {
            "1 == 1": True,
            "1 != 1": False,
            '1 == "1"': False,
            '1 != "1"': True,
            "1 == ril": False,
            "0 == impossible": False,
            "hampa == hampa": True,
            "hampa == impossible": False,
            '"a" == "a"': True,
            "ril != impossible": True,
        }
        for case, expected in cases.items():
            self.assertIs(expected, self.value_of(case), case)

    def test_truthiness(self):
        cases = {"!hampa": True, "!impossible": True, "!ril": False, "!0": False, '!""': False}
        for case, expected in cases.items():
            self.assertIs(expected, self.value_of(case), case)
        self.assertFalse(is_truthy(None))
        self.assertTrue(is_truthy(0.0))

    def test_spill(self):
        self.run_source('literally x itu 10\nspill x\nspill 2.5\nspill "hi"\nspill ril\nspill impossible\nspill hampa')
        self.assertEqual(["10", "2.5", "hi", "ril", "impossible", "hampa"], self.printed)

    def test_declaration_without_initializer(self):
        self.run_source("literally x\nspill x")
        self.assertEqual(["hampa"], self.printed)

    def test_assignment(self):
        self.run_source("literally x itu 1\nliterally y\ny itu x itu 5\nspill x + y")
        self.assertEqual(["10"], self.printed)

    def test_assign_undeclared(self):
        self.assert_runtime_error("y itu 5", "Undefined variable 'y'.")
        self.assertFalse(self.error_handler.had_error)

    def test_read_undeclared(self):
        self.assert_runtime_error("spill nope", "Undefined variable 'nope'.")

    def test_runtime_error_stops_run(self):
        self.run_source('spill 1\nspill -"x"\nspill 3')
        self.assertEqual(["1"], self.printed)
        self.assertTrue(self.error_handler.had_runtime_error)
        self.assertIn("2:7", self.error_handler.stream.getvalue())

    def test_globals_persist_between_runs(self):
        self.run_source("literally counter itu 1")
        self.run_source("counter itu counter + 1")
        self.run_source("spill counter")
        self.assertEqual(["2"], self.printed)

    def test_if_branches(self):
        source = (
            "kalo x > 5\n"
            "  spill \"big\"\n"
            "perhaps x > 1\n"
            "  spill \"medium\"\n"
            "perhaps x > 0\n"
            "  spill \"small\"\n"
            "kalogak\n"
            "  spill \"none\"\n"
            "udahan\n"
        )
        for value, expected in ((10, "big"), (3, "medium"), (1, "small"), (0, "none")):
            self.printed.clear()
            self.run_source(f"literally x itu {value}\n" + source)
            self.assertEqual([expected], self.printed, value)

    def test_if_without_else(self):
        self.run_source("kalo impossible\nspill 1\nudahan\nspill 2")
        self.assertEqual(["2"], self.printed)

    def test_shadowing_in_block(self):
        source = (
            "literally x itu 10\n"
            "kalo ril\n"
            "  literally x itu 1\n"
            "  spill x\n"
            "udahan\n"
            "spill x\n"
        )
        self.run_source(source)
        self.assertEqual(["1", "10"], self.printed)

    def test_assignment_in_block_reaches_outer(self):
        self.run_source("literally x itu 1\nkalo ril\n  x itu 2\nudahan\nspill x")
        self.assertEqual(["2"], self.printed)

    def test_block_scope_is_dropped(self):
        self.assert_runtime_error("kalo ril\n  literally inner itu 1\nudahan\nspill inner",
                                  "Undefined variable 'inner'.")

    def test_scope_restored_after_runtime_error(self):
        self.run_source("kalo ril\n  literally inner itu 1\n  spill -ril\nudahan")
        self.assertIs(self.evaluator.globals, self.evaluator.environment)

    def test_long_sum(self):
        self.run_source("spill 0\nspill " + " + ".join(["1"] * 1000) + "\nspill 2")
        self.assertTrue(self.error_handler.had_runtime_error)
        self.assertIn("Expression nested too deeply.", self.error_handler.stream.getvalue())
        self.assertEqual(["0"], self.printed)

    def test_long_sum_in_block(self):
        self.run_source("kalo ril\n  literally x itu " + " + ".join(["1"] * 1000) + "\nudahan")
        self.assertTrue(self.error_handler.had_runtime_error)
        self.assertIs(self.evaluator.globals, self.evaluator.environment)


class HelpersTestCase(unittest.TestCase):

    def test_stringify(self):
        cases = {None: "hampa", True: "ril", False: "impossible", 3.0: "3", -0.5: "-0.5", "s": "s",
                 math.inf: "inf", 1e15: "1000000000000000", 1e16: "1e+16", -1e300: "-1e+300", 2.5e-7: "2.5e-07"}
        for value, expected in cases.items():
            self.assertEqual(expected, stringify(value), value)

    def test_stringify_zero(self):
        # 0.0 and -0.0 compare equal, so they cannot share a case table
        self.assertEqual("0", stringify(0.0))
        self.assertEqual("-0", stringify(-0.0))

    def test_is_equal(self):
        self.assertTrue(is_equal(None, None))
        self.assertFalse(is_equal(1.0, True))
        self.assertFalse(is_equal(0.0, None))

    def test_statement_token(self):
        x = Token(TokenType.IDENTIFIER, "x", None, 3, 5)
        plus = Token(TokenType.PLUS, "+", None, 2, 4)
        self.assertIs(x, statement_token(tree.Var(x)))
        grouped = tree.Grouping(tree.Binary(tree.Literal(1.0), plus, tree.Variable(x)))
        self.assertIs(plus, statement_token(tree.Print(grouped)))
        self.assertIs(x, statement_token(tree.If(tree.Variable(x), [])))
        self.assertEqual(TokenType.EOF, statement_token(tree.Expression(tree.Literal(1.0))).type)


if __name__ == '__main__':
    unittest.main()
