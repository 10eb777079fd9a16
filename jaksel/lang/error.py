"""Error handling for the Jaksel language.

Three kinds of errors come out of a run: lexical errors (reported by the scanner, which keeps going), parse errors
(reported by the parser, which recovers at the next statement) and runtime errors (raised by the evaluator, which stops
the run). All of them end up in an ErrorHandler, which renders them and flips one of its two flags. Errors that are
about the host rather than the program (unreadable file, reserved filename) are GenericExceptions.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates a host-level error message. Essentially a wrapper around str.format with the arguments bolded."""

    def __init__(self, msg, exprs=None, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))
        self.internal = internal
        super().__init__(self.msg)


class ParseError(Exception):
    """Raised inside the parser to unwind to the nearest statement boundary. Never escapes Parser.parse."""


class JakselRuntimeError(Exception):
    """Error raised while evaluating. token is the offending token, used for position reporting."""

    def __init__(self, token, message):
        super().__init__(message)
        self.token = token
        self.message = message


class UndefinedVariable(JakselRuntimeError):
    """Read of, or assignment to, a name that no enclosing scope defines."""

    def __init__(self, token):
        super().__init__(token, f"Undefined variable '{token.lexeme}'.")


class OperandTypeError(JakselRuntimeError):
    """Operator applied to operands of the wrong kind."""


class NestingTooDeep(JakselRuntimeError):
    """Expression too deep for the evaluator to walk."""

    def __init__(self, token):
        super().__init__(token, "Expression nested too deeply.")


class ErrorHandler:
    """Collects and renders diagnostics for one interpreter process.

    had_error is set by lexical and parse errors (the program cannot be loaded), had_runtime_error by runtime errors.
    The handler never exits the process on program errors: the caller reads the flags and decides. Can also be used as
    a context manager to turn stray host exceptions into rendered errors.
    """
    ERROR = "red"

    def __init__(self, path="<in>", stream=None, fatal=False):
        self.path = path
        self.stream = stream if stream is not None else sys.stderr
        self.fatal = fatal

        self.had_error = False
        self.had_runtime_error = False
        self.lines = []

    def register_source(self, source):
        """Registers the source currently being run, so diagnostics can quote the offending line."""
        self.lines = source.split("\n")

    def reset(self):
        """Clears both flags. Called by the shell between entries."""
        self.had_error = False
        self.had_runtime_error = False

    def lex_error(self, line, column, message):
        self._report(line, column, 1, "error", message)
        self.had_error = True

    def parse_error(self, token, message):
        if token.lexeme == "":
            message = f"{message} (at end)"
        elif token.lexeme == "\n":
            message = f"{message} (at end of line)"
        else:
            message = f"{message} (at '{token.lexeme}')"

        self._report(token.line, token.column, len(token.lexeme), "error", message)
        self.had_error = True

    def runtime_error(self, error):
        token = error.token
        self._report(token.line, token.column, len(token.lexeme), "runtime error", error.message)
        self.had_runtime_error = True

    def diagnose(self, line, column, length):
        """Returns the source line at line with the span [column, column + length) highlighted and underlined."""
        if not 0 < line <= len(self.lines):
            return None
        text = self.lines[line - 1].rstrip("\r")
        if not text.strip():
            return None

        start = max(column - 1, 0)
        end = min(start + max(length, 1), len(text)) if start < len(text) else start + 1

        diagnosis = "  " + text[:start]
        diagnosis += colored(text[start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += text[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def _report(self, line, column, length, kind, message):
        error_msg = colored(f"{self.path}:{line}:{column}: ", attrs=["bold"])
        error_msg += colored(f"{kind}: ", ErrorHandler.ERROR, attrs=["bold"]) + message
        print(error_msg, file=self.stream)

        diagnosis = self.diagnose(line, column, length)
        if diagnosis:
            print(diagnosis, file=self.stream)

    def throw(self, error):
        """Renders a GenericException. Exits with status 1 if fatal."""
        error_msg = ""
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg, file=self.stream)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
