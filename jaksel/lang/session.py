"""Session control for the Jaksel language: runs source text through scanner, parser and evaluator, either for a whole
file or one prompt entry at a time.
"""

import io

from jaksel.core.evaluator import Evaluator
from jaksel.core.parser import Parser
from jaksel.core.scanner import Scanner
from jaksel.core.token import TokenType
from jaksel.lang.error import ErrorHandler, GenericException


class Session:
    """Governs a Jaksel session. One evaluator is kept for the whole session, so variables survive between runs."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE, output=print):
        self.error_handler = error_handler
        self.error_handler.path = path

        self.path = path  # used for error messages
        self.evaluator = Evaluator(error_handler, output)

    def load(self):
        """Returns the contents of this session's file."""
        if self.path == Session.SH_FILE:
            raise GenericException("'{}' is a reserved filename", self.path)

        try:
            with open(self.path, "r", encoding="utf-8") as file:
                return file.read()
        except OSError:
            raise GenericException("'{}' could not be opened", self.path)

    def tokens(self, source):
        """Scans source. Lexical errors are reported to the error handler."""
        self.error_handler.register_source(source)
        return Scanner(source, self.error_handler).scan()

    def tree(self, source):
        """Scans and parses source. Returns the statement list, with None for statements that failed to parse."""
        return Parser(self.tokens(source), self.error_handler).parse()

    def run(self, source):
        """Runs source. Nothing is evaluated if scanning or parsing reported an error."""
        statements = self.tree(source)
        if self.error_handler.had_error:
            return
        self.evaluator.interpret(statements)

    @staticmethod
    def needs_continuation(text):
        """Whether text leaves a kalo block open, i.e. the prompt should keep reading lines before running it."""
        quiet = ErrorHandler(stream=io.StringIO())
        depth = 0
        for token in Scanner(text, quiet).scan():
            if token.type == TokenType.KALO:
                depth += 1
            elif token.type == TokenType.UDAHAN:
                depth -= 1
        return depth > 0
