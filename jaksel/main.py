"""Runs Jaksel files or starts the interactive shell. Also uses the error handling context manager. Called from the
jaksel console script.

Exit codes follow the sysexits convention: 65 when the program could not be loaded (lexical or syntax error), 70 when
it failed at runtime.
"""

import argparse
import sys

from jaksel.core.printer import AstPrinter
from jaksel.lang.error import ErrorHandler
from jaksel.lang.session import Session
from jaksel.lang.shell import Shell


EX_DATAERR = 65
EX_SOFTWARE = 70


def main(argv=None):
    """Runs the Jaksel interpreter."""
    with ErrorHandler(fatal=True) as error_handler:
        parser = argparse.ArgumentParser(prog="jaksel", description="Jaksel language interpreter.")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--tokens", action="store_true", help="print the token stream instead of running")
        parser.add_argument("--ast", action="store_true", help="print the syntax tree instead of running")
        args = parser.parse_args(argv)

        if args.file is None:
            error_handler.fatal = False
            Shell(Session(error_handler, Session.SH_FILE)).cmdloop()
            return

        sess = Session(error_handler, args.file)
        source = sess.load()

        if args.tokens:
            for token in sess.tokens(source):
                print(token)
        elif args.ast:
            print(AstPrinter().print_all(sess.tree(source)))
        else:
            sess.run(source)

        if error_handler.had_error:
            sys.exit(EX_DATAERR)
        if error_handler.had_runtime_error:
            sys.exit(EX_SOFTWARE)


if __name__ == "__main__":
    main()
