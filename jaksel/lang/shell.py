"""Handles interactive/command-line mode for the Jaksel interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Jaksel interpreter shell."""
    intro = "Jaksel interpreter :: Python backend\nType 'help' for more information, 'exit' to quit."
    prompt = "> "
    secondary_prompt = ". "  # used while a kalo block is still open
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_lines = []

    def default(self, line):
        """Executes an arbitrary Jaksel line, or buffers it while a kalo block is open."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self._tmp_lines.append(line)
            source = "\n".join(self._tmp_lines)

            if self.sess.needs_continuation(source):
                self.prompt = self.secondary_prompt
                return

            self._tmp_lines = []
            self.prompt = self._tmp_prompt

            self.sess.run(source)
            self.sess.error_handler.reset()

    def parseline(self, line):
        """Everything but a bare 'help' or 'exit' is Jaksel source, including lines that look like cmd syntax."""
        if line == "EOF":
            return super().parseline(line)
        if self._tmp_lines or line.strip() not in ("help", "exit"):
            return None, None, line
        return super().parseline(line)

    def do_help(self, arg):
        """Doesn't return docs, but rather a short intro."""
        print("Welcome to the Jaksel interpreter!\n\n"
              "Declare a variable with 'literally x itu 10' and print it with 'spill x'.\n"
              "Values are numbers, \"strings\", ril, impossible and hampa. Conditionals\n"
              "span several lines:\n\n"
              "  kalo x > 5\n"
              "    spill \"big\"\n"
              "  perhaps x > 1\n"
              "    spill \"medium\"\n"
              "  kalogak\n"
              "    spill \"small\"\n"
              "  udahan\n\n"
              "Variables stay defined for the rest of the session.")

    def emptyline(self):
        """Do not repeat previous command on empty line, but keep blank lines inside an open block."""
        if self._tmp_lines:
            self._tmp_lines.append("")
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
