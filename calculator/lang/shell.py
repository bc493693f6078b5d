"""Read-eval-print loop for the calculator. Statements are not line-based (one line can hold several statements and
one statement can span several lines), so the loop reads from the session's token stream rather than using cmd.
"""

import sys

from calculator.lang.numerical import DEFAULT_PRECISION, format_value


class Shell:
    """Calculator shell."""
    intro = ("Calculator :: Python backend\n"
             "End statements with ';'. Declare variables with 'L name = value;', type 'q' to quit.")
    prompt = "> "

    def __init__(self, sess, stdout=None, prompt=True, precision=DEFAULT_PRECISION):
        self.sess = sess
        self.stdout = stdout if stdout is not None else sys.stdout
        self.precision = precision

        if not prompt:
            self.prompt = ""

        self.sess.error_handler.fatal = False  # errors in statements are reported, not fatal

    def write(self, text):
        self.stdout.write(text)
        self.stdout.flush()

    def onecmd(self):
        """Evaluates one statement and prints its result or error. Returns True if the session is over."""
        self.write(self.prompt)

        result = self.sess.step()
        if result is None:
            return True

        if result.ok:
            self.write(f"= {format_value(result.value, self.precision)}\n")
        else:
            self.sess.error_handler.throw(result.error)
            self.sess.recover()
        return False

    def cmdloop(self):
        """Runs statements until quit or end of input."""
        interactive = self.sess.interactive
        if interactive and self.intro:
            self.write(self.intro + "\n")

        stop = False
        while not stop:
            stop = self.onecmd()

        if interactive:
            self.write("\n")
