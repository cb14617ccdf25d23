import sys
from typing import TextIO

CLEAR_SCREEN = "\033[H\033[2J"


class InputClosed(Exception):
    """Raised when standard input reaches end of file."""


class Console:
    """
    Line-based terminal I/O over injectable streams.

    Menus and tables go to stdout, failures to stderr.
    """

    def __init__(
            self,
            stdin: TextIO | None = None,
            stdout: TextIO | None = None,
            stderr: TextIO | None = None,
            clear_screen: bool = True
    ):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.clear_screen = clear_screen

    def write(self, text: str = "", end: str = "\n"):
        self.stdout.write(text + end)
        self.stdout.flush()

    def error(self, text: str):
        self.stderr.write(text + "\n")
        self.stderr.flush()

    def read_line(self, prompt: str = "") -> str:
        if prompt:
            self.write(prompt, end="")
        line = self.stdin.readline()
        if not line:
            raise InputClosed()
        return line.rstrip("\r\n")

    def read_int(self, prompt: str = "") -> int | None:
        """Reads one line as an integer, None when it is not a number."""
        try:
            return int(self.read_line(prompt).strip())
        except ValueError:
            return None

    def read_choice(self) -> int:
        # returns only once a number is given
        while True:
            choice = self.read_int("Please make your choice: ")
            if choice is not None:
                return choice
            self.write("Your input is invalid!")

    def wait(self):
        self.write("\nPress ENTER to continue")
        self.read_line()

    def clear(self):
        if self.clear_screen:
            self.write(CLEAR_SCREEN, end="")
