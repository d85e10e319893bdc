class ReadError(Exception):
    """Input could not be read as an integer. Not recoverable: the program stops."""
    message = "Error reading input"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ModeReadError(ReadError):
    message = "Error: Invalid mode"


class NumberReadError(ReadError):
    message = "Error reading number"


class RunnerError(Exception):
    """The PTY runner could not start or drive the child process."""
