import time
from logging import getLogger

import pexpect

from doubler.config import RunnerConfig
from doubler.errors import RunnerError
from doubler.models import OutputFormat
from doubler.terminal import Terminal, filter_osc_sequences, normalize_line_endings

logger = getLogger(__name__)

STARTUP_DELAY = 0.1 # let the program start before typing
POLL_INTERVAL = 0.05
SETTLE_DELAY = 0.2 # final output after exit
COLLECT_WINDOW = 0.3
READ_SIZE = 4096


# PtySession drives a single child process through a pseudo terminal and keeps everything it writes.
class PtySession:
    def __init__(self, config: RunnerConfig):
        self.config = config
        self.process: pexpect.spawn | None = None
        self.output = bytearray()
        self.eof = False

    def start(self) -> "PtySession":
        try:
            self.process = pexpect.spawn(
                self.config.executable,
                args=self.config.args,
                env=self.config.child_env(),
                dimensions=(self.config.rows, self.config.cols),
            )
        except pexpect.exceptions.ExceptionPexpect as e:
            raise RunnerError(f"Failed to spawn command: {self.config.executable}: {e}")
        logger.info("Child process spawned")
        return self

    def send(self, data: bytes):
        self.process.send(normalize_line_endings(data))

    def drain(self, timeout: float = 0) -> int:
        """Read whatever output is ready, waiting at most `timeout` for the first chunk."""
        if self.eof:
            return 0
        read = 0
        while True:
            try:
                chunk = self.process.read_nonblocking(size=READ_SIZE, timeout=timeout)
            except pexpect.exceptions.TIMEOUT:
                break
            except pexpect.exceptions.EOF:
                self.eof = True
                break
            self.output += chunk
            read += len(chunk)
            timeout = 0
        return read

    def wait(self, timeout_ms: int) -> bool:
        """Wait for the child to exit, killing it on timeout. Returns True if it exited on its own."""
        deadline = time.monotonic() + timeout_ms / 1000
        while self.process.isalive():
            if time.monotonic() > deadline:
                logger.info("Timeout reached, killing process")
                self.process.terminate(force=True)
                return False
            if self.eof:
                # terminal closed but the child lives on, nothing to read
                time.sleep(POLL_INTERVAL)
            else:
                self.drain(timeout=POLL_INTERVAL)
        logger.info("Child process exited")
        return True

    def collect(self):
        time.sleep(SETTLE_DELAY)
        deadline = time.monotonic() + COLLECT_WINDOW
        while time.monotonic() < deadline and not self.eof:
            self.drain(timeout=0.01)

    def close(self):
        if self.process is not None:
            self.process.close(force=True)


def read_input_file(path: str | None, what: str) -> bytes | None:
    if path is None:
        return None
    try:
        with open(path, 'rb') as f:
            return f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Failed to read {what}: {path}")


def run_in_pty(config: RunnerConfig) -> bytes:
    """
    Run the configured executable in a PTY and capture its terminal output.

    Args:
        config: runner configuration, the executable and its inputs

    Returns:
        Every byte the child wrote to the terminal, unfiltered

    Raises:
        FileNotFoundError: If the stdin or keyboard input file is missing
        RunnerError: If the child could not be spawned
    """
    logger.info("Starting PTY runner...")
    logger.info(f"Executable: {config.executable}")

    # read inputs up front so a missing file fails before anything is spawned
    stdin_content = read_input_file(config.stdin_file, "stdin file")
    keyboard_input = read_input_file(config.keyboard_input, "keyboard input")

    session = PtySession(config).start()
    try:
        if stdin_content is not None:
            session.send(stdin_content)

        time.sleep(STARTUP_DELAY)

        if keyboard_input is not None:
            session.send(keyboard_input)

        session.wait(config.timeout)
        session.collect()
    finally:
        session.close()

    return bytes(session.output)


def hex_dump(data: bytes) -> str:
    lines = []
    for i in range(0, len(data), 16):
        lines.append(' '.join(f"{b:02X}" for b in data[i:i + 16]))
    return '\n'.join(lines)


def render_output(config: RunnerConfig, captured: bytes) -> bytes:
    """Replay the captured bytes on a screen and render it in the configured format."""
    logger.info(f"Captured {len(captured)} bytes of output")

    if config.debug_raw:
        logger.info(f"Raw output bytes:\n{hex_dump(captured)}")

    output = OutputFormat(config.output)
    if output == OutputFormat.RAW:
        return captured

    # OS specific sequences (e.g. window titles) would make runs differ between platforms
    filtered = filter_osc_sequences(captured)
    logger.info(f"After filtering OSC: {len(filtered)} bytes")

    screen = Terminal(rows=config.rows, cols=config.cols).feed(filtered)
    if output == OutputFormat.HEX:
        return screen.to_hex().encode('ascii')
    return screen.to_text().encode('utf-8')
