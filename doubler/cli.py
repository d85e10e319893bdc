import logging
import sys
from logging import basicConfig as logging_basicConfig
from logging import getLogger

from doubler.config import RunnerConfig
from doubler.errors import RunnerError
from doubler.program import run_program
from doubler.runner import render_output, run_in_pty

logger = getLogger(__name__)


def setup_logging(level: int = logging.INFO):
    logging_basicConfig(
        format='DOUBLER_%(levelname)s: %(message)s',
        force=True,  # Ensure logging is set up even if already configured
        level=level,
    )


def main():
    """Double a number read from stdin. Takes no arguments."""
    setup_logging()
    sys.exit(run_program(sys.stdin, sys.stdout))


def pty_runner_main():
    """Run an executable in a PTY and print its final terminal state."""
    setup_logging()

    if len(sys.argv) != 2:
        logger.error("Usage: <config_path|config_json_blob>")
        sys.exit(1)

    cfg_input = sys.argv[1]

    try:
        config = RunnerConfig.load_configuration(cfg_input)
    except Exception as e:
        logger.error(f"Configuration: {e}")
        sys.exit(1)

    if config.debugging:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        captured = run_in_pty(config)
    except (FileNotFoundError, RunnerError) as e:
        logger.error(f"Error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt: Quitting...")
        sys.exit(1)

    sys.stdout.buffer.write(render_output(config, captured))
    sys.stdout.flush()
    logger.debug("PTY run completed successfully.")
