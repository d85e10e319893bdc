#!/usr/bin/env -S python3 -B

from doubler.cli import pty_runner_main

if __name__ == "__main__":
    pty_runner_main()
