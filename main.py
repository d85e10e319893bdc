#!/usr/bin/env -S python3 -B

from doubler.cli import main

if __name__ == "__main__":
    main()
