import sys

from seedrunner.cli import run_cli

sys.exit(run_cli())
