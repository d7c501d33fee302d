"""Run trelli-cli from a source checkout: python trelli.py <command> ..."""

from trelli_cli.cli import main

if __name__ == "__main__":
    main()
