from trelli_cli.cli import main

main()
