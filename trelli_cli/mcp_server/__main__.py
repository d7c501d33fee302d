from trelli_cli.mcp_server import main

main()
