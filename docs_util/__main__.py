from docs_util.cli.app import main

main()
