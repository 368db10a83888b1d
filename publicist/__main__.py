from publicist.cli.app import main

main()
