from shipkit.cli.app import main

main()
