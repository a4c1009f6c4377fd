from coldsize.cli.main import main

main()
