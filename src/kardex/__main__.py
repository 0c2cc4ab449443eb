from kardex.cli import main

main()
