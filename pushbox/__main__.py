from pushbox.cli import main

main()
