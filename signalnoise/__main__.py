from signalnoise.cli import main

main()
