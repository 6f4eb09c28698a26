from swapgate.main import main

main()
