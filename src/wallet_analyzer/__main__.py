from wallet_analyzer.server import main

main()
