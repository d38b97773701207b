from payments_cli.main import main

main()
