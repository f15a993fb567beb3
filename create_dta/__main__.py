from create_dta.cli import main

main()
