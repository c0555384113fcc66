from npm_uninstall_unused.cli import main

main()
