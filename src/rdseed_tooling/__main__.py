from rdseed_tooling.cli.main import main

main()
