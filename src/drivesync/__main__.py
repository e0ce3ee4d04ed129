from drivesync.cli import main

main()
