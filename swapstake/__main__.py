from swapstake.cli import main

raise SystemExit(main())
