from envali.cli import main

raise SystemExit(main())
