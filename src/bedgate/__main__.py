from bedgate.cli import main

raise SystemExit(main())
