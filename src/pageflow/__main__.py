from pageflow.cli import main

raise SystemExit(main())
