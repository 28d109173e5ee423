from scriptify.cli import main

raise SystemExit(main())
