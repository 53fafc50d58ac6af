from merkletree.cli import main

raise SystemExit(main())
