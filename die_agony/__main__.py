from .solver import main

raise SystemExit(main())
