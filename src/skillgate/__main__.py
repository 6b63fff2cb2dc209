"""Allow ``python -m skillgate``."""

from skillgate.cli.main import main

raise SystemExit(main())
