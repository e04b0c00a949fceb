"""Allow ``python -m srs_gen``."""

from srs_gen.cli import main

raise SystemExit(main())
