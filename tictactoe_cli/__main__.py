from __future__ import annotations

from .router import main


if __name__ == "__main__":
    raise SystemExit(main())
