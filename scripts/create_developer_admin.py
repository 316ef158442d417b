"""Entry-point script delegating to sevadaar_admin.scripts.create_developer_admin."""

from __future__ import annotations

from sevadaar_admin.scripts.create_developer_admin import main


if __name__ == "__main__":  # pragma: no cover - manual invocation only
    raise SystemExit(main())
