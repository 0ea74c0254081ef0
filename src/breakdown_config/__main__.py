"""Module entrypoint for ``python -m breakdown_config``."""

from __future__ import annotations

from breakdown_config.main import cli_entrypoint

if __name__ == "__main__":
    raise SystemExit(cli_entrypoint())
