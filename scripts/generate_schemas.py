# scripts/generate_schemas.py
"""Generate JSON schemas for all public Pydantic models."""

from __future__ import annotations

from pathlib import Path

from scrivener.core.logging import get_logger, init_logging
from scrivener.models.schemas import export_json_schemas

logger = get_logger(__name__)


def main() -> None:  # pragma: no cover - script entry
    """Generate schemas in the ``docs/schemas`` directory."""
    init_logging()
    root = Path(__file__).resolve().parents[1]
    written = export_json_schemas(root / "docs" / "schemas")
    logger.info("Wrote %d schemas to %s", len(written), root / "docs" / "schemas")


if __name__ == "__main__":  # pragma: no cover - CLI execution
    main()
