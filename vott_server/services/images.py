"""Read-only access to the bundled catalog and image directory."""
from __future__ import annotations

from pathlib import Path

import structlog

from vott_server.errors import AssetMissingError, BackendFailureError, UnsafePathError

logger = structlog.get_logger(__name__)


class ImageAssets:
    def __init__(self, asset_root: Path, catalog_path: Path) -> None:
        self.asset_root = Path(asset_root).resolve()
        self.catalog_path = Path(catalog_path)

    def read_catalog(self) -> str:
        try:
            return self.catalog_path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("images.catalog_unreadable", path=str(self.catalog_path), error=str(exc))
            raise BackendFailureError("Image catalog is unavailable") from exc

    def resolve_image(self, file_name: str) -> Path:
        """Return the path of ``file_name`` inside the asset root.

        Names carrying a separator or ``..`` are refused before touching the
        filesystem, and the resolved path must still sit under the root.
        """
        if not file_name or "/" in file_name or "\\" in file_name or "\x00" in file_name or ".." in file_name:
            raise UnsafePathError(f"Illegal image name: {file_name!r}")

        path = (self.asset_root / file_name).resolve()
        if path.parent != self.asset_root:
            raise UnsafePathError(f"Illegal image name: {file_name!r}")
        if not path.is_file():
            raise AssetMissingError(f"Image {file_name} not found")
        return path
