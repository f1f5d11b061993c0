# ABOUTME: Content store backed by an unpacked game asset tree on the local filesystem
# ABOUTME: Resolves store paths under a root directory and maps I/O failures onto store errors

from pathlib import Path, PurePosixPath

from voiceline_extractor.store.base import ResourceNotFound, ResourceReadError, StoreUnavailableError
from voiceline_extractor.utils.logging import get_logger

logger = get_logger(__name__)


class LooseFileStore:
    """Serve store paths from a directory that mirrors the archive layout."""

    def __init__(self, root: str | Path):
        root = Path(root)
        if not root.is_dir():
            raise StoreUnavailableError(f"Game data directory {root} does not exist")
        self.root = root

    @classmethod
    def from_game_directory(cls, game_directory: str | Path) -> "LooseFileStore":
        """Open the store for a game installation.

        Uses ``<game_directory>/game/sqpack`` when present, otherwise treats the
        directory itself as the store root.
        """
        game_directory = Path(str(game_directory).replace("\\", "/"))
        sqpack = game_directory / "game" / "sqpack"
        root = sqpack if sqpack.is_dir() else game_directory
        logger.debug("Opening loose file store", root=str(root))
        return cls(root)

    def _resolve(self, path: str) -> Path:
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts:
            raise ValueError(f"Store path must be relative and stay inside the store: {path!r}")
        return self.root.joinpath(*relative.parts)

    def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def fetch(self, path: str) -> bytes:
        target = self._resolve(path)
        try:
            return target.read_bytes()
        except (FileNotFoundError, NotADirectoryError, IsADirectoryError) as e:
            raise ResourceNotFound(path) from e
        except PermissionError as e:
            raise ResourceReadError(path, str(e)) from e
