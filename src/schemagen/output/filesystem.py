import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class FileSystemSink:
    """Writes generated modules into an output directory.

    Implements the ``OutputSink`` protocol.
    """

    def __init__(self, output_dir: str | Path) -> None:
        self.output_dir = Path(output_dir)

    def prepare(self) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write(self, name: str, content: str) -> None:
        path = self.output_dir / name
        path.write_text(content, encoding="utf-8", newline="\n")
        logger.debug("Wrote %s (%d bytes)", path, len(content))
