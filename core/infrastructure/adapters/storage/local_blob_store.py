"""
Local Blob Store Implementation.

Stores uploads on the local filesystem: temporary files under ``temp/``,
final files keyed by agent id.
"""
import asyncio
import logging
import uuid
from pathlib import Path
from typing import Union

from core.application.interfaces import IBlobStore


logger = logging.getLogger(__name__)

TEMP_PREFIX = "temp_"


class LocalBlobStore(IBlobStore):
    """Filesystem implementation of IBlobStore."""

    def __init__(self, root: Union[str, Path]):
        """
        Initialize blob store.

        Args:
            root: Directory holding the uploads
        """
        self.root = Path(root)
        self.temp_dir = self.root / "temp"
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"LocalBlobStore initialized at {self.root}")

    async def upload_temp_file(self, filename: str, content: bytes) -> str:
        temp_name = f"{TEMP_PREFIX}{uuid.uuid4().hex}{Path(filename).suffix.lower()}"
        await asyncio.to_thread((self.temp_dir / temp_name).write_bytes, content)
        logger.info(f"Uploaded temporary file {temp_name} ({len(content)} bytes)")
        return temp_name

    async def move_to_final(self, temp_name: str, agent_id: str) -> str:
        source = self.temp_dir / temp_name
        if not source.exists():
            raise FileNotFoundError(f"Temporary file {temp_name} not found")

        final_name = f"{agent_id}{source.suffix}"
        await asyncio.to_thread(source.replace, self.root / final_name)
        logger.info(f"Moved {temp_name} to {final_name}")
        return final_name

    async def delete_file(self, name: str, temp: bool = False) -> None:
        path = (self.temp_dir if temp else self.root) / name
        if not path.exists():
            logger.warning(f"File not found for deletion: {name}")
            return
        await asyncio.to_thread(path.unlink)
        logger.info(f"Deleted {'temporary ' if temp else ''}file {name}")

    def exists(self, name: str, temp: bool = False) -> bool:
        return ((self.temp_dir if temp else self.root) / name).exists()
