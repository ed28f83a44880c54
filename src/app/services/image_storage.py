from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class StoredImage:
    url: str
    file_id: str
    name: str


class IImageStorage(ABC):
    """External image hosting"""

    @abstractmethod
    async def upload(self, content: bytes, file_name: str, folder: str) -> StoredImage:
        """Upload an image and return its public URL"""
        pass

    @abstractmethod
    async def download(self, url: str) -> bytes:
        """Fetch a previously uploaded image"""
        pass
