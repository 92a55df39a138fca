import base64
import logging
import httpx
from league_backend.core.config import settings

logger = logging.getLogger(__name__)


class ImageUploadError(Exception):
    pass


class ImageUploadService:
    """Hands images to imgBB and returns the hosted URL."""

    def __init__(self, api_key: str = None, upload_url: str = None, client: httpx.AsyncClient = None):
        self.api_key = api_key or settings.IMGBB_API_KEY
        self.upload_url = upload_url or settings.IMGBB_UPLOAD_URL
        self.client = client

    async def upload(self, filename: str, content: bytes) -> str:
        if not self.api_key:
            raise ImageUploadError("IMGBB_API_KEY is not configured")

        data = {"key": self.api_key, "image": base64.b64encode(content).decode("ascii"), "name": filename}
        try:
            if self.client is not None:
                resp = await self.client.post(self.upload_url, data=data)
            else:
                async with httpx.AsyncClient(timeout=30) as client:
                    resp = await client.post(self.upload_url, data=data)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"[WARN] Image upload failed for {filename}: {e}")
            raise ImageUploadError(f"Failed to upload image: {e}") from e

        url = (resp.json().get("data") or {}).get("url")
        if not url:
            raise ImageUploadError("Failed to upload image")

        logger.info(f"📨 Uploaded {filename} → {url}")
        return url
