"""
Cloudinary admin API client.

Lists images by tag or folder and builds delivery URLs with on-the-fly
transformations. Without API credentials the list calls return placeholder
images so the site can be developed offline.
"""

import asyncio
import random
from datetime import datetime, timezone
from typing import List, Optional
from urllib.parse import quote

import requests

import config
from utils.logging_config import get_logger

logger = get_logger('Cloudinary')

API_BASE = "https://api.cloudinary.com/v1_1"
DELIVERY_BASE = "https://res.cloudinary.com"

RESPONSIVE_WIDTHS = (400, 600, 800, 1200)
IMAGE_SIZES = "(max-width: 480px) 100vw, (max-width: 768px) 50vw, (max-width: 1200px) 33vw, 25vw"

_MOCK_COLORS = ['6366f1', '8b5cf6', '06b6d4', '10b981', 'ef4444', 'f59e0b']


class CloudinaryError(Exception):
    """Cloudinary could not be reached or answered with something unusable."""


class CloudinaryClient:
    """Thin wrapper around the Cloudinary admin API (resources endpoints)."""

    def __init__(
        self,
        cloud_name: str,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout
        self.base_url = f"{API_BASE}/{cloud_name}"
        self.session = session or requests.Session()

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_secret)

    def _list_resources(self, url: str, params: dict) -> List[dict]:
        try:
            response = self.session.get(
                url,
                params=params,
                auth=(self.api_key, self.api_secret),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise CloudinaryError(f"Network error: {e}") from e

        if not response.ok:
            raise CloudinaryError(f"Cloudinary API error: {response.status_code} {response.reason}")

        try:
            data = response.json()
        except ValueError as e:
            raise CloudinaryError(f"Malformed response from Cloudinary: {e}") from e

        resources = data.get('resources') if isinstance(data, dict) else None
        if not isinstance(resources, list):
            raise CloudinaryError("Malformed response from Cloudinary: no resources list")
        return resources

    def get_images_by_tag(self, tag: str, max_results: int = 50) -> List[dict]:
        """
        List images carrying a tag.

        Raises:
            CloudinaryError: on network failure, non-2xx status or bad payload
        """
        if not self.has_credentials:
            logger.warning("Cloudinary API credentials not provided, using mock data")
            return self.get_mock_images(tag, max_results)

        url = f"{self.base_url}/resources/image/tags/{quote(tag, safe='')}"
        return self._list_resources(url, {
            'max_results': str(max_results),
            'resource_type': 'image',
        })

    def get_images_by_folder(self, folder: str, max_results: int = 50) -> List[dict]:
        """List uploaded images whose public id starts with ``folder``."""
        if not self.has_credentials:
            logger.warning("Cloudinary API credentials not provided, using mock data")
            return self.get_mock_images(folder, max_results)

        return self._list_resources(f"{self.base_url}/resources/image", {
            'type': 'upload',
            'prefix': folder,
            'max_results': str(max_results),
            'resource_type': 'image',
        })

    async def fetch_by_tag(self, tag: str, limit: int) -> List[dict]:
        """Async entry point used by the image cache; the HTTP call runs in a worker thread."""
        return await asyncio.to_thread(self.get_images_by_tag, tag, limit)

    def test_connection(self) -> dict:
        """Make a one-image request and report whether the credentials work."""
        if not self.has_credentials:
            return {"success": False, "message": "API credentials not provided"}

        try:
            response = self.session.get(
                f"{self.base_url}/resources/image",
                params={'max_results': '1', 'resource_type': 'image'},
                auth=(self.api_key, self.api_secret),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            return {"success": False, "message": f"Network error: {e}", "details": str(e)}

        if not response.ok:
            return {
                "success": False,
                "message": f"API error: {response.status_code} {response.reason}",
                "details": response.text,
            }

        try:
            data = response.json()
        except ValueError as e:
            return {"success": False, "message": f"Malformed response: {e}", "details": response.text}

        found = len(data.get('resources') or [])
        return {
            "success": True,
            "message": f"Connected successfully! Found {found} images in account",
            "details": data,
        }

    def get_optimized_url(
        self,
        public_id: str,
        width: Optional[int] = 800,
        height: Optional[int] = 600,
        crop: Optional[str] = 'fill',
        quality: Optional[str] = 'auto',
        format: Optional[str] = 'auto',
    ) -> str:
        """Delivery URL with resize/quality/format transformations. Falsy options are left out."""
        parts = [
            width and f"w_{width}",
            height and f"h_{height}",
            crop and f"c_{crop}",
            quality and f"q_{quality}",
            format and f"f_{format}",
        ]
        transformations = ','.join(p for p in parts if p)
        return f"{DELIVERY_BASE}/{self.cloud_name}/image/upload/{transformations}/{public_id}"

    def generate_responsive_image_set(self, public_id: str) -> str:
        """srcset value with 4:3 crops at each responsive width."""
        return ', '.join(
            f"{self.get_optimized_url(public_id, width=w, height=round(w * 0.75))} {w}w"
            for w in RESPONSIVE_WIDTHS
        )

    @staticmethod
    def get_image_sizes() -> str:
        return IMAGE_SIZES

    @staticmethod
    def get_mock_images(tag: str, count: int) -> List[dict]:
        """Placeholder records shaped like Cloudinary resources."""
        logger.info(f"Using mock images for {tag} tag")
        created_at = datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')
        label = quote(tag.upper())

        images = []
        for i in range(1, count + 1):
            color = _MOCK_COLORS[(i - 1) % len(_MOCK_COLORS)]
            images.append({
                'public_id': f"mock_{tag}_{i:02d}",
                'secure_url': f"https://via.placeholder.com/800x600/{color}/ffffff?text={label}+{i}",
                'width': 800,
                'height': 600,
                'format': 'jpg',
                'resource_type': 'image',
                'created_at': created_at,
                'bytes': 150000 + random.randint(0, 99999),
            })
        return images


def get_cloudinary() -> CloudinaryClient:
    """Build a client from the current configuration."""
    return CloudinaryClient(
        cloud_name=config.CLOUDINARY_CLOUD_NAME,
        api_key=config.CLOUDINARY_API_KEY or None,
        api_secret=config.CLOUDINARY_API_SECRET or None,
        timeout=config.REQUEST_TIMEOUT,
    )
