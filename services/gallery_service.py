"""
Turns cached Cloudinary image records into what the gallery template renders.
"""

import re
from typing import List

from services.cloudinary_client import CloudinaryClient


def alt_text(public_id: str) -> str:
    """Readable alt text from a public id: folder prefix dropped, underscores to spaces."""
    return re.sub(r'^.*/', '', public_id or '').replace('_', ' ')


def build_photo_items(images: List[dict], client: CloudinaryClient) -> List[dict]:
    """Template-ready photo dicts with a 4:3 main URL, srcset and sizes."""
    sizes = client.get_image_sizes()
    items = []
    for image in images:
        public_id = image.get('public_id')
        if not public_id:
            continue
        items.append({
            "src": client.get_optimized_url(public_id),
            "srcset": client.generate_responsive_image_set(public_id),
            "sizes": sizes,
            "alt": alt_text(public_id),
            "width": image.get('width'),
            "height": image.get('height'),
        })
    return items
