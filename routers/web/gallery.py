"""
Gallery routes: one page per gallery in content.json, images loaded by tag.
"""

from quart import current_app, render_template
import asyncio
import config
from services.content_service import load_content, find_gallery
from services.gallery_service import build_photo_items
from utils.logging_config import get_logger

logger = get_logger('Gallery')


def register_routes(blueprint):
    """Register gallery routes on the given blueprint."""

    @blueprint.route('/<gallery_id>')
    async def gallery(gallery_id):
        content = await asyncio.to_thread(load_content, config.CONTENT_FILE)
        gallery = find_gallery(content, f"/{gallery_id}")
        if gallery is None:
            return "Not Found", 404

        tag = gallery.get('cloudinaryTag')
        if tag:
            # The cache never raises; worst case this is an empty gallery
            image_cache = current_app.extensions['image_cache']
            images = await image_cache.get_images(tag, config.DEFAULT_IMAGE_LIMIT)
        else:
            logger.warning(f"Gallery {gallery_id!r} has no cloudinaryTag, rendering it empty")
            images = []

        photos = build_photo_items(images, current_app.extensions['cloudinary'])

        return await render_template(
            'gallery.html',
            content=content,
            gallery=gallery,
            photos=photos,
            page_title=f"{gallery.get('title', gallery_id)} - {content['site']['owner']['name']}",
        )
