"""
Services package.

This module provides the business logic behind the routes:
- cloudinary_client: Cloudinary admin API client (the image provider)
- cache_admin: Token-gated status/clear over the image cache
- content_service: content.json loading and validation
- gallery_service: Template-ready photo items for gallery pages

Service modules should be imported directly where needed, e.g.
`from services import content_service`
"""

__all__ = [
    'cache_admin',
    'cloudinary_client',
    'content_service',
    'gallery_service',
]
