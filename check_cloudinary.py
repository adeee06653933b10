#!/usr/bin/env python3
"""
Check the Cloudinary configuration and make one test request.

Usage:
    python check_cloudinary.py [tag]

With a tag, also lists how many images carry it.
"""
import sys

import config
from services.cloudinary_client import CloudinaryError, get_cloudinary
from utils.logging_config import setup_logging


def main():
    setup_logging(level=config.LOG_LEVEL)
    client = get_cloudinary()

    print("Cloudinary Status:")
    print(f"  Cloud Name: {config.CLOUDINARY_CLOUD_NAME or 'not set'}")
    print(f"  API Key:    {'set' if config.CLOUDINARY_API_KEY else 'not set'}")
    print(f"  API Secret: {'set' if config.CLOUDINARY_API_SECRET else 'not set'}")

    result = client.test_connection()
    print(f"\n{'OK' if result['success'] else 'FAILED'}: {result['message']}")
    if not result['success']:
        return 1

    if len(sys.argv) > 1:
        tag = sys.argv[1]
        try:
            images = client.get_images_by_tag(tag, config.DEFAULT_IMAGE_LIMIT)
        except CloudinaryError as e:
            print(f"Listing tag {tag!r} failed: {e}")
            return 1
        print(f"Tag {tag!r}: {len(images)} images")

    return 0


if __name__ == '__main__':
    sys.exit(main())
