"""
Home and inspiration pages, plus redirects for retired routes.
"""

from quart import redirect, render_template
import asyncio
import config
from services.content_service import load_content, split_bio, flatten_inspiration


def register_routes(blueprint):
    """Register page routes on the given blueprint."""

    @blueprint.route('/')
    async def home():
        content = await asyncio.to_thread(load_content, config.CONTENT_FILE)
        owner = content['site']['owner']

        paragraphs = split_bio(owner.get('bio', ''))
        # First word of the bio is rendered bold
        lead_word, lead_rest = '', ''
        if paragraphs:
            lead_word, _, lead_rest = paragraphs[0].partition(' ')

        return await render_template(
            'index.html',
            content=content,
            lead_word=lead_word,
            lead_rest=lead_rest,
            paragraphs=paragraphs[1:],
            hobbies=owner.get('hobbies') or [],
            quote=owner.get('quote'),
            page_title=owner.get('name', config.APP_NAME),
        )

    @blueprint.route('/inspo')
    @blueprint.route('/inspiration')
    async def inspiration():
        content = await asyncio.to_thread(load_content, config.CONTENT_FILE)
        return await render_template(
            'inspo.html',
            content=content,
            inspiration=content['inspiration'],
            items=flatten_inspiration(content),
            page_title=f"{content['inspiration'].get('title', 'Inspiration')} - {content['site']['owner']['name']}",
        )

    @blueprint.route('/content')
    @blueprint.route('/links')
    async def legacy_links():
        return redirect('/inspo', code=301)
