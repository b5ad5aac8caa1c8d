#!/usr/bin/env python3
"""
Web server for the Rwanda Cinema content service.

Serves the Agasobanuye listing/search page and the XML sitemaps. Every
request loads its data from GitHub from scratch.
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional

from flask import Flask, Response, jsonify, request
from flask_cors import CORS

from .config.config_manager import ConfigManager
from .listing.listing_service import ListingService
from .models.config import Config
from .rendering.page_renderer import PageRenderer, ERROR_CACHE_CONTROL
from .repository.catalog_source import CatalogSource
from .sitemap.sitemap_builder import SitemapBuilder, XML_CONTENT_TYPE, SITEMAP_CACHE_CONTROL
from .utils.error_handler import ErrorHandler, ErrorCategory, ConfigurationError

logger = logging.getLogger(__name__)

SERVICE_NAME = 'rwanda-cinema'
RECENT_ERRORS_SHOWN = 10


def create_app(
    config_manager: Optional[ConfigManager] = None,
    catalog_source: Optional[CatalogSource] = None,
    error_handler: Optional[ErrorHandler] = None
) -> Flask:
    """
    Create the Flask application.

    Args:
        config_manager: Configuration source (default locations if None)
        catalog_source: Loader of videos and sitemap entries (built from the
            configuration if None)
        error_handler: Shared error bookkeeping

    Returns:
        Configured Flask app

    Raises:
        ConfigurationError: If the configuration cannot be loaded
    """
    config_manager = config_manager or ConfigManager()
    try:
        config: Config = config_manager.get_config()
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    error_handler = error_handler or ErrorHandler()
    catalog_source = catalog_source or CatalogSource(config, error_handler)

    renderer = PageRenderer()
    listing_service = ListingService(
        latest_limit=config.latest_per_type,
        content_types=config.content_types
    )

    app = Flask(__name__)
    CORS(app)

    def base_url() -> str:
        return config.public_base_url or request.host_url.rstrip('/')

    def sitemap_builder() -> SitemapBuilder:
        return SitemapBuilder(base_url(), max_urls_per_sitemap=config.max_urls_per_sitemap)

    def xml_response(body: str) -> Response:
        return Response(
            body,
            status=200,
            headers={
                'Content-Type': XML_CONTENT_TYPE,
                'Cache-Control': SITEMAP_CACHE_CONTROL,
            }
        )

    def sitemap_error(e: Exception) -> Response:
        error_handler.handle_error(e, {'path': request.path}, category=ErrorCategory.RENDERING)
        return Response('Error generating sitemap', status=500, mimetype='text/plain')

    @app.route('/health', methods=['GET'])
    def health_check():
        """Health check endpoint"""
        return jsonify({
            'status': 'healthy',
            'service': SERVICE_NAME,
            'timestamp': datetime.now().isoformat(),
            'errors': error_handler.get_statistics(),
            'recent_errors': [info.to_dict() for info in error_handler.get_recent_errors(RECENT_ERRORS_SHOWN)],
        })

    @app.route('/agasobanuye', methods=['GET'])
    @app.route('/agasobanuye/', methods=['GET'])
    @app.route('/agasobanuye/<path:subpath>', methods=['GET'])
    def agasobanuye(subpath: str = ''):
        """Homepage and search/filter results of translated videos."""
        site_url = base_url()
        try:
            records = asyncio.run(catalog_source.load_videos())
            logger.info(f"Loaded {len(records)} videos from GitHub")

            listing = listing_service.build_homepage(
                records,
                base_url=site_url,
                search=request.args.get('search', ''),
                translator=request.args.get('translator', ''),
                content_type=request.args.get('type', '')
            )
            rendered = renderer.homepage_response(listing)
        except Exception as e:
            error_handler.handle_error(e, {'path': request.path, 'query': request.query_string.decode()})
            try:
                rendered = renderer.error_response(site_url)
            except Exception as render_error:
                error_handler.handle_error(render_error, {'path': request.path}, category=ErrorCategory.RENDERING)
                return Response(
                    'Error loading content',
                    status=500,
                    mimetype='text/plain',
                    headers={'Cache-Control': ERROR_CACHE_CONTROL}
                )

        return Response(rendered.body, status=rendered.status, headers=rendered.headers)

    @app.route('/sitemap.xml', methods=['GET'])
    def sitemap_main():
        """Flat sitemap, or a sitemap index for large sites."""
        try:
            entries = asyncio.run(catalog_source.load_sitemap_entries())
            return xml_response(sitemap_builder().build_main(entries))
        except Exception as e:
            return sitemap_error(e)

    @app.route('/sitemap-static.xml', methods=['GET'])
    def sitemap_static():
        try:
            return xml_response(sitemap_builder().build_static())
        except Exception as e:
            return sitemap_error(e)

    @app.route('/sitemap-categories.xml', methods=['GET'])
    def sitemap_categories():
        try:
            entries = asyncio.run(catalog_source.load_sitemap_entries())
            return xml_response(sitemap_builder().build_categories(entries))
        except Exception as e:
            return sitemap_error(e)

    @app.route('/sitemap-<int:number>.xml', methods=['GET'])
    def sitemap_chunk(number: int):
        """Numbered chunk of video URLs referenced by the sitemap index."""
        try:
            entries = asyncio.run(catalog_source.load_sitemap_entries())
            body = sitemap_builder().build_chunk(entries, number)
        except Exception as e:
            return sitemap_error(e)

        if body is None:
            return Response('Sitemap not found', status=404, mimetype='text/plain')
        return xml_response(body)

    return app


def run_api_server(host: str = '0.0.0.0', port: int = 8788, config_manager: Optional[ConfigManager] = None):
    """Run the web server"""
    app = create_app(config_manager)
    logger.info(f"Starting web server on {host}:{port}")
    app.run(host=host, port=port, debug=False)


if __name__ == '__main__':
    from .utils.logging_config import setup_application_logging
    setup_application_logging()
    run_api_server()
