"""
Rwanda Cinema content service.

Builds the Agasobanuye listing page and the site's XML sitemaps from
markdown files kept in GitHub repositories.
"""

__version__ = "1.0.0"
__author__ = "Rwanda Cinema"
