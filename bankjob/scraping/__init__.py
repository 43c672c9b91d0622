# Scraper interface
from .base import BaseScraper

__all__ = ['BaseScraper']
