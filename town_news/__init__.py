"""Merged local news from several syndication feeds."""
