"""Render RSS 2.0 feeds as HTML pages."""
