"""Blogstage - a small blog site with tag-indexed listing pages."""
