"""Tag index derived from the site map.

The tag vocabulary is the distinct set of tags used by any route. It drives
navigation and the generation of one listing page per tag.
"""

from blogstage.core.sitemap import Route, SiteMap


def compute_tag_vocabulary(site_map: SiteMap) -> frozenset[str]:
    """Collect the distinct tags used across a site map.

    Routes without metadata or without tags contribute nothing. Tags
    repeated within one route or shared between routes appear once.

    Args:
        site_map: Site map snapshot

    Returns:
        Set of tag strings, empty for an empty site map
    """
    return frozenset(tag for route in site_map.values() for tag in route.tags)


def sorted_tags(site_map: SiteMap) -> list[str]:
    """Return the tag vocabulary in display order."""
    return sorted(compute_tag_vocabulary(site_map), key=lambda tag: (tag.casefold(), tag))


def routes_for_tag(site_map: SiteMap, tag: str) -> list[Route]:
    """Select routes carrying a tag.

    Args:
        site_map: Site map snapshot
        tag: Tag to filter by (exact match)

    Returns:
        Matching routes in site map order
    """
    return [route for route in site_map.values() if tag in route.tags]


def build_tag_index(site_map: SiteMap) -> dict[str, list[Route]]:
    """Build a tag -> routes index for every tag in the vocabulary.

    Each route appears at most once per tag, even when its tag list
    repeats the tag.
    """
    index: dict[str, list[Route]] = {tag: [] for tag in sorted_tags(site_map)}
    for route in site_map.values():
        for tag in dict.fromkeys(route.tags):
            index[tag].append(route)
    return index
