"""Story selection.

The list endpoint returns summaries only, so selection happens on
``StorySummary`` objects before any per-story detail call is made.
"""

from typing import Iterable, Optional

from storyblok_mapi import StorySummary


def is_selected(
    story: StorySummary,
    content_types: Optional[list[str]] = None,
    skip_stories: Optional[list[str]] = None,
    only_stories: Optional[list[str]] = None,
) -> bool:
    """Return True if the story should be processed.

    Folders are never selected. ``content_types=None`` means all types; an
    empty ``only_stories`` means no restriction.
    """
    if story.is_folder:
        return False
    if content_types and story.content_type not in content_types:
        return False
    if skip_stories and story.full_slug in skip_stories:
        return False
    if only_stories and story.full_slug not in only_stories:
        return False
    return True


def select_stories(
    stories: Iterable[StorySummary],
    content_types: Optional[list[str]] = None,
    skip_stories: Optional[list[str]] = None,
    only_stories: Optional[list[str]] = None,
) -> list[StorySummary]:
    """Filter story summaries, preserving API order."""
    return [
        story
        for story in stories
        if is_selected(story, content_types, skip_stories, only_stories)
    ]
