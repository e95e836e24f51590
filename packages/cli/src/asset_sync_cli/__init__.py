"""Command-line interface for the Storyblok asset meta-data sync."""
