"""Five for the Future contributor data aggregation from BuddyPress xprofile tables."""

__version__ = "0.1.0"
