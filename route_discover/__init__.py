"""Route Discover: build a routes config from @route handler annotations."""

__version__ = "0.1.0"
