"""SpaceAPI endpoint: serves and updates a hackerspace status document."""

__version__ = "1.0.0"
