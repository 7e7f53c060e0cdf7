"""Git Gallery: session event playback for repository visualizations."""

__version__ = "0.1.0"
