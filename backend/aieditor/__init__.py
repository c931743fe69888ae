"""AI-assisted three-buffer web editor: live preview composition and AI rewrites."""

__version__ = "0.1.0"
