"""Diff model, file tree, word diff, review state, theming, syntax colouring and styled diff lines for git branch review."""

__version__ = "0.1.5"