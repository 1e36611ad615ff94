"""Launcher building blocks: paths, storage, themes, apps, text input, hotkeys, actions and loaders."""

__version__ = "0.1.3"