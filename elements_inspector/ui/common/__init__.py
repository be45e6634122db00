"""Shared Tk helpers: colours, clipboard and decoration images."""
