"""Reusable Tk widgets: the element row list and the search bar."""

__all__: list[str] = []
