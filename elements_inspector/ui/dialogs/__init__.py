"""Dialogs and popup helpers for the Tk front-end."""
