"""Textual front end for loadbar."""
