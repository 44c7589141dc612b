"""Collaborators that fetch and read replacement bulletins."""
