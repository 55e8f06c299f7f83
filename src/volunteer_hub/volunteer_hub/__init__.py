"""Volunteer Hub package.

Organized by feature modules (users, events, attendance, chat, photos) on top of
a whole-collection entity store, with a thin Flask controller layer.
"""
