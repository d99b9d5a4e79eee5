"""Vault module - markdown notes whose tags live in their front matter.

The vault is the host side of tag events: it reads a note, lets the
tag event handler compute the new text, and writes it back.
"""

from tagvault.vault.notes import NoteTagger, list_notes, read_note, write_note

__all__ = [
    "NoteTagger",
    "list_notes",
    "read_note",
    "write_note",
]
