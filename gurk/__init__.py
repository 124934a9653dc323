"""Core of a terminal Signal messenger client: data model, storage and attachments."""

__version__ = "0.7.1"