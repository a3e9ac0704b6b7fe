"""Core pipeline pieces: errors, logging, events and the collator."""
