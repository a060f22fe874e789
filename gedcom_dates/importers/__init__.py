"""Readers that feed GEDCOM DATE payloads into the date parser."""
