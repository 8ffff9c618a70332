"""Domain services (likability scoring)."""
