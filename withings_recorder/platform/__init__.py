"""Process-level plumbing: logging and adapter wiring."""
