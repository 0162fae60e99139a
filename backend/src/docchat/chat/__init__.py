"""Question answering over caller-supplied documentation."""
