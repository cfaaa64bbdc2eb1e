"""Terminal board for the student dashboard."""
