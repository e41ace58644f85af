"""Feature modules for Symbol Quick Donation."""
