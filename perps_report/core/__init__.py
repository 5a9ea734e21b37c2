"""Protocol cores and shared calculation / position packages."""
