"""Authorization and reference-data cache layer for the medical records portal."""
