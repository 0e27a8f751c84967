"""Engineering resource scheduling and conflict detection."""
