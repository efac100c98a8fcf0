"""Push notification dispatch for group membership events."""
