"""Request construction and result processing (no network I/O)."""
