"""Database engine, session and time helpers."""
