"""Infrastructure adapters: persistence, realtime sessions, security and storage."""
