"""BYTESONG API routes."""
