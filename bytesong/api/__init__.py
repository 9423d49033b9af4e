"""BYTESONG HTTP API."""
