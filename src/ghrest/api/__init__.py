"""Command layer: one function per REST endpoint, built on ghrest.core."""
