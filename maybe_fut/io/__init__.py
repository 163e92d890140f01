"""Read, Write and Seek interfaces with buffered reader and writer adapters."""

__all__ = ["buf_reader", "buf_writer", "traits"]