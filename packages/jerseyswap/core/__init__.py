"""Jersey Swap core library."""
