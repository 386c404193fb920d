"""Jersey Swap command-line interface."""
