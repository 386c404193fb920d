"""Test suite for jerseyswap.

Test Structure:
- unit/: Unit tests for individual components
  - media/: Data URI codec and file adapters
  - prompts/: Prompt builder and operation models
  - generation/: Generation client, backends and factory
  - workflow/: State machine and processing status
  - config/, utils/, cli/: Ambient stack
- conftest.py: Shared fixtures and test helpers
"""
