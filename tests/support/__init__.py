"""Test doubles: fake browser page and fake Conduit frontend."""
