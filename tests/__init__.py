"""Test-suite for the Instagram client."""
