"""Test suite for sfcsim."""
